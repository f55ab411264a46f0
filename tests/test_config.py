"""Tests for config — data directory resolution and chart defaults."""

import os
from pathlib import Path
from unittest import mock

import config


class TestGetDataDir:
    """Test get_data_dir() resolution priority."""

    def setup_method(self):
        """Reset cached value before each test."""
        config._reset_data_dir()

    def teardown_method(self):
        """Reset cached value after each test."""
        config._reset_data_dir()

    def test_default_is_home_bullet_chart(self):
        """With no env var or config key, returns ~/.bullet-chart."""
        with mock.patch.dict(os.environ, {}, clear=False):
            os.environ.pop("BULLET_CHART_DIR", None)
            with mock.patch("config.get", return_value=None):
                result = config.get_data_dir()
        assert result == Path.home() / ".bullet-chart"

    def test_env_var_overrides_default(self, tmp_path):
        target = tmp_path / "custom-dir"
        with mock.patch.dict(os.environ, {"BULLET_CHART_DIR": str(target)}):
            result = config.get_data_dir()
        assert result == target.resolve()

    def test_config_key_overrides_default(self, tmp_path):
        target = tmp_path / "config-dir"
        with mock.patch.dict(os.environ, {}, clear=False):
            os.environ.pop("BULLET_CHART_DIR", None)
            with mock.patch("config.get", side_effect=lambda k, d=None: str(target) if k == "data_dir" else d):
                result = config.get_data_dir()
        assert result == target.resolve()

    def test_env_var_beats_config_key(self, tmp_path):
        env_dir = tmp_path / "env-dir"
        cfg_dir = tmp_path / "cfg-dir"
        with mock.patch.dict(os.environ, {"BULLET_CHART_DIR": str(env_dir)}):
            with mock.patch("config.get", side_effect=lambda k, d=None: str(cfg_dir) if k == "data_dir" else d):
                result = config.get_data_dir()
        assert result == env_dir.resolve()

    def test_result_is_cached(self, tmp_path):
        """Second call returns cached value without re-reading env/config."""
        target = tmp_path / "cached-dir"
        with mock.patch.dict(os.environ, {"BULLET_CHART_DIR": str(target)}):
            first = config.get_data_dir()
        with mock.patch.dict(os.environ, {}, clear=False):
            os.environ.pop("BULLET_CHART_DIR", None)
            second = config.get_data_dir()
        assert first == second == target.resolve()

    def test_tilde_expansion(self):
        with mock.patch.dict(os.environ, {"BULLET_CHART_DIR": "~/my-charts"}):
            result = config.get_data_dir()
        assert "~" not in str(result)
        assert result == (Path.home() / "my-charts").resolve()


class TestGet:
    def test_dotted_key(self):
        with mock.patch.object(config, "_user_config", {"chart": {"width": 640}}):
            assert config.get("chart.width") == 640
            assert config.get("chart.height", 480) == 480

    def test_missing_key_default(self):
        with mock.patch.object(config, "_user_config", {}):
            assert config.get("colormap", "Viridis") == "Viridis"


class TestLoadConfig:
    def test_user_config_overlays_local(self, tmp_path):
        local = tmp_path / "local.json"
        user = tmp_path / "user.json"
        local.write_text('{"width": 300, "height": 200}', encoding="utf-8")
        user.write_text('{"width": 640}', encoding="utf-8")
        with mock.patch.object(config, "_LOCAL_CONFIG_PATH", local), \
                mock.patch.object(config, "CONFIG_PATH", user):
            merged = config._load_config()
        assert merged == {"width": 640, "height": 200}

    def test_broken_file_logs_warning(self, tmp_path, caplog):
        broken = tmp_path / "config.json"
        broken.write_text("{not json", encoding="utf-8")
        with mock.patch.object(config, "_LOCAL_CONFIG_PATH", broken), \
                mock.patch.object(config, "CONFIG_PATH", tmp_path / "missing.json"):
            with caplog.at_level("WARNING", logger="bullet-chart"):
                merged = config._load_config()
        assert merged == {}
        assert "Ignoring unreadable config file" in caplog.text
        assert str(broken) in caplog.text


class TestChartDefaults:
    def test_builtin_defaults(self):
        with mock.patch("config.get", side_effect=lambda k, d=None: d):
            defaults = config.get_chart_defaults()
            size = config.get_canvas_size()
        assert defaults == {"Colormap": "Viridis", "FaceColor": "black", "Orientation": "vertical"}
        assert size == (400, 500)

    def test_overrides(self):
        values = {"face_color": "#ff0000", "orientation": "horizontal", "width": "800"}
        with mock.patch("config.get", side_effect=lambda k, d=None: values.get(k, d)):
            defaults = config.get_chart_defaults()
            size = config.get_canvas_size()
        assert defaults["FaceColor"] == "#ff0000"
        assert defaults["Orientation"] == "horizontal"
        assert size == (800, 500)

    def test_chart_uses_configured_defaults(self):
        from bullet_chart import BulletChart

        values = {"face_color": "red", "orientation": "horizontal"}
        with mock.patch("config.get", side_effect=lambda k, d=None: values.get(k, d)):
            chart = BulletChart([1, 2], 1)
        assert chart.face_color == (1.0, 0.0, 0.0)
        assert chart.orientation == "horizontal"
