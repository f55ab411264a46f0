"""Tests for bullet_chart.logging — session log files and error reporting."""

import logging
from unittest import mock

from bullet_chart import InvalidLimitsError
from bullet_chart import logging as chart_logging


def _flush(logger):
    for handler in logger.handlers:
        handler.flush()


class TestSetupLogging:
    def test_creates_session_file(self, tmp_path):
        logger = chart_logging.setup_logging(log_dir=tmp_path)
        _flush(logger)
        path = chart_logging.get_current_log_path()
        assert path.parent == tmp_path
        assert path.name.startswith("chart_")
        assert "Session started" in path.read_text(encoding="utf-8")

    def test_default_dir_under_data_dir(self):
        chart_logging.setup_logging()
        path = chart_logging.get_current_log_path()
        assert path.parent == chart_logging.get_log_dir()
        assert path.exists()

    def test_clean_console_format(self, tmp_path):
        with mock.patch("config.get", side_effect=lambda k, d=None: "clean" if k == "console_format" else d):
            logger = chart_logging.setup_logging(log_dir=tmp_path)
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0], logging.FileHandler)

    def test_verbose_console_level(self, tmp_path):
        logger = chart_logging.setup_logging(verbose=True, log_dir=tmp_path)
        console = [h for h in logger.handlers if not isinstance(h, logging.FileHandler)]
        assert len(console) == 1
        assert console[0].level == logging.DEBUG

    def test_reinit_replaces_handlers(self, tmp_path):
        chart_logging.setup_logging(log_dir=tmp_path)
        logger = chart_logging.setup_logging(log_dir=tmp_path)
        assert len(logger.handlers) == 2


class TestLogError:
    def test_writes_identifier_and_context(self, tmp_path):
        logger = chart_logging.setup_logging(log_dir=tmp_path)
        try:
            raise InvalidLimitsError()
        except InvalidLimitsError as e:
            chart_logging.log_error("Limits rejected", exc=e, context={"value": (5, 2)})
        _flush(logger)

        text = chart_logging.get_current_log_path().read_text(encoding="utf-8")
        assert "Limits rejected" in text
        assert "Identifier: BulletChart:InvalidLimits" in text
        assert "value: (5, 2)" in text
        assert "Stack trace:" in text

    def test_get_logger_configures_on_demand(self):
        logger = chart_logging.get_logger()
        assert logger.name == "bullet-chart"
        assert logger.handlers
