import logging

import pytest

import config


@pytest.fixture(autouse=True)
def isolated_data_dir(tmp_path, monkeypatch):
    """Keep log files and saved charts inside the test's tmp_path."""
    monkeypatch.setenv("BULLET_CHART_DIR", str(tmp_path / "data"))
    config._reset_data_dir()
    yield
    config._reset_data_dir()
    logger = logging.getLogger("bullet-chart")
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
