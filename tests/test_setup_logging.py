import logging

import pytest

from seriescache.schemas import EngineDefaults, LoggingConfig
from seriescache.setup_logging import setup_logging

pytestmark = pytest.mark.unit


def test_default_level_is_info(restore_root_logger):
    root = setup_logging()

    assert root.level == logging.INFO
    assert any(type(h) is logging.StreamHandler for h in root.handlers)


def test_level_from_engine_defaults(restore_root_logger):
    root = setup_logging(EngineDefaults(logging={"level": "debug"}))
    assert root.level == logging.DEBUG


def test_file_handler(restore_root_logger, tmp_path):
    log_path = tmp_path / "logs" / "cache.log"
    root = setup_logging(LoggingConfig(level="WARNING"), log_path=log_path)

    logging.getLogger("seriescache.test").warning("band rejected outlier")
    for handler in root.handlers:
        handler.flush()

    assert log_path.exists()
    text = log_path.read_text()
    assert "seriescache.test - WARNING - band rejected outlier" in text


def test_previous_handlers_removed(restore_root_logger):
    setup_logging()
    setup_logging()

    plain = [h for h in logging.getLogger().handlers if type(h) is logging.StreamHandler]
    assert len(plain) == 1
