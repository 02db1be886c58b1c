import logging

import pytest

from brepkit.log_config import BREPKIT_DEBUG, debug_enabled, setup_logging


@pytest.fixture(autouse=True)
def _reset_logger():
    yield
    logger = logging.getLogger("brepkit")
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


def test_debug_flag(monkeypatch):
    monkeypatch.delenv(BREPKIT_DEBUG, raising=False)
    assert not debug_enabled()
    monkeypatch.setenv(BREPKIT_DEBUG, "yes")
    assert debug_enabled()


def test_default_level_follows_debug_flag(monkeypatch):
    monkeypatch.setenv(BREPKIT_DEBUG, "1")
    assert setup_logging().level == logging.DEBUG
    monkeypatch.setenv(BREPKIT_DEBUG, "0")
    assert setup_logging().level == logging.INFO


def test_repeated_setup_does_not_duplicate_handlers():
    setup_logging(logging.INFO)
    logger = setup_logging(logging.INFO)
    assert len(logger.handlers) == 1


def test_log_file(tmp_path):
    log_file = tmp_path / "brepkit.log"
    logger = setup_logging(logging.DEBUG, log_file=str(log_file))
    logging.getLogger("brepkit.occ.kernel").debug("kernel box raised: failure")
    for handler in logger.handlers:
        handler.flush()
    assert "kernel box raised: failure" in log_file.read_text()
