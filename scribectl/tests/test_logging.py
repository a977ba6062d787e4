import logging

import pytest

from scribectl.config import Config
from scribectl.logging import NOISY_LOGGERS, setup_logging


@pytest.fixture(autouse=True)
def restore_levels(monkeypatch):
    monkeypatch.setattr(Config, "LOG_LEVEL", "INFO")
    names = ("",) + NOISY_LOGGERS
    saved = {name: logging.getLogger(name).level for name in names}
    yield
    for name, level in saved.items():
        logging.getLogger(name).setLevel(level)


def test_default_level_quiets_client_libraries():
    setup_logging(0)
    assert logging.getLogger().level == logging.INFO
    for name in NOISY_LOGGERS:
        assert logging.getLogger(name).level == logging.WARNING


def test_loglevel_two_enables_debug():
    setup_logging(2)
    assert logging.getLogger().level == logging.DEBUG
    assert logging.getLogger("urllib3").level == logging.WARNING


def test_high_loglevel_includes_client_libraries():
    setup_logging(6)
    for name in NOISY_LOGGERS:
        assert logging.getLogger(name).level == logging.DEBUG
