"""
tests/test_settings.py

Tests for environment-driven settings and logging setup.
"""

import logging

import pytest

from renewalreminders import settings
from renewalreminders.utils.logging_utils import configure_logging


def test_db_path_from_environment(tmp_path, monkeypatch):
    target = tmp_path / "nested" / "custom.db"
    monkeypatch.setenv(settings.DB_PATH_ENV, str(target))

    assert settings.get_db_path() == target
    assert target.parent.is_dir()


def test_timezone_and_log_level_defaults(monkeypatch):
    monkeypatch.delenv(settings.TZ_ENV, raising=False)
    monkeypatch.setenv(settings.LOG_LEVEL_ENV, "debug")

    assert settings.get_timezone_name() == "UTC"
    assert settings.get_log_level() == "DEBUG"


def test_configure_logging_installs_one_handler():
    logger = configure_logging("info")
    configure_logging("INFO")

    marked = [h for h in logger.handlers if getattr(h, "_renewalreminders", False)]
    assert len(marked) == 1
    assert logger.level == logging.INFO


def test_configure_logging_rejects_unknown_level():
    with pytest.raises(ValueError):
        configure_logging("chatty")
