"""Tests for centralized logging configuration."""

import logging

import pytest

from logging_config import setup_logging


@pytest.fixture
def configure(monkeypatch):
    """Run setup_logging with LOG_LEVEL taken from the given value."""

    def _configure(level: str) -> None:
        monkeypatch.setenv("LOG_LEVEL", level)
        from config import Settings
        monkeypatch.setattr("logging_config.settings", Settings(_env_file=None))
        setup_logging()

    return _configure


class TestSetupLogging:
    """Tests for setup_logging()."""

    def test_root_logger_level_default_info(self, configure):
        """LOG_LEVEL=INFO sets the root logger to INFO."""
        configure("INFO")
        assert logging.getLogger().level == logging.INFO

    def test_root_logger_level_from_settings(self, configure):
        """A lowercase LOG_LEVEL still controls the root logger."""
        configure("debug")
        assert logging.getLogger().level == logging.DEBUG

    def test_sqlalchemy_loggers_suppressed(self, configure):
        """SQLAlchemy engine and pool loggers are pinned to WARNING."""
        configure("DEBUG")
        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
        assert logging.getLogger("sqlalchemy.pool").level == logging.WARNING

    def test_third_party_loggers_suppressed(self, configure):
        """HTTP client and keyring loggers are pinned to WARNING."""
        configure("INFO")
        for name in ("httpx", "httpcore", "urllib3", "keyring"):
            assert logging.getLogger(name).level == logging.WARNING, (
                f"{name} logger not suppressed"
            )
