"""Tests for logging configuration."""

import logging

import structlog
from shared.logging import add_context, clear_context, configure_logging, get_log_level


class TestLogLevel:
    def test_test_env_is_quiet(self, monkeypatch):
        monkeypatch.setenv("STOREFRONT_ENV", "test")
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        assert get_log_level() == "WARNING"

    def test_development_is_verbose(self, monkeypatch):
        monkeypatch.setenv("STOREFRONT_ENV", "development")
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        assert get_log_level() == "DEBUG"

    def test_log_level_overrides(self, monkeypatch):
        monkeypatch.setenv("STOREFRONT_ENV", "production")
        monkeypatch.setenv("LOG_LEVEL", "error")
        assert get_log_level() == "ERROR"


class TestConfigureLogging:
    def test_file_handlers_only_with_log_dir(self, tmp_path):
        configure_logging(env="test", level="WARNING")
        assert len(logging.getLogger().handlers) == 1

        configure_logging(env="test", level="WARNING", log_dir=str(tmp_path))
        assert len(logging.getLogger().handlers) == 3
        assert (tmp_path / "storefront.log").exists()

        configure_logging(env="test", level="WARNING")

    def test_context_variables(self):
        clear_context()
        add_context(request_id="req-1")
        assert structlog.contextvars.get_contextvars() == {"request_id": "req-1"}
        clear_context()
        assert structlog.contextvars.get_contextvars() == {}
