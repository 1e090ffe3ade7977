"""Tests for logging configuration and context propagation."""

import json
import logging

import pytest

from pantrykit.config import Settings
from pantrykit.logging_config import (
    ContextualFormatter,
    LoggingContext,
    StructuredJsonFormatter,
    clear_context,
    configure_logging,
    get_logger,
    pantry_key_ctx,
    request_id_ctx,
    set_context,
)


def _record(message: str = "hello") -> logging.LogRecord:
    return logging.LogRecord(
        name="pantrykit.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=message,
        args=(),
        exc_info=None,
    )


class TestLoggingContext:
    """Tests for context variable handling."""

    def test_context_manager_resets(self):
        """Test values are restored on exit."""
        with LoggingContext(request_id="req-1", pantry_key="pantryItems"):
            assert request_id_ctx.get() == "req-1"
            assert pantry_key_ctx.get() == "pantryItems"
        assert request_id_ctx.get() is None
        assert pantry_key_ctx.get() is None

    def test_set_and_clear(self):
        """Test explicit setters."""
        set_context(pantry_key="household")
        assert pantry_key_ctx.get() == "household"
        clear_context()
        assert pantry_key_ctx.get() is None


class TestFormatters:
    """Tests for log formatters."""

    def test_json_formatter_includes_context(self):
        """Test JSON output carries the context fields."""
        with LoggingContext(pantry_key="pantryItems"):
            data = json.loads(StructuredJsonFormatter().format(_record()))

        assert data["message"] == "hello"
        assert data["level"] == "INFO"
        assert data["pantry_key"] == "pantryItems"
        assert data["timestamp"].endswith("Z")

    def test_contextual_formatter(self):
        """Test human-readable output."""
        with LoggingContext(request_id="abcdef123456", pantry_key="pantryItems"):
            text = ContextualFormatter().format(_record())

        assert "pantrykit.test [req=abcdef12, key=pantryItems] | hello" in text

    def test_adapter_adds_extra(self):
        """Test the adapter injects context into extra."""
        logger = get_logger("pantrykit.test")
        with LoggingContext(pantry_key="pantryItems"):
            _, kwargs = logger.process("msg", {})

        assert kwargs["extra"] == {"pantry_key": "pantryItems"}


class TestConfigureLogging:
    """Tests for configure_logging."""

    @pytest.fixture(autouse=True)
    def restore_root_logger(self, monkeypatch):
        monkeypatch.delenv("LOG_FORMAT", raising=False)
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        yield
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)

    def test_production_uses_json(self):
        """Test JSON output and the configured level outside development."""
        configure_logging(Settings(_env_file=None, environment="production", log_level="debug"))

        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, StructuredJsonFormatter)
        assert root.level == logging.DEBUG
        assert logging.getLogger("redis").level == logging.WARNING

    def test_development_uses_text(self):
        """Test human-readable output in development."""
        configure_logging(Settings(_env_file=None, environment="development", log_level="WARNING"))

        root = logging.getLogger()
        assert isinstance(root.handlers[0].formatter, ContextualFormatter)
        assert root.level == logging.WARNING

    def test_log_format_override(self, monkeypatch):
        """Test LOG_FORMAT takes precedence over the environment."""
        monkeypatch.setenv("LOG_FORMAT", "json")
        configure_logging(Settings(_env_file=None, environment="development"))

        assert isinstance(logging.getLogger().handlers[0].formatter, StructuredJsonFormatter)

    def test_unknown_level_falls_back_to_info(self):
        """Test an unrecognised level name does not break configuration."""
        configure_logging(Settings(_env_file=None, log_level="chatty"))

        assert logging.getLogger().level == logging.INFO
