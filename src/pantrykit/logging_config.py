"""Structured logging configuration for the pantrykit package."""

import json
import logging
import os
import sys
from contextvars import ContextVar
from datetime import UTC, datetime
from typing import Any

from pantrykit.config import Settings, get_settings

# Context variables for request and storage-key tracking
request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)
pantry_key_ctx: ContextVar[str | None] = ContextVar("pantry_key", default=None)


def _context_fields() -> dict[str, str]:
    fields: dict[str, str] = {}
    if request_id := request_id_ctx.get():
        fields["request_id"] = request_id
    if pantry_key := pantry_key_ctx.get():
        fields["pantry_key"] = pantry_key
    return fields


class StructuredJsonFormatter(logging.Formatter):
    """JSON formatter for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(UTC).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        log_data.update(_context_fields())

        # Add extra fields from the record
        if hasattr(record, "extra_data"):
            log_data.update(record.extra_data)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        log_data["location"] = {
            "file": record.filename,
            "line": record.lineno,
            "function": record.funcName,
        }

        return json.dumps(log_data)


class ContextualFormatter(logging.Formatter):
    """Human-readable formatter with context for development."""

    def format(self, record: logging.LogRecord) -> str:
        context_parts = []
        if request_id := request_id_ctx.get():
            context_parts.append(f"req={request_id[:8]}")
        if pantry_key := pantry_key_ctx.get():
            context_parts.append(f"key={pantry_key}")

        context_str = f" [{', '.join(context_parts)}]" if context_parts else ""

        timestamp = datetime.now(UTC).strftime("%Y-%m-%d %H:%M:%S")
        level = record.levelname.ljust(8)
        message = record.getMessage()

        formatted = f"{timestamp} | {level} | {record.name}{context_str} | {message}"

        if record.exc_info:
            formatted += "\n" + self.formatException(record.exc_info)

        return formatted


class ContextLogger(logging.LoggerAdapter):
    """Logger adapter that automatically includes context variables."""

    def process(self, msg: str, kwargs: dict) -> tuple[str, dict]:
        extra = kwargs.get("extra", {})
        extra.update(_context_fields())
        kwargs["extra"] = extra
        return msg, kwargs


def get_logger(name: str) -> ContextLogger:
    """Get a context-aware logger for the given module name."""
    logger = logging.getLogger(name)
    return ContextLogger(logger, {})


def configure_logging(settings: Settings | None = None, log_file: str | None = None) -> None:
    """
    Configure root logging from application settings.

    Output is JSON outside development and human-readable in development.
    ``LOG_FORMAT=json`` or ``LOG_FORMAT=text`` overrides that choice.

    Args:
        settings: Settings to read ``log_level`` and ``environment`` from.
        log_file: Optional file path to also write logs to.
    """
    settings = settings or get_settings()

    level_str = settings.log_level.upper()
    level = logging.getLevelName(level_str)
    if not isinstance(level, int):
        level = logging.INFO

    log_format = os.getenv("LOG_FORMAT", "").lower()
    json_format = log_format == "json" or (log_format != "text" and not settings.is_development)
    formatter: logging.Formatter = (
        StructuredJsonFormatter() if json_format else ContextualFormatter()
    )

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    for handler in handlers:
        handler.setFormatter(formatter)
        handler.setLevel(level)
        root_logger.addHandler(handler)

    logging.getLogger("pantrykit").setLevel(level)
    logging.getLogger("redis").setLevel(logging.WARNING)

    get_logger(__name__).info(
        f"Logging configured: level={logging.getLevelName(level)}, "
        f"format={'json' if json_format else 'text'}, environment={settings.environment}"
    )


def set_context(
    request_id: str | None = None,
    pantry_key: str | None = None,
) -> None:
    """Set logging context variables."""
    if request_id is not None:
        request_id_ctx.set(request_id)
    if pantry_key is not None:
        pantry_key_ctx.set(pantry_key)


def clear_context() -> None:
    """Clear all logging context variables."""
    request_id_ctx.set(None)
    pantry_key_ctx.set(None)


class LoggingContext:
    """Context manager for setting logging context."""

    def __init__(
        self,
        request_id: str | None = None,
        pantry_key: str | None = None,
    ):
        self.request_id = request_id
        self.pantry_key = pantry_key
        self._tokens: dict[str, Any] = {}

    def __enter__(self) -> "LoggingContext":
        if self.request_id is not None:
            self._tokens["request_id"] = request_id_ctx.set(self.request_id)
        if self.pantry_key is not None:
            self._tokens["pantry_key"] = pantry_key_ctx.set(self.pantry_key)
        return self

    def __exit__(self, *args: Any) -> None:
        for name, token in self._tokens.items():
            ctx_var = {
                "request_id": request_id_ctx,
                "pantry_key": pantry_key_ctx,
            }[name]
            ctx_var.reset(token)
