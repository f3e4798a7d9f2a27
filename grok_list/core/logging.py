"""
grok_list/core/logging.py

Purpose: Logging configuration

- Standardizes log format
- JSON records in production, colored lines in development
- Context tracking (collection, document_id, user_id)
"""

import logging
import sys
import json
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict
from grok_list.core.config import settings

CONTEXT_FIELDS = ("collection", "document_id", "user_id")


class StructuredFormatter(logging.Formatter):
    """
    Custom formatter for structured JSON logging in production.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        for field in CONTEXT_FIELDS:
            if hasattr(record, field):
                log_data[field] = str(getattr(record, field))

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data)


class DevelopmentFormatter(logging.Formatter):
    """
    Human-readable formatter for development environment.
    """

    def format(self, record: logging.LogRecord) -> str:
        colors = {
            "DEBUG": "\033[36m",      # Cyan
            "INFO": "\033[32m",       # Green
            "WARNING": "\033[33m",    # Yellow
            "ERROR": "\033[31m",      # Red
            "CRITICAL": "\033[35m",   # Magenta
        }
        reset = "\033[0m"

        color = colors.get(record.levelname, reset)
        timestamp = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")

        message = f"{color}[{timestamp}] {record.levelname:<8}{reset} {record.name}: {record.getMessage()}"

        context_parts = [
            f"{field}={getattr(record, field)}"
            for field in CONTEXT_FIELDS
            if hasattr(record, field)
        ]
        if context_parts:
            message += f" [{', '.join(context_parts)}]"

        if record.exc_info:
            message += "\n" + self.formatException(record.exc_info)

        return message


def setup_logging():
    """
    Configures application-wide logging with appropriate formatters.
    Uses JSON format in production, human-readable in development.
    """
    log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)

    if settings.is_production:
        formatter = StructuredFormatter()
    else:
        formatter = DevelopmentFormatter()

    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    # Third-party loggers are noisy at INFO
    logging.getLogger("motor").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    logger = logging.getLogger("grok_list")
    logger.info(
        f"Logging configured (environment={settings.ENVIRONMENT}, level={settings.LOG_LEVEL})"
    )

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance with the given name.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Logger under the grok_list namespace
    """
    if name == "grok_list" or name.startswith("grok_list."):
        return logging.getLogger(name)
    return logging.getLogger(f"grok_list.{name}")


_log_context: ContextVar[Dict[str, Any]] = ContextVar("grok_list_log_context", default={})


def _install_context_factory():
    """
    Wraps the record factory once so every record picks up the current
    LogContext values. The values live in a ContextVar, so each asyncio task
    sees only its own context.
    """
    base_factory = logging.getLogRecordFactory()
    if getattr(base_factory, "_grok_list_context", False):
        return

    def record_factory(*args, **kwargs):
        record = base_factory(*args, **kwargs)
        for key, value in _log_context.get().items():
            setattr(record, key, value)
        return record

    record_factory._grok_list_context = True
    logging.setLogRecordFactory(record_factory)


_install_context_factory()


class LogContext:
    """
    Context manager for adding structured context to logs.

    Safe to hold across awaits: concurrent tasks never see each other's
    values.

    Usage:
        with LogContext(collection="lists", document_id=list_id):
            logger.info("Appending item")
    """

    def __init__(self, **kwargs):
        self.context = kwargs
        self._token = None

    def __enter__(self):
        self._token = _log_context.set({**_log_context.get(), **self.context})
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        _log_context.reset(self._token)
        self._token = None
