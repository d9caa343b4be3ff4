"""
Structured logging for Snippetbox.

Production writes one JSON object per line; development writes readable
text. Either way every record emitted while a request is in flight carries
that request's correlation ID.
"""

import json
import logging
import sys
import uuid
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from snippetbox.core.config import Settings

# Set by LogRequestMiddleware for the lifetime of one request
correlation_id_ctx: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)

# Attributes every LogRecord carries; anything else came in through ``extra=``
_RESERVED_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime", "correlation_id"}

SENSITIVE_KEYWORDS = ("password", "secret", "token", "credential", "cookie", "private")

TEXT_FORMAT = "%(asctime)s %(levelname)-7s [%(correlation_id)s] %(name)s: %(message)s"


def is_sensitive(key: str) -> bool:
    key = key.lower()
    return any(keyword in key for keyword in SENSITIVE_KEYWORDS)


class CorrelationIdFilter(logging.Filter):
    """Copies the current correlation ID onto each record ("-" outside a request)."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = correlation_id_ctx.get() or "-"
        return True


class StructuredFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    Fields passed through ``extra=`` are nested under ``"extra"``; those whose
    name looks like a secret are replaced with ``[REDACTED]`` unless
    ``include_sensitive`` is set.
    """

    def __init__(self, include_sensitive: bool = False):
        super().__init__()
        self.include_sensitive = include_sensitive

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        correlation_id = correlation_id_ctx.get()
        if correlation_id:
            entry["correlation_id"] = correlation_id

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        extra = {
            key: "[REDACTED]" if not self.include_sensitive and is_sensitive(key) else value
            for key, value in vars(record).items()
            if key not in _RESERVED_ATTRS
        }
        if extra:
            entry["extra"] = extra

        return json.dumps(entry, default=str)


def setup_logging(log_level: str = "INFO", enable_json: bool = True, include_sensitive: bool = False) -> None:
    """Replace the root handlers with a single stdout handler."""
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(CorrelationIdFilter())
    if enable_json:
        handler.setFormatter(StructuredFormatter(include_sensitive=include_sensitive))
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(log_level.upper())

    # Requests are already logged by LogRequestMiddleware
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def get_correlation_id() -> str:
    """Correlation ID of the current context, created on first use."""
    correlation_id = correlation_id_ctx.get()
    if not correlation_id:
        correlation_id = str(uuid.uuid4())
        correlation_id_ctx.set(correlation_id)
    return correlation_id


def set_correlation_id(correlation_id: str) -> None:
    correlation_id_ctx.set(correlation_id)


def init_application_logging(config: Settings) -> None:
    """JSON logs in production, text elsewhere; DEBUG level when debugging."""
    enable_json = config.is_production
    log_level = "DEBUG" if config.debug else config.log_level

    setup_logging(log_level=log_level, enable_json=enable_json, include_sensitive=config.debug)

    logging.getLogger("snippetbox.startup").info(
        "Structured logging initialized",
        extra={"env": config.env, "json_logging": enable_json, "log_level": log_level},
    )
