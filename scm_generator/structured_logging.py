"""Structured logging built on structlog, plus correlation-id helpers."""

import logging
import os
import sys
import uuid
from contextvars import ContextVar
from typing import Any, Optional, TextIO

import structlog
from pydantic import BaseModel, Field
from structlog.stdlib import BoundLogger

TRACE_FIELDS = ("thread", "trace_id", "trace_flags", "span_id")
TOP_LEVEL_FIELDS = {
    "message",
    "level",
    "logger",
    "timestamp",
    "stream",
    "context",
    "correlation_id",
    "exception",
    *TRACE_FIELDS,
}

_LOGGING_LEVELS = {
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
}

_correlation_id: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)


class LoggingContext(BaseModel):
    """Logging settings, read from the environment unless given explicitly."""

    stream: str = Field(default_factory=lambda: os.getenv("STREAM", "stdout"))
    logging_level: str = Field(default_factory=lambda: os.getenv("LOGGING_LEVEL", "INFO"))
    log_format: str = Field(default_factory=lambda: os.getenv("LOG_FORMAT", "json"))


def get_logging_level(level: str) -> int:
    try:
        return _LOGGING_LEVELS[level.upper()]
    except KeyError:
        raise ValueError(f"Unsupported logging level: {level}") from None


def get_stream(stream: str) -> TextIO:
    streams = {"stdout": sys.stdout, "stderr": sys.stderr}
    try:
        return streams[stream.lower()]
    except KeyError:
        raise ValueError(f"Unsupported stream: {stream}") from None


def _process_log_fields(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Keep well-known fields at the top level and move the rest under ``extra``."""
    event_dict["message"] = event_dict.pop("event", "")
    extra = {key: event_dict.pop(key) for key in list(event_dict) if key not in TOP_LEVEL_FIELDS}
    if extra:
        event_dict["extra"] = extra
    event_dict.setdefault("context", "default")
    return event_dict


def set_context_fields(context: LoggingContext) -> None:
    structlog.contextvars.bind_contextvars(stream=context.stream)


def clear_context_fields() -> None:
    structlog.contextvars.clear_contextvars()


def configure_structlog(context: Optional[LoggingContext] = None) -> None:
    """Configure structlog and the stdlib root logger it renders into."""
    context = context or LoggingContext()
    level = get_logging_level(context.logging_level)

    root_logger = logging.getLogger()
    # Only replace the handler installed by a previous call.
    for handler in root_logger.handlers[:]:
        if getattr(handler, "_scm_generator_handler", False):
            root_logger.removeHandler(handler)
    handler = logging.StreamHandler(get_stream(context.stream))
    handler.setFormatter(logging.Formatter("%(message)s"))
    handler._scm_generator_handler = True  # type: ignore[attr-defined]
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    for noisy in ("httpx", "httpcore", "urllib3"):
        logging.getLogger(noisy).setLevel(max(logging.WARNING, level))

    if context.log_format == "keyvalue":
        renderer: Any = structlog.processors.KeyValueRenderer(key_order=["message", "level", "logger"])
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", key="timestamp"),
            structlog.processors.format_exc_info,
            _process_log_fields,
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    clear_context_fields()
    set_context_fields(context)


def get_logger(name: str = "") -> BoundLogger:
    return structlog.get_logger(name or __name__)


def generate_correlation_id() -> str:
    return str(uuid.uuid4())


def get_correlation_id() -> Optional[str]:
    return _correlation_id.get()


def set_correlation_id(correlation_id: Optional[str]) -> None:
    _correlation_id.set(correlation_id)
    if correlation_id is None:
        structlog.contextvars.unbind_contextvars("correlation_id")
    else:
        structlog.contextvars.bind_contextvars(correlation_id=correlation_id)


def get_or_create_correlation_id() -> str:
    correlation_id = get_correlation_id()
    if correlation_id is None:
        correlation_id = generate_correlation_id()
        set_correlation_id(correlation_id)
    return correlation_id


class CorrelationContext:
    """Scope a correlation id to a block, restoring the previous one on exit."""

    def __init__(self, correlation_id: Optional[str] = None) -> None:
        self.correlation_id = correlation_id or generate_correlation_id()
        self._previous: Optional[str] = None

    def __enter__(self) -> str:
        self._previous = get_correlation_id()
        set_correlation_id(self.correlation_id)
        return self.correlation_id

    def __exit__(self, *exc_info: Any) -> None:
        set_correlation_id(self._previous)


__all__ = [
    "BoundLogger",
    "CorrelationContext",
    "LoggingContext",
    "clear_context_fields",
    "configure_structlog",
    "generate_correlation_id",
    "get_correlation_id",
    "get_logger",
    "get_logging_level",
    "get_or_create_correlation_id",
    "get_stream",
    "set_context_fields",
    "set_correlation_id",
]
