"""
Smart Leave - Structured Logging Configuration
==============================================
Provides JSON-formatted structured logging with session context.

Features:
- JSON output for log aggregation
- Session-scoped context (actor_id, endpoint)
- Timing of backend calls (duration_ms)
- Log level and format from the environment

Usage:
    from smart_leave.logging_config import get_logger, log_event

    logger = get_logger(__name__)
    logger.info("Leave applied", extra={"leave_type": "SICK"})

    # Or use the helper
    log_event("leave_applied", leave_type="SICK", duration=2)
"""

from __future__ import annotations

import json
import logging
import sys
import threading
import time
import traceback
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from smart_leave.config import settings


# =============================================================================
# Context (thread-local; Streamlit runs each session script on its own thread)
# =============================================================================


class LogContext:
    """Thread-local storage for the signed-in actor and current endpoint."""

    _local = threading.local()

    @classmethod
    def set_actor_id(cls, actor_id: str | None) -> None:
        cls._local.actor_id = actor_id

    @classmethod
    def get_actor_id(cls) -> str | None:
        return getattr(cls._local, "actor_id", None)

    @classmethod
    def set_endpoint(cls, endpoint: str | None) -> None:
        cls._local.endpoint = endpoint

    @classmethod
    def get_endpoint(cls) -> str | None:
        return getattr(cls._local, "endpoint", None)

    @classmethod
    def clear(cls) -> None:
        cls._local.actor_id = None
        cls._local.endpoint = None

    @classmethod
    def get_all(cls) -> dict[str, Any]:
        return {
            "actor_id": cls.get_actor_id(),
            "endpoint": cls.get_endpoint(),
        }


# =============================================================================
# JSON Formatter
# =============================================================================

_STANDARD_ATTRS = frozenset(
    {
        "name", "msg", "args", "levelname", "levelno", "pathname",
        "filename", "module", "lineno", "funcName", "created", "msecs",
        "relativeCreated", "thread", "threadName", "processName",
        "process", "getMessage", "exc_info", "exc_text", "stack_info",
        "taskName",
    }
)


class StructuredFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    Outputs logs in a consistent JSON format with timestamps,
    log levels, and contextual fields.
    """

    def __init__(
        self,
        *,
        service_name: str = "smart-leave",
        include_extra_fields: bool = True,
    ) -> None:
        super().__init__()
        self.service_name = service_name
        self.include_extra_fields = include_extra_fields
        self._iso_format = "%Y-%m-%dT%H:%M:%S.%fZ"

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "timestamp": self._format_timestamp(record.created),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "service": self.service_name,
        }

        if record.pathname:
            log_entry["file"] = Path(record.pathname).name
            log_entry["line"] = record.lineno
            log_entry["function"] = record.funcName

        if record.exc_info:
            log_entry["exception"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else None,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None,
                "traceback": "".join(traceback.format_exception(*record.exc_info)),
            }

        for key, value in LogContext.get_all().items():
            if value is not None:
                log_entry[key] = value

        if self.include_extra_fields:
            for key, value in record.__dict__.items():
                if key not in _STANDARD_ATTRS and not key.startswith("_"):
                    log_entry[key] = value

        return json.dumps(log_entry, default=self._json_serializer, ensure_ascii=False)

    def _format_timestamp(self, created: float) -> str:
        dt = datetime.fromtimestamp(created, tz=timezone.utc)
        return dt.strftime(self._iso_format)

    @staticmethod
    def _json_serializer(obj: Any) -> str:
        if isinstance(obj, datetime):
            return obj.isoformat()
        return str(obj)


# =============================================================================
# Console Formatter (human-readable fallback)
# =============================================================================


class ConsoleFormatter(logging.Formatter):
    """Human-readable formatter for console output during development."""

    LEVEL_COLORS = {
        "DEBUG": "\033[36m",     # Cyan
        "INFO": "\033[32m",      # Green
        "WARNING": "\033[33m",   # Yellow
        "ERROR": "\033[31m",     # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        level_color = self.LEVEL_COLORS.get(record.levelname, "")
        timestamp = datetime.fromtimestamp(record.created, tz=timezone.utc).strftime("%H:%M:%S")
        actor = LogContext.get_actor_id() or "-"

        base = (
            f"{level_color}{record.levelname:<8}{self.RESET} "
            f"{timestamp} "
            f"[{actor}] "
            f"{record.name}: "
            f"{record.getMessage()}"
        )
        if record.exc_info:
            base += "\n" + "".join(traceback.format_exception(*record.exc_info))
        return base


# =============================================================================
# Logger Factory
# =============================================================================


def _convert_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    return getattr(logging, level.upper(), logging.INFO)


def _should_use_json() -> bool:
    if settings.log_format == "console":
        return False
    if settings.log_format == "json":
        return True
    # JSON outside debug mode, console while developing
    return not settings.debug_mode


_loggers: dict[str, logging.Logger] = {}
_configured = False


def configure_logging(
    *,
    level: str | int | None = None,
    service_name: str = "smart-leave",
    log_format: str | None = None,
) -> None:
    """
    Configure the root logger.

    Args:
        level: Log level name or number; defaults to ``settings.log_level``.
        service_name: Service name for log identification.
        log_format: ``"json"`` or ``"console"``; defaults from settings.
    """
    global _configured

    resolved_level = _convert_level(settings.log_level if level is None else level)
    root = logging.getLogger()
    root.setLevel(resolved_level)
    root.handlers.clear()

    use_json = _should_use_json() if log_format is None else log_format == "json"

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(resolved_level)
    if use_json:
        handler.setFormatter(StructuredFormatter(service_name=service_name))
    else:
        handler.setFormatter(ConsoleFormatter())

    root.addHandler(handler)
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Get a logger, configuring the root logger on first use."""
    if not _configured:
        configure_logging()

    if name not in _loggers:
        _loggers[name] = logging.getLogger(name)
    return _loggers[name]


def log_event(event: str, *, level: str | int = logging.INFO, **fields: Any) -> None:
    """Log a named event with structured fields."""
    get_logger("smart_leave.events").log(_convert_level(level), event, extra=fields)


# =============================================================================
# Performance Tracking
# =============================================================================


class PerformanceTracker:
    """
    Context manager for timing an operation.

    Example:
        with PerformanceTracker("http_request", method="GET", path="/users/login"):
            response = session.get(...)
    """

    def __init__(self, operation: str, **extra_fields: Any) -> None:
        self.operation = operation
        self.extra = extra_fields
        self._start_time: float | None = None

    def __enter__(self) -> PerformanceTracker:
        self._start_time = time.perf_counter()
        return self

    def __exit__(self, *args: Any) -> None:
        if self._start_time is None:
            return

        self.extra["duration_ms"] = round((time.perf_counter() - self._start_time) * 1000, 2)

        if args[0] is not None:
            self.extra["error"] = str(args[1])
            get_logger("smart_leave.performance").warning(f"{self.operation}_failed", extra=self.extra)
        else:
            get_logger("smart_leave.performance").debug(f"{self.operation}_completed", extra=self.extra)
