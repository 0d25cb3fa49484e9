# ============================================================================
# STRUCTURED LOGGING
# ============================================================================
# STATUS: Core - Structured logging with check context
# PURPOSE: Consistent, queryable logging for check construction and runs
# CREATED: 18 OCT 2026
# ============================================================================
"""
Structured Logging

Provides JSON or human-readable logging for hosts of HTTP checks.
Library code only emits records; the host calls configure_logging().

Usage:
    from httpcheck.logging import configure_logging, get_logger, log_context

    configure_logging("DEBUG")
    logger = get_logger("probe")

    with log_context(check_name="remote_service"):
        result = await check.check()
        logger.info("Probe finished", extra={"ok": result.ok})
"""

import json
import logging
import os
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Union


@dataclass
class LogContext:
    """
    Context for structured logging.

    Stored per asyncio task (contextvars), so concurrent checks on one
    thread never see each other's fields.
    """
    check_name: Optional[str] = None
    url: Optional[str] = None
    method: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict, excluding None values."""
        result = {}
        for key, value in asdict(self).items():
            if value is not None and key != "extra":
                result[key] = value
        if self.extra:
            result.update(self.extra)
        return result


# Per-task context storage
_current_context: ContextVar[Optional[LogContext]] = ContextVar(
    "httpcheck_log_context", default=None
)


def get_current_context() -> LogContext:
    """Get current logging context."""
    return _current_context.get() or LogContext()


@contextmanager
def log_context(**kwargs):
    """Merge fields into the current context until the block exits."""
    parent = get_current_context()
    new_context = LogContext(
        check_name=kwargs.get("check_name", parent.check_name),
        url=kwargs.get("url", parent.url),
        method=kwargs.get("method", parent.method),
        extra={**parent.extra, **kwargs.get("extra", {})},
    )

    token = _current_context.set(new_context)
    try:
        yield new_context
    finally:
        _current_context.reset(token)


class StructuredFormatter(logging.Formatter):
    """One JSON object per record: level, logger, message, check context, data."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        context_dict = get_current_context().to_dict()
        if context_dict:
            log_data["context"] = context_dict

        # Set by ContextLogger
        if getattr(record, "extra", None):
            log_data["data"] = record.extra

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class HumanFormatter(logging.Formatter):
    """Single-line output with the check name, method and URL inline."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")

        context = get_current_context()
        parts = [
            f"{key}={value}"
            for key, value in (
                ("check", context.check_name),
                ("method", context.method),
                ("url", context.url),
            )
            if value
        ]
        context_str = f" [{', '.join(parts)}]" if parts else ""

        result = (
            f"{timestamp} {record.levelname:<8} {record.name}{context_str}: "
            f"{record.getMessage()}"
        )
        if getattr(record, "extra", None):
            result += f" {record.extra}"
        if record.exc_info:
            result += f"\n{self.formatException(record.exc_info)}"
        return result


class ContextLogger(logging.LoggerAdapter):
    """Attaches call-site extras merged with the current check context as record.extra."""

    def process(self, msg, kwargs):
        extra = dict(kwargs.get("extra") or {})
        extra.update(get_current_context().to_dict())
        kwargs["extra"] = {"extra": extra}
        return msg, kwargs


def get_logger(name: str) -> ContextLogger:
    """Get a context-aware logger."""
    return ContextLogger(logging.getLogger(name), {})


def configure_logging(
    level: Union[str, int] = "INFO",
    json_output: bool = False,
) -> None:
    """
    Install a single stdout handler on the root logger.

    JSON output is used when json_output is set or LOG_FORMAT=json.
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    if json_output or os.getenv("LOG_FORMAT", "").lower() == "json":
        formatter: logging.Formatter = StructuredFormatter()
    else:
        formatter = HumanFormatter()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(level)


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "LogContext",
    "StructuredFormatter",
    "HumanFormatter",
    "ContextLogger",
    "get_logger",
    "configure_logging",
    "log_context",
    "get_current_context",
]
