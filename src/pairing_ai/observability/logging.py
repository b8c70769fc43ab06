"""Loguru setup for the pairing service.

JSON lines on stdout outside development, coloured text in development.
Fields bound with ``bind_context`` (request id, path, user id) are merged into
every record by a Loguru patcher, and standard library loggers (uvicorn,
httpx, redis) are routed through Loguru.
"""

from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from typing import Any

import orjson
from loguru import logger


_log_context: ContextVar[dict[str, Any]] = ContextVar("log_context", default={})

# Routed to Loguru but kept at WARNING
QUIET_LOGGERS = (
    "uvicorn",
    "uvicorn.access",
    "uvicorn.error",
    "httpx",
    "httpcore",
    "asyncio",
    "redis",
)


class InterceptHandler(logging.Handler):
    """Forward standard library records to Loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def _merge_context(record: Any) -> None:
    extra = record["extra"]
    for key, value in _log_context.get().items():
        extra.setdefault(key, value)
    extra.setdefault("name", record["name"])


def _escape(text: str) -> str:
    # Format callables return templates; literal braces must be doubled
    return text.replace("{", "{{").replace("}", "}}")


def _fields(record: Any) -> dict[str, Any]:
    return {key: value for key, value in record["extra"].items() if key != "name"}


def _json_format(record: Any) -> str:
    payload: dict[str, Any] = {
        "timestamp": record["time"].isoformat(),
        "level": record["level"].name,
        "logger": record["extra"]["name"],
        "message": record["message"],
        "function": record["function"],
        "line": record["line"],
        **_fields(record),
    }

    exception = record["exception"]
    if exception is not None:
        payload["exception"] = {
            "type": exception.type.__name__ if exception.type else None,
            "value": str(exception.value) if exception.value else None,
        }

    return _escape(orjson.dumps(payload, default=str).decode()) + "\n"


def _text_format(record: Any) -> str:
    fields = " ".join(f"{key}={value}" for key, value in _fields(record).items())
    suffix = f" | {_escape(fields)}" if fields else ""

    template = (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{extra[name]}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan>"
        f"{suffix} - <level>{{message}}</level>\n"
    )
    if record["exception"] is not None:
        template += "{exception}\n"
    return template


def setup_logging(
    log_level: str = "INFO",
    log_format: str = "json",
    *,
    is_development: bool = False,
) -> None:
    """Configure the Loguru sink and route standard logging through it.

    Args:
        log_level: Minimum level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_format: "json" or "text".
        is_development: Force the coloured text format.
    """
    as_json = log_format == "json" and not is_development

    logger.remove()
    logger.configure(patcher=_merge_context)
    logger.add(
        sys.stdout,
        format=_json_format if as_json else _text_format,
        level=log_level.upper(),
        colorize=not as_json,
        backtrace=True,
        diagnose=not as_json,  # No local variables in production logs
    )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> Any:
    """Loguru logger bound to a module name (typically ``__name__``)."""
    return logger.bind(name=name)


def bind_context(**kwargs: Any) -> None:
    """Attach fields to every later log record of the current context.

    Example:
        bind_context(request_id="abc-123", user_id="user-456")
    """
    _log_context.set({**_log_context.get(), **kwargs})


def clear_context() -> None:
    """Drop all request-scoped fields (start of each request)."""
    _log_context.set({})
