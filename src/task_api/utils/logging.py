"""
Logging utilities for the Task Management API
Provides logger setup, error logging and a development request logger
"""
import logging
import sys
import time
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

LOGGER_NAME = "task_api"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """
    Configure the package logger.

    Installs a single stream handler on the `task_api` logger so repeated
    calls (one per app instance) do not duplicate output.

    Args:
        level: Log level name, e.g. "INFO" or "DEBUG"

    Returns:
        The configured package logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level.upper())

    if not any(getattr(h, "_task_api_handler", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._task_api_handler = True
        logger.addHandler(handler)

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return the package logger or one of its children."""
    if not name:
        return logging.getLogger(LOGGER_NAME)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


def log_error(error: Exception, context: str, task_id: Optional[str] = None) -> None:
    """
    Log an exception with the operation it happened in.

    Args:
        error: The exception that was raised
        context: Name of the operation, e.g. "TaskService.create_task"
        task_id: Task the operation was working on, if any
    """
    logger = get_logger("errors")
    target = f" (task_id={task_id})" if task_id else ""
    logger.error(
        "%s%s failed: %s: %s",
        context,
        target,
        type(error).__name__,
        error,
        exc_info=error,
    )


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs one line per request: method, path, status and duration."""

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        get_logger("requests").info(
            "%s %s %d %.1fms",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        return response


__all__ = [
    "configure_logging",
    "get_logger",
    "log_error",
    "RequestLoggingMiddleware",
]
