"""
Utilities module for the Task Management API
Contains logging helpers and the exception taxonomy
"""
from .errors import (
    ApiError,
    TaskNotFoundException,
    RequestValidationFailed,
    InvalidIdentifierError,
    RecordValidationError,
)
from .logging import configure_logging, get_logger, log_error, RequestLoggingMiddleware

__all__ = [
    "ApiError",
    "TaskNotFoundException",
    "RequestValidationFailed",
    "InvalidIdentifierError",
    "RecordValidationError",
    "configure_logging",
    "get_logger",
    "log_error",
    "RequestLoggingMiddleware",
]
