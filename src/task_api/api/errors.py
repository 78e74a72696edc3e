"""
Error handlers for the Task Management API
Every failure raised while handling a request is converted here into the
standard error envelope: {success: false, message, errors?, stack?}
"""
import traceback
from typing import Any, Dict, List, Optional, Tuple

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from ..utils.errors import ApiError, InvalidIdentifierError, RecordValidationError
from ..utils.logging import get_logger

logger = get_logger("api.errors")

INTERNAL_ERROR_MESSAGE = "Internal Server Error"
DUPLICATE_FIELD_MESSAGE = "Duplicate field value entered"


def _is_uniqueness_violation(error: IntegrityError) -> bool:
    text = str(error.orig if error.orig is not None else error).lower()
    return "unique" in text or "duplicate" in text


def normalize_error(error: Exception) -> Tuple[int, str, Optional[List[str]]]:
    """
    Map an exception to an HTTP status, a client-safe message and optional field errors.

    Unknown exceptions become a generic 500; their message is never exposed.
    """
    if isinstance(error, InvalidIdentifierError):
        return status.HTTP_404_NOT_FOUND, f"Resource not found with id: {error.value}", None

    if isinstance(error, IntegrityError) and _is_uniqueness_violation(error):
        return status.HTTP_400_BAD_REQUEST, DUPLICATE_FIELD_MESSAGE, None

    if isinstance(error, RecordValidationError):
        return status.HTTP_400_BAD_REQUEST, f"Invalid input data: {'. '.join(error.messages)}", None

    if isinstance(error, ValidationError):
        messages = [detail["msg"] for detail in error.errors()]
        return status.HTTP_400_BAD_REQUEST, f"Invalid input data: {'. '.join(messages)}", None

    if isinstance(error, ApiError):
        return error.status_code, error.message, error.errors

    return status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE, None


def error_body(
    message: str,
    errors: Optional[List[str]] = None,
    stack: Optional[str] = None,
) -> Dict[str, Any]:
    body: Dict[str, Any] = {"success": False, "message": message}
    if errors:
        body["errors"] = errors
    if stack:
        body["stack"] = stack
    return body


def _include_stack(request: Request) -> bool:
    app_settings = getattr(request.app.state, "settings", None)
    return bool(app_settings and app_settings.is_development)


def _format_stack(error: Exception) -> str:
    return "".join(traceback.format_exception(type(error), error, error.__traceback__))


async def handle_application_error(request: Request, exc: Exception) -> JSONResponse:
    """Handler for application, persistence and unexpected errors."""
    status_code, message, errors = normalize_error(exc)

    if status_code >= 500:
        logger.error("Error: %s %s: %s", request.method, request.url.path, exc, exc_info=exc)
    else:
        logger.warning("Error: %s %s: %s", request.method, request.url.path, message)

    stack = _format_stack(exc) if _include_stack(request) else None
    return JSONResponse(status_code=status_code, content=error_body(message, errors, stack))


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Unmatched routes and methods get the standard 404 envelope."""
    if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
        message = f"Route {request.url.path} not found"
        logger.warning("Error: %s", message)
        stack = _format_stack(exc) if _include_stack(request) else None
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content=error_body(message, stack=stack))

    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed request bodies or parameters rejected by FastAPI itself."""
    messages = []
    for detail in exc.errors():
        location = ".".join(str(part) for part in detail.get("loc", ()) if part != "body")
        messages.append(f"{location}: {detail['msg']}" if location else detail["msg"])

    logger.warning("Error: %s %s: %s", request.method, request.url.path, "; ".join(messages))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body("Validation error", messages),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the error handlers on an application."""
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    for error_type in (ApiError, InvalidIdentifierError, RecordValidationError, IntegrityError, ValidationError):
        app.add_exception_handler(error_type, handle_application_error)


class UnhandledErrorMiddleware(BaseHTTPMiddleware):
    """
    Converts any exception no handler claimed into the 500 envelope.

    Must be added before CORSMiddleware so the response still passes through
    it and carries the CORS headers.
    """

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            return await handle_application_error(request, exc)


__all__ = [
    "normalize_error",
    "error_body",
    "register_exception_handlers",
    "UnhandledErrorMiddleware",
    "INTERNAL_ERROR_MESSAGE",
    "DUPLICATE_FIELD_MESSAGE",
]
