"""
Exception types for the Task Management API
Every error raised by the application carries enough information for the
error handlers to build the standard error envelope
"""
from typing import List, Optional


class ApiError(Exception):
    """Application error with an HTTP status code and a client-safe message"""

    def __init__(self, message: str, status_code: int = 500, errors: Optional[List[str]] = None):
        self.message = message
        self.status_code = status_code
        self.errors = errors
        super().__init__(message)


class TaskNotFoundException(ApiError):
    """Raised when a task does not exist"""

    def __init__(self, task_id):
        self.task_id = task_id
        super().__init__(f"Task not found with id: {task_id}", 404)


class RequestValidationFailed(ApiError):
    """Raised when a request payload fails the validation rules"""

    def __init__(self, errors: List[str]):
        super().__init__("Validation error", 400, errors=list(errors))


class InvalidIdentifierError(Exception):
    """Raised when a path identifier cannot be parsed into a task id"""

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Cast to id failed for value {value!r}")


class RecordValidationError(Exception):
    """Raised by the persistence model when a record breaks its field constraints"""

    def __init__(self, messages: List[str]):
        self.messages = list(messages)
        super().__init__("; ".join(self.messages))


__all__ = [
    "ApiError",
    "TaskNotFoundException",
    "RequestValidationFailed",
    "InvalidIdentifierError",
    "RecordValidationError",
]
