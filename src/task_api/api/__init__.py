"""
HTTP layer for the Task Management API
Routers and error handlers
"""
from .errors import register_exception_handlers
from .routes import tasks_router, system_router

__all__ = [
    "register_exception_handlers",
    "tasks_router",
    "system_router",
]
