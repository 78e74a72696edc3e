"""
Database module for the Task Management API
Engine, session dependency and the task repository
"""
from .database import engine, build_engine, create_db_and_tables, get_session
from .task_repository import TaskRepository

__all__ = [
    "engine",
    "build_engine",
    "create_db_and_tables",
    "get_session",
    "TaskRepository",
]
