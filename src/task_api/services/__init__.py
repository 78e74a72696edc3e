"""
Services module for the Task Management API
Contains business logic layer for the application
"""
from .query_builder import TaskFilter, SortSpec, TaskListQuery, build_list_query
from .task_service import TaskService, TaskPage

__all__ = [
    "TaskFilter",
    "SortSpec",
    "TaskListQuery",
    "build_list_query",
    "TaskService",
    "TaskPage",
]
