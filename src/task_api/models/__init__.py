"""
Models module for the Task Management API
Contains the task table model and the public response schemas
"""
from sqlmodel import SQLModel
from .task import (
    Task,
    TaskBase,
    TaskPublic,
    TaskStatus,
    TaskPriority,
    PRIORITY_WEIGHTS,
    utc_now,
)
from .stats import StatusStat, PriorityStat, TaskStats

__all__ = [
    "SQLModel",
    "Task",
    "TaskBase",
    "TaskPublic",
    "TaskStatus",
    "TaskPriority",
    "PRIORITY_WEIGHTS",
    "utc_now",
    "StatusStat",
    "PriorityStat",
    "TaskStats",
]
