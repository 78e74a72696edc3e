"""
Task model for the Task Management API
Defines the task entity, its field constraints and its public representation
"""
import math
import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic import Field as PydanticField
from pydantic.alias_generators import to_camel
from sqlalchemy import JSON, Column, DateTime, Index
from sqlalchemy.types import TypeDecorator
from sqlmodel import Field, SQLModel


class TaskStatus(str, Enum):
    """Task status options"""
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class TaskPriority(str, Enum):
    """Task priority levels"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


# Field constraints
TITLE_MIN_LENGTH = 3
TITLE_MAX_LENGTH = 100
DESCRIPTION_MIN_LENGTH = 10
DESCRIPTION_MAX_LENGTH = 500

STATUS_VALUES = [s.value for s in TaskStatus]
PRIORITY_VALUES = [p.value for p in TaskPriority]

# Numeric weight of each priority, used only by the statistics aggregation
PRIORITY_WEIGHTS = {
    TaskPriority.LOW: 1,
    TaskPriority.MEDIUM: 2,
    TaskPriority.HIGH: 3,
    TaskPriority.URGENT: 4,
}

SECONDS_PER_DAY = 24 * 60 * 60


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to a naive timestamp, or convert an aware one to UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class UTCDateTime(TypeDecorator):
    """
    Timezone-aware datetime column that always reads back in UTC.

    SQLite keeps no offset, so values are written as UTC and have UTC
    attached again when loaded.
    """
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        return as_utc(value)

    def process_result_value(self, value, dialect):
        return as_utc(value)


class TaskBase(SQLModel):
    """Base model for task with common fields"""
    title: str = Field(max_length=TITLE_MAX_LENGTH)
    description: str = Field(max_length=DESCRIPTION_MAX_LENGTH)
    status: TaskStatus = Field(default=TaskStatus.PENDING)
    priority: TaskPriority = Field(default=TaskPriority.MEDIUM)
    due_date: Optional[datetime] = Field(default=None, sa_type=UTCDateTime)


class Task(TaskBase, table=True):
    """Task model for database table"""
    __table_args__ = (
        Index("ix_task_status_priority_created_at", "status", "priority", "created_at"),
    )

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    tags: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    created_at: datetime = Field(default_factory=utc_now, sa_type=UTCDateTime)
    updated_at: datetime = Field(default_factory=utc_now, sa_type=UTCDateTime)

    def record_violations(self) -> List[str]:
        """
        Check the stored field constraints of this record.

        Input validation normally rejects bad values before they reach the
        model; this is the last check before a write.

        Returns:
            Violation messages, empty when the record is valid
        """
        violations = []

        title = (self.title or "").strip()
        if not title:
            violations.append("Task title is required")
        elif len(title) < TITLE_MIN_LENGTH:
            violations.append(f"Title must be at least {TITLE_MIN_LENGTH} characters long")
        elif len(title) > TITLE_MAX_LENGTH:
            violations.append(f"Title cannot exceed {TITLE_MAX_LENGTH} characters")

        description = (self.description or "").strip()
        if not description:
            violations.append("Task description is required")
        elif len(description) < DESCRIPTION_MIN_LENGTH:
            violations.append(f"Description must be at least {DESCRIPTION_MIN_LENGTH} characters long")
        elif len(description) > DESCRIPTION_MAX_LENGTH:
            violations.append(f"Description cannot exceed {DESCRIPTION_MAX_LENGTH} characters")

        if self.status not in STATUS_VALUES:
            violations.append(f"Status must be one of: {', '.join(STATUS_VALUES)}")
        if self.priority not in PRIORITY_VALUES:
            violations.append(f"Priority must be one of: {', '.join(PRIORITY_VALUES)}")

        created, updated = as_utc(self.created_at), as_utc(self.updated_at)
        if created is not None and updated is not None and updated < created:
            violations.append("Updated timestamp cannot precede the creation timestamp")

        return violations

    def age_in_days(self, now: Optional[datetime] = None) -> int:
        """Whole days elapsed since the task was created."""
        now = as_utc(now) or datetime.now(timezone.utc)
        elapsed = (now - as_utc(self.created_at)).total_seconds()
        return math.floor(elapsed / SECONDS_PER_DAY)

    def days_until_due(self, now: Optional[datetime] = None) -> Optional[int]:
        """Days left until the due date, rounded up; negative once overdue."""
        if self.due_date is None:
            return None
        now = as_utc(now) or datetime.now(timezone.utc)
        remaining = (as_utc(self.due_date) - now).total_seconds()
        return math.ceil(remaining / SECONDS_PER_DAY)


class TaskPublic(BaseModel):
    """Public representation of a task, serialized with camelCase keys"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    object_id: str = PydanticField(alias="_id")
    title: str
    description: str
    status: TaskStatus
    priority: TaskPriority
    due_date: Optional[datetime] = None
    tags: List[str] = []
    created_at: datetime
    updated_at: datetime
    age_in_days: int
    days_until_due: Optional[int] = None

    @classmethod
    def from_task(cls, task: Task, now: Optional[datetime] = None) -> "TaskPublic":
        now = as_utc(now) or datetime.now(timezone.utc)
        return cls(
            id=str(task.id),
            object_id=str(task.id),
            title=task.title,
            description=task.description,
            status=task.status,
            priority=task.priority,
            due_date=as_utc(task.due_date),
            tags=list(task.tags or []),
            created_at=as_utc(task.created_at),
            updated_at=as_utc(task.updated_at),
            age_in_days=task.age_in_days(now),
            days_until_due=task.days_until_due(now),
        )
