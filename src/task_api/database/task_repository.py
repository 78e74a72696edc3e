"""
Task repository for the Task Management API
The persistence interface used by the task service: filtered finds, counts,
grouped counts and single-record reads and writes
"""
import uuid
from typing import TYPE_CHECKING, List, Optional, Tuple

from sqlalchemy import case, false, func, or_
from sqlmodel import Session, col, select

from ..models.task import Task, TaskStatus, TaskPriority, PRIORITY_WEIGHTS
from ..utils.errors import RecordValidationError

if TYPE_CHECKING:
    from ..services.query_builder import TaskFilter, SortSpec

GROUPABLE_FIELDS = {"status": Task.status, "priority": Task.priority}


def _enum_condition(column, enum_cls, value: str):
    try:
        return column == enum_cls(value)
    except ValueError:
        # not a known value: matches nothing
        return false()


class TaskRepository:
    """Runs task queries against a SQLModel session"""

    def __init__(self, db: Session):
        self.db = db

    # Queries

    @staticmethod
    def build_conditions(task_filter: Optional["TaskFilter"]) -> list:
        """Translate a TaskFilter into SQL conditions, combined with AND."""
        if task_filter is None:
            return []

        conditions = []
        if task_filter.status is not None:
            conditions.append(_enum_condition(col(Task.status), TaskStatus, task_filter.status))
        if task_filter.priority is not None:
            conditions.append(_enum_condition(col(Task.priority), TaskPriority, task_filter.priority))
        if task_filter.search is not None:
            term = task_filter.search.lower()
            conditions.append(
                or_(
                    func.lower(col(Task.title)).contains(term, autoescape=True),
                    func.lower(col(Task.description)).contains(term, autoescape=True),
                )
            )
        return conditions

    def find(self, task_filter: Optional["TaskFilter"], sort: "SortSpec", skip: int, limit: int) -> List[Task]:
        """Return one page of tasks matching the filter, in sort order."""
        column = col(getattr(Task, sort.field))
        order = column.desc() if sort.descending else column.asc()

        statement = select(Task).where(*self.build_conditions(task_filter))
        statement = statement.order_by(order, col(Task.id).asc())
        statement = statement.offset(skip).limit(limit)
        return list(self.db.exec(statement).all())

    def count(self, task_filter: Optional["TaskFilter"] = None) -> int:
        """Count tasks matching the filter, ignoring pagination."""
        statement = select(func.count(col(Task.id))).where(*self.build_conditions(task_filter))
        return self.db.exec(statement).one()

    def group_count(self, field: str) -> List[Tuple[str, int]]:
        """
        Count tasks per distinct value of a field.

        Args:
            field: "status" or "priority"

        Returns:
            (value, count) pairs ordered by descending count
        """
        column = col(GROUPABLE_FIELDS[field])
        count = func.count(col(Task.id)).label("count")
        statement = select(column, count).group_by(column).order_by(count.desc(), column.asc())
        return [(_plain(value), total) for value, total in self.db.exec(statement).all()]

    def status_breakdown(self) -> List[Tuple[str, int, float]]:
        """
        Count tasks per status along with the average priority weight of each group.

        Returns:
            (status, count, average weight) triples ordered by descending count
        """
        weight = case(
            *[(col(Task.priority) == priority, value) for priority, value in PRIORITY_WEIGHTS.items()],
            else_=0,
        )
        count = func.count(col(Task.id)).label("count")
        statement = (
            select(col(Task.status), count, func.avg(weight).label("avg_priority"))
            .group_by(col(Task.status))
            .order_by(count.desc(), col(Task.status).asc())
        )
        return [
            (_plain(status), total, float(average or 0))
            for status, total, average in self.db.exec(statement).all()
        ]

    def get(self, task_id: uuid.UUID) -> Optional[Task]:
        return self.db.get(Task, task_id)

    # Writes

    def save(self, task: Task) -> Task:
        """Check the record's constraints, then insert or update it."""
        violations = task.record_violations()
        if violations:
            raise RecordValidationError(violations)

        self.db.add(task)
        self.db.commit()
        self.db.refresh(task)
        return task

    def delete(self, task: Task) -> None:
        self.db.delete(task)
        self.db.commit()

    def delete_all(self) -> int:
        """Remove every task; returns how many were removed."""
        tasks = self.db.exec(select(Task)).all()
        for task in tasks:
            self.db.delete(task)
        self.db.commit()
        return len(tasks)


def _plain(value) -> str:
    return value.value if hasattr(value, "value") else str(value)


__all__ = ["TaskRepository"]
