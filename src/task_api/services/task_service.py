"""
Task service module for the Task Management API
Handles business logic for task operations
"""
import uuid
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Dict, List

from sqlmodel import Session

from ..database.task_repository import TaskRepository
from ..models.task import Task, TaskStatus, TaskPriority, as_utc, utc_now
from ..models.stats import StatusStat, PriorityStat, TaskStats
from ..utils.errors import TaskNotFoundException, InvalidIdentifierError, RecordValidationError
from ..utils.logging import log_error
from .query_builder import TaskListQuery


@dataclass
class TaskPage:
    """One page of the task list with its pagination metadata"""
    tasks: List[Task]
    total: int
    page: int
    total_pages: int

    @property
    def count(self) -> int:
        return len(self.tasks)


class TaskService:
    """Service class for task operations"""

    @staticmethod
    def parse_task_id(raw_id: str) -> uuid.UUID:
        """
        Convert a path identifier into a task id.

        Raises:
            InvalidIdentifierError: If the value is not a valid task id
        """
        try:
            return uuid.UUID(str(raw_id))
        except (TypeError, ValueError):
            raise InvalidIdentifierError(raw_id)

    @staticmethod
    def list_tasks(db: Session, query: TaskListQuery) -> TaskPage:
        """
        Get one page of tasks matching the query's filter.

        Args:
            db: Database session
            query: Filter, sort and pagination built from the request

        Returns:
            TaskPage with the tasks and pagination metadata
        """
        try:
            repository = TaskRepository(db)
            tasks = repository.find(query.filter, query.sort, query.skip, query.limit)
            total = repository.count(query.filter)
            return TaskPage(
                tasks=tasks,
                total=total,
                page=query.page,
                total_pages=query.total_pages(total),
            )
        except Exception as e:
            log_error(e, "TaskService.list_tasks")
            raise

    @staticmethod
    def get_task_by_id(db: Session, task_id: str) -> Task:
        """
        Get a specific task by ID.

        Args:
            db: Database session
            task_id: Task ID as given in the request path

        Returns:
            Task object

        Raises:
            InvalidIdentifierError: If the ID is malformed
            TaskNotFoundException: If no task has this ID
        """
        parsed_id = TaskService.parse_task_id(task_id)
        try:
            task = TaskRepository(db).get(parsed_id)
        except Exception as e:
            log_error(e, "TaskService.get_task_by_id", task_id)
            raise

        if task is None:
            raise TaskNotFoundException(task_id)
        return task

    @staticmethod
    def create_task(db: Session, task_data: Dict[str, Any]) -> Task:
        """
        Create a new task.

        Args:
            db: Database session
            task_data: Normalized fields from the create validator

        Returns:
            Created Task object
        """
        now = utc_now()
        task = Task(
            title=task_data["title"],
            description=task_data["description"],
            status=TaskStatus(task_data.get("status", TaskStatus.PENDING)),
            priority=TaskPriority(task_data.get("priority", TaskPriority.MEDIUM)),
            due_date=task_data.get("due_date"),
            tags=list(task_data.get("tags", [])),
            created_at=now,
            updated_at=now,
        )

        try:
            return TaskRepository(db).save(task)
        except RecordValidationError:
            raise
        except Exception as e:
            log_error(e, "TaskService.create_task")
            db.rollback()
            raise

    @staticmethod
    def update_task(db: Session, task_id: str, task_data: Dict[str, Any]) -> Task:
        """
        Update only the supplied fields of a task.

        Args:
            db: Database session
            task_id: Task ID as given in the request path
            task_data: Normalized fields from the update validator; may be empty

        Returns:
            Updated Task object
        """
        task = TaskService.get_task_by_id(db, task_id)

        for field, value in task_data.items():
            if field == "status":
                value = TaskStatus(value)
            elif field == "priority":
                value = TaskPriority(value)
            elif field == "tags":
                value = list(value)
            setattr(task, field, value)

        # updatedAt must move forward on every update, even within one clock tick
        touched = utc_now()
        previous = as_utc(task.updated_at)
        if touched <= previous:
            touched = previous + timedelta(microseconds=1)
        task.updated_at = touched

        try:
            return TaskRepository(db).save(task)
        except RecordValidationError:
            db.rollback()
            raise
        except Exception as e:
            log_error(e, "TaskService.update_task", task_id)
            db.rollback()
            raise

    @staticmethod
    def delete_task(db: Session, task_id: str) -> None:
        """
        Permanently delete a task.

        Raises:
            TaskNotFoundException: If no task has this ID
        """
        task = TaskService.get_task_by_id(db, task_id)
        try:
            TaskRepository(db).delete(task)
        except Exception as e:
            log_error(e, "TaskService.delete_task", task_id)
            db.rollback()
            raise

    @staticmethod
    def get_stats(db: Session) -> TaskStats:
        """
        Aggregate task counts by status and by priority.

        Status groups also carry the average priority weight
        (low=1, medium=2, high=3, urgent=4). Both group lists are ordered
        by descending count.
        """
        try:
            repository = TaskRepository(db)
            status_stats = [
                StatusStat(status=status, count=count, avg_priority=average)
                for status, count, average in repository.status_breakdown()
            ]
            priority_stats = [
                PriorityStat(priority=priority, count=count)
                for priority, count in repository.group_count("priority")
            ]
            return TaskStats(
                status_stats=status_stats,
                priority_stats=priority_stats,
                total_tasks=repository.count(),
            )
        except Exception as e:
            log_error(e, "TaskService.get_stats")
            raise


__all__ = ["TaskService", "TaskPage"]
