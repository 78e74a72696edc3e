"""
Seed script for the Task Management API
Fills the database with sample tasks: python -m task_api.seed
"""
import argparse
from datetime import datetime, timedelta, timezone
from typing import List, Optional, Sequence

from sqlalchemy.engine import Engine
from sqlmodel import Session

from .database.database import create_db_and_tables, engine as default_engine
from .database.task_repository import TaskRepository
from .models.task import Task
from .services.task_service import TaskService
from .utils.errors import RequestValidationFailed
from .validation.task_rules import validate_create

# Due dates are given as days from now so the samples always pass validation
SAMPLE_TASKS = [
    {
        "title": "Setup development environment",
        "description": "Install Python, the database server, and configure the development environment for the task management application.",
        "status": "completed",
        "priority": "high",
        "days_ahead": 3,
        "tags": ["development", "setup", "environment"],
    },
    {
        "title": "Design database schema",
        "description": "Create a comprehensive database schema for the task management system including all necessary fields and relationships.",
        "status": "completed",
        "priority": "high",
        "days_ahead": 8,
        "tags": ["database", "schema", "design"],
    },
    {
        "title": "Implement user authentication",
        "description": "Develop secure user authentication system with JWT tokens, password hashing, and session management.",
        "status": "in-progress",
        "priority": "high",
        "days_ahead": 20,
        "tags": ["authentication", "security", "jwt"],
    },
    {
        "title": "Create API documentation",
        "description": "Write comprehensive API documentation including endpoint descriptions, request/response examples, and usage instructions.",
        "status": "in-progress",
        "priority": "medium",
        "days_ahead": 13,
        "tags": ["documentation", "api", "readme"],
    },
    {
        "title": "Build frontend",
        "description": "Develop a responsive frontend application with components for task management, including forms and lists.",
        "status": "pending",
        "priority": "medium",
        "days_ahead": 34,
        "tags": ["frontend", "ui"],
    },
    {
        "title": "Implement task filtering",
        "description": "Add advanced filtering capabilities to allow users to filter tasks by status, priority, date, and custom criteria.",
        "status": "pending",
        "priority": "medium",
        "days_ahead": 29,
        "tags": ["filtering", "search", "functionality"],
    },
    {
        "title": "Add email notifications",
        "description": "Implement email notification system for task reminders, due date alerts, and status change notifications.",
        "status": "pending",
        "priority": "low",
        "days_ahead": 39,
        "tags": ["notifications", "email", "alerts"],
    },
    {
        "title": "Optimize database queries",
        "description": "Review and optimize database queries for better performance, add indexes, and implement query caching.",
        "status": "pending",
        "priority": "low",
        "days_ahead": 44,
        "tags": ["optimization", "performance", "database"],
    },
    {
        "title": "Write unit tests",
        "description": "Create comprehensive unit tests for all API endpoints, controllers, and utility functions to ensure code reliability.",
        "status": "pending",
        "priority": "high",
        "days_ahead": 24,
        "tags": ["testing", "unit-tests", "quality"],
    },
    {
        "title": "Deploy to production",
        "description": "Deploy the application to production environment with proper CI/CD pipeline, monitoring, and logging.",
        "status": "pending",
        "priority": "urgent",
        "days_ahead": 49,
        "tags": ["deployment", "production", "devops"],
    },
]


def build_payload(sample: dict, now: datetime) -> dict:
    """Turn a sample entry into a create payload with an absolute due date."""
    payload = {key: value for key, value in sample.items() if key != "days_ahead"}
    if sample.get("days_ahead") is not None:
        payload["dueDate"] = (now + timedelta(days=sample["days_ahead"])).isoformat()
    return payload


def seed_database(db: Session, samples: Sequence[dict] = SAMPLE_TASKS, clear: bool = True) -> List[Task]:
    """
    Insert the sample tasks.

    Args:
        db: Database session
        samples: Sample entries to insert
        clear: Remove every existing task first

    Returns:
        The created tasks
    """
    if clear:
        TaskRepository(db).delete_all()

    now = datetime.now(timezone.utc)
    created = []
    for sample in samples:
        result = validate_create(build_payload(sample, now), now=now)
        if not result.ok:
            raise RequestValidationFailed(result.errors)
        created.append(TaskService.create_task(db, result.value))
    return created


def main(argv: Optional[Sequence[str]] = None, db_engine: Optional[Engine] = None) -> int:
    parser = argparse.ArgumentParser(description="Seed the task database with sample tasks")
    parser.add_argument("--keep", action="store_true", help="keep existing tasks instead of clearing them")
    args = parser.parse_args(argv)

    bind = db_engine or default_engine
    create_db_and_tables(bind)

    with Session(bind) as db:
        if not args.keep:
            print("Clearing existing tasks...")
        print("Seeding database with sample tasks...")
        created = seed_database(db, clear=not args.keep)
        print(f"[OK] Created {len(created)} sample tasks")

        stats = TaskService.get_stats(db)
        print("\nStatus distribution:")
        for stat in stats.status_stats:
            print(f"  {stat.status}: {stat.count} tasks")
        print("\nPriority distribution:")
        for stat in stats.priority_stats:
            print(f"  {stat.priority}: {stat.count} tasks")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
