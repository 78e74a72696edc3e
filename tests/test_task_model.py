from __future__ import annotations

from datetime import datetime, timezone

from task_api.models.task import Task, TaskPublic, TaskPriority, TaskStatus

NOW = datetime(2026, 3, 10, 12, 0, tzinfo=timezone.utc)


def make_task(**overrides) -> Task:
    fields = {
        "title": "Write report",
        "description": "Summarize the quarterly numbers",
        "created_at": datetime(2026, 3, 1, 18, 0, tzinfo=timezone.utc),
        "updated_at": datetime(2026, 3, 1, 18, 0, tzinfo=timezone.utc),
    }
    fields.update(overrides)
    return Task(**fields)


def test_defaults() -> None:
    task = Task(title="Write report", description="Summarize the quarterly numbers")

    assert task.status == TaskStatus.PENDING
    assert task.priority == TaskPriority.MEDIUM
    assert task.tags == []
    assert task.id is not None
    assert task.updated_at >= task.created_at


def test_age_in_days_counts_whole_days() -> None:
    task = make_task()

    assert task.age_in_days(NOW) == 8


def test_days_until_due_rounds_up() -> None:
    assert make_task().days_until_due(NOW) is None
    assert make_task(due_date=datetime(2026, 3, 11, 13, 0, tzinfo=timezone.utc)).days_until_due(NOW) == 2
    assert make_task(due_date=datetime(2026, 3, 10, 13, 0, tzinfo=timezone.utc)).days_until_due(NOW) == 1
    # overdue tasks report a non-positive count
    assert make_task(due_date=datetime(2026, 3, 8, 12, 0, tzinfo=timezone.utc)).days_until_due(NOW) == -2


def test_record_violations() -> None:
    assert make_task().record_violations() == []

    bad = make_task(title="ab", description="", status="archived")
    assert bad.record_violations() == [
        "Title must be at least 3 characters long",
        "Task description is required",
        "Status must be one of: pending, in-progress, completed, cancelled",
    ]


def test_updated_at_cannot_precede_created_at() -> None:
    task = make_task(updated_at=datetime(2026, 2, 1, tzinfo=timezone.utc))

    assert task.record_violations() == ["Updated timestamp cannot precede the creation timestamp"]


def test_public_representation() -> None:
    task = make_task(due_date=datetime(2026, 3, 12, 12, 0, tzinfo=timezone.utc), tags=["work"])

    public = TaskPublic.from_task(task, now=NOW).model_dump(mode="json", by_alias=True)

    assert public["id"] == str(task.id)
    assert public["_id"] == str(task.id)
    assert public["dueDate"].startswith("2026-03-12T12:00:00")
    assert public["createdAt"].startswith("2026-03-01T18:00:00")
    assert public["ageInDays"] == 8
    assert public["daysUntilDue"] == 2
    assert public["tags"] == ["work"]
    assert public["status"] == "pending"
