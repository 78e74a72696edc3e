from __future__ import annotations

from datetime import datetime, timezone

import pytest
from sqlalchemy.engine import Engine
from sqlmodel import Session

from task_api.database.task_repository import TaskRepository
from task_api.models.task import Task, TaskPriority, TaskStatus
from task_api.services.query_builder import SortSpec, TaskFilter
from task_api.services.task_service import TaskService
from task_api.utils.errors import RecordValidationError


def add(session: Session, title: str, status: str = "pending", priority: str = "medium", description: str = "Plain task description") -> Task:
    return TaskRepository(session).save(
        Task(
            title=title,
            description=description,
            status=TaskStatus(status),
            priority=TaskPriority(priority),
        )
    )


def test_find_filters_sorts_and_paginates(session: Session) -> None:
    repository = TaskRepository(session)
    for title in ["Delta", "Alpha", "Charlie", "Bravo"]:
        add(session, title)

    first_page = repository.find(None, SortSpec(field="title", descending=False), skip=0, limit=3)
    second_page = repository.find(None, SortSpec(field="title", descending=False), skip=3, limit=3)

    assert [task.title for task in first_page] == ["Alpha", "Bravo", "Charlie"]
    assert [task.title for task in second_page] == ["Delta"]
    assert repository.count() == 4


def test_status_and_priority_filters_are_combined(session: Session) -> None:
    repository = TaskRepository(session)
    add(session, "Match", status="completed", priority="high")
    add(session, "Wrong priority", status="completed", priority="low")
    add(session, "Wrong status", status="pending", priority="high")

    task_filter = TaskFilter(status="completed", priority="high")
    found = repository.find(task_filter, SortSpec(), skip=0, limit=10)

    assert [task.title for task in found] == ["Match"]
    assert repository.count(task_filter) == 1


def test_unknown_enum_filter_matches_nothing(session: Session) -> None:
    add(session, "Anything")

    assert TaskRepository(session).count(TaskFilter(status="archived")) == 0


def test_search_matches_title_or_description(session: Session) -> None:
    repository = TaskRepository(session)
    add(session, "Quarterly REPORT")
    add(session, "Team sync", description="Prepare the report slides")
    add(session, "Unrelated", description="Nothing to see in this one")

    found = repository.find(TaskFilter(search="Report"), SortSpec(field="title", descending=False), 0, 10)

    assert [task.title for task in found] == ["Quarterly REPORT", "Team sync"]


def test_search_treats_wildcards_literally(session: Session) -> None:
    add(session, "Discount 50% off")
    add(session, "Regular pricing")

    assert TaskRepository(session).count(TaskFilter(search="%")) == 1


def test_group_count_orders_by_count(session: Session) -> None:
    add(session, "One", priority="high")
    add(session, "Two", priority="high")
    add(session, "Three", priority="low")

    assert TaskRepository(session).group_count("priority") == [("high", 2), ("low", 1)]


def test_status_breakdown_averages_priority_weights(session: Session) -> None:
    add(session, "One", status="pending", priority="low")
    add(session, "Two", status="pending", priority="high")
    add(session, "Three", status="pending", priority="high")
    add(session, "Four", status="completed", priority="urgent")

    breakdown = TaskRepository(session).status_breakdown()

    assert breakdown[0][0] == "pending"
    assert breakdown[0][1] == 3
    assert breakdown[0][2] == pytest.approx(7 / 3)
    assert breakdown[1] == ("completed", 1, 4.0)


def test_save_rejects_invalid_record(session: Session) -> None:
    repository = TaskRepository(session)

    with pytest.raises(RecordValidationError) as excinfo:
        repository.save(Task(title="ab", description="Plain task description"))

    assert excinfo.value.messages == ["Title must be at least 3 characters long"]
    assert repository.count() == 0


def test_delete_and_delete_all(session: Session) -> None:
    repository = TaskRepository(session)
    first = add(session, "First")
    first_id = first.id
    add(session, "Second")

    repository.delete(first)
    assert repository.get(first_id) is None
    assert repository.delete_all() == 1
    assert repository.count() == 0


def test_timestamps_round_trip_as_aware_utc(engine: Engine) -> None:
    due = datetime(2030, 5, 1, 8, 30, tzinfo=timezone.utc)
    with Session(engine) as session:
        created = TaskService.create_task(
            session,
            {"title": "Write report", "description": "Summarize the quarterly numbers", "due_date": due},
        )
        task_id = created.id

    with Session(engine) as session:
        task = TaskRepository(session).get(task_id)
        assert task.created_at.tzinfo is not None
        assert task.updated_at.utcoffset().total_seconds() == 0
        assert task.due_date == due

        first_update = task.updated_at
        updated = TaskService.update_task(session, str(task_id), {"priority": "high"})
        assert updated.updated_at > first_update
        assert updated.record_violations() == []
