from __future__ import annotations

from sqlalchemy.engine import Engine
from sqlmodel import Session

from task_api.database.task_repository import TaskRepository
from task_api.seed import SAMPLE_TASKS, main, seed_database


def test_seed_replaces_existing_tasks(session: Session) -> None:
    seed_database(session)
    created = seed_database(session)

    assert len(created) == len(SAMPLE_TASKS)
    assert TaskRepository(session).count() == len(SAMPLE_TASKS)


def test_seeded_tasks_are_normalized(session: Session) -> None:
    created = seed_database(session, samples=SAMPLE_TASKS[:1])

    task = created[0]
    assert task.status.value == "completed"
    assert task.tags == ["development", "setup", "environment"]
    assert task.days_until_due() == 3


def test_main_keeps_existing_tasks_when_asked(engine: Engine, capsys) -> None:
    assert main([], db_engine=engine) == 0
    assert main(["--keep"], db_engine=engine) == 0

    with Session(engine) as session:
        assert TaskRepository(session).count() == 2 * len(SAMPLE_TASKS)

    output = capsys.readouterr().out
    assert "Created 10 sample tasks" in output
    assert "Priority distribution:" in output
