from __future__ import annotations

from typing import Any, Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

import task_api.models  # noqa: F401  registers the task table
from task_api.config import Settings
from task_api.main import create_app


@pytest.fixture
def engine() -> Iterator[Engine]:
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine: Engine) -> Iterator[Session]:
    with Session(engine) as session:
        yield session


@pytest.fixture
def app_settings() -> Settings:
    return Settings(environment="test", database_url="sqlite://", log_level="WARNING")


@pytest.fixture
def app(app_settings: Settings, engine: Engine) -> FastAPI:
    return create_app(app_settings, db_engine=engine)


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app) as client:
        yield client


def make_payload(**overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "title": "Write report",
        "description": "Summarize the quarterly numbers for the team",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def create_task(client: TestClient):
    def _create(**overrides: Any) -> dict[str, Any]:
        response = client.post("/api/tasks", json=make_payload(**overrides))
        assert response.status_code == 201, response.json()
        return response.json()["data"]

    return _create
