"""
Database connection for the Task Management API
Creates the engine and provides one session per request
"""
from typing import Generator, Optional

from fastapi import Request
from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine

from ..config import settings


def build_engine(database_url: str, echo: bool = False, **kwargs) -> Engine:
    """Create an engine; SQLite connections are shared across threads."""
    connect_args = kwargs.pop("connect_args", {})
    if database_url.startswith("sqlite"):
        connect_args.setdefault("check_same_thread", False)
    return create_engine(database_url, echo=echo, connect_args=connect_args, **kwargs)


engine = build_engine(settings.database_url, echo=settings.database_echo)


def create_db_and_tables(bind: Optional[Engine] = None) -> None:
    """Create the task table if it does not exist yet."""
    # Importing the models registers their tables on SQLModel.metadata
    from .. import models  # noqa: F401

    SQLModel.metadata.create_all(bind or engine)


def get_session(request: Request) -> Generator[Session, None, None]:
    """Yield a session on the application's engine, closed when the request finishes."""
    with Session(getattr(request.app.state, "engine", engine)) as session:
        yield session


__all__ = ["engine", "build_engine", "create_db_and_tables", "get_session"]
