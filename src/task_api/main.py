"""
Application entry point for the Task Management API
Builds the FastAPI app: middleware, routers, error handlers and database setup
"""
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.engine import Engine

from .api.errors import UnhandledErrorMiddleware, register_exception_handlers
from .api.routes import tasks_router, system_router
from .config import Settings, settings
from .database.database import build_engine, create_db_and_tables, engine as default_engine
from .utils.logging import RequestLoggingMiddleware, configure_logging, get_logger


def create_app(app_settings: Optional[Settings] = None, db_engine: Optional[Engine] = None) -> FastAPI:
    """
    Create the Task Management API application.

    Args:
        app_settings: Settings to use; the environment-derived settings by default
        db_engine: Engine to use; built from app_settings.database_url by default

    Returns:
        Configured FastAPI application
    """
    app_settings = app_settings or settings
    if db_engine is None:
        if app_settings.database_url == settings.database_url:
            db_engine = default_engine
        else:
            db_engine = build_engine(app_settings.database_url, echo=app_settings.database_echo)

    logger = configure_logging(app_settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        create_db_and_tables(app.state.engine)
        logger.info(
            "Task Management API started (environment=%s, port=%s)",
            app_settings.environment,
            app_settings.port,
        )
        yield

    app = FastAPI(
        title="Task Management API",
        version=app_settings.api_version,
        lifespan=lifespan,
    )
    app.state.settings = app_settings
    app.state.engine = db_engine

    # innermost: unhandled errors are turned into responses inside the CORS layer
    app.add_middleware(UnhandledErrorMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[app_settings.frontend_url],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    if app_settings.is_development:
        app.add_middleware(RequestLoggingMiddleware)

    app.include_router(system_router)
    app.include_router(tasks_router, prefix="/api/tasks", tags=["tasks"])

    register_exception_handlers(app)
    return app


app = create_app()


def run() -> None:
    """Serve the application with uvicorn."""
    import uvicorn

    get_logger().info("Health check: http://localhost:%s/health", settings.port)
    uvicorn.run("task_api.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
