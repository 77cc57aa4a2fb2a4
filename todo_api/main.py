"""Todo API — FastAPI application entry point and composition root.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map TodoError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database, repositories and workflows built once in the lifespan and
      stored on app.state; routes reach them through api/dependencies.py

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Explicit wiring over a DI container: the whole object graph fits in one function
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from todo_api.api.error_handlers import register_error_handlers
from todo_api.api.routes import health, tasks, users
from todo_api.config import get_settings
from todo_api.infrastructure.database import init_db
from todo_api.infrastructure.observability import setup_logging
from todo_api.infrastructure.task_repository import SqlTaskRepository
from todo_api.infrastructure.user_repository import SqlUserRepository
from todo_api.services.task_workflows import TaskWorkflow
from todo_api.services.user_workflows import UserWorkflow

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    db_manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    app.state.db_manager = db_manager
    app.state.user_workflow = UserWorkflow(SqlUserRepository(db_manager.session))
    app.state.task_workflow = TaskWorkflow(SqlTaskRepository(db_manager.session))
    logger.info("Todo API started")
    yield
    logger.info("Todo API shutting down")
    await db_manager.dispose()


app = FastAPI(
    title="Todo API", version="1.0.0", lifespan=lifespan,
)

# CORS — configured from settings, not hardcoded
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(users.router)
app.include_router(tasks.router)

register_error_handlers(app)


def run() -> None:
    """Console entry point (todo-api): serve the app with uvicorn."""
    # log_config=None: setup_logging in the lifespan owns the handlers
    uvicorn.run(
        "todo_api.main:app", host=settings.host, port=settings.port,
        log_config=None,
    )
