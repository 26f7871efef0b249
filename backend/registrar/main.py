"""Registrar API — application factory and ASGI entry point.

Invariants:
    - Routers are listed in ROUTERS and registered explicitly (no discovery)
    - The lifespan owns the database engine: created on startup, disposed on shutdown
    - CORS origins come from Settings
    - Error handlers are wired last so they cover every router

Design Decisions:
    - create_app(settings) over a bare module-level app: tests and uvicorn
      share one construction path; `app` stays importable as registrar.main:app
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from registrar.api.error_handlers import register_error_handlers
from registrar.api.routes import courses, departments, health, students, teachers
from registrar.config import Settings, get_settings
from registrar.infrastructure.database import init_db
from registrar.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)

ROUTERS = (
    health.router,
    students.router,
    courses.router,
    teachers.router,
    departments.router,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info(
        f"Registrar API started (missing relations: "
        f"{settings.missing_relation_policy.value})",
    )
    try:
        yield
    finally:
        await manager.dispose()
        logger.info("Registrar API stopped")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    application = FastAPI(
        title="Registrar API", version="1.0.0", lifespan=lifespan,
    )
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    for router in ROUTERS:
        application.include_router(router)
    register_error_handlers(application)
    return application


app = create_app()
