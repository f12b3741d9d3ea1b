"""Use Case Hub API - FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map UseCaseHubError -> {success: false, error, code}
    - CORS configured from settings (not hardcoded)
    - One DatabaseSessionManager and one EventBus per process, built in the
      lifespan and handed to the repository/service explicitly (app.state)
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from usecase_hub.api.error_handlers import register_error_handlers
from usecase_hub.api.routes import health, use_cases
from usecase_hub.config import Settings, get_settings
from usecase_hub.db.use_case_repository import SqlUseCaseRepository
from usecase_hub.infrastructure.database import DatabaseSessionManager
from usecase_hub.infrastructure.event_bus import EventBus
from usecase_hub.infrastructure.event_logging import register_event_logging
from usecase_hub.infrastructure.observability import setup_logging
from usecase_hub.services.use_case_service import UseCaseService

logger = logging.getLogger(__name__)


def build_service(
    db_manager: DatabaseSessionManager, settings: Settings,
) -> tuple[UseCaseService, EventBus]:
    """Wire repository, bus and service around an existing session manager."""
    bus = EventBus(verbose=settings.is_development)
    register_event_logging(bus)
    repository = SqlUseCaseRepository(db_manager)
    return UseCaseService(repository, bus), bus


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.effective_log_level, settings.log_format)
    db_manager = DatabaseSessionManager(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        echo=settings.is_development,
        ssl=settings.database_ssl,
    )
    service, bus = build_service(db_manager, settings)
    app.state.db_manager = db_manager
    app.state.event_bus = bus
    app.state.use_case_service = service
    logger.info(f"Use Case Hub API started ({settings.environment})")
    yield
    bus.clear()
    await db_manager.dispose()
    logger.info("Use Case Hub API shutting down")


app = FastAPI(
    title="Use Case Hub API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(use_cases.router)

register_error_handlers(app)


@app.get("/", response_class=PlainTextResponse, include_in_schema=False)
async def root():
    return "Use Case Hub backend is running"
