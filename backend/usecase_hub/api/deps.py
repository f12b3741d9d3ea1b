"""Request Dependencies - hand out the process-wide objects built in the lifespan."""

from fastapi import Request

from usecase_hub.infrastructure.database import DatabaseSessionManager
from usecase_hub.services.use_case_service import UseCaseService


def get_use_case_service(request: Request) -> UseCaseService:
    return request.app.state.use_case_service


def get_db_manager(request: Request) -> DatabaseSessionManager | None:
    return getattr(request.app.state, "db_manager", None)
