"""Use Case Lifecycle Service - the single entry point for create/read/update/delete.

Invariants:
    - Validation runs before storage; a rejected payload never touches the
      repository or the bus
    - Events are published only after the storage change is committed
    - update/delete confirm the record exists first; absent -> ResourceNotFoundError
    - StorageError and any unexpected exception are logged with their cause and
      re-raised as a generic InternalError; validation and not-found pass through
    - Bus handler failures never reach the caller (EventBus isolates them)

Design Decisions:
    - Repository and bus injected through the constructor; no global lookup
    - useCase.updated carries the raw requested fields, not the merged record
"""

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from usecase_hub.core.domain_types import UseCaseEvent
from usecase_hub.core.errors import (
    ErrorContext,
    InternalError,
    PayloadValidationError,
    ResourceNotFoundError,
)
from usecase_hub.core.repository_protocols import UseCaseRepository
from usecase_hub.core.validate_use_case import validate_create, validate_update
from usecase_hub.infrastructure.event_bus import EventBus
from usecase_hub.schemas.use_case import (
    UseCaseCreate, UseCaseResponse, UseCaseUpdate,
)

logger = logging.getLogger(__name__)

RESOURCE = "Use case"


def _parse_payload(model: type, payload: Mapping):
    """Typed request from an already rule-checked payload."""
    try:
        return model.model_validate(dict(payload))
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(loc) for loc in first["loc"])
        raise PayloadValidationError(f"{field}: {first['msg']}", field=field) from e


def _internal(message: str, exc: Exception, use_case_id: str | None = None) -> InternalError:
    logger.error(
        f"{message}: {exc}",
        exc_info=exc,
        extra={
            "use_case_id": use_case_id,
            "error_code": getattr(exc, "code", None),
        },
    )
    return InternalError(message, ErrorContext(use_case_id=use_case_id))


class UseCaseService:
    """Validates, persists and announces use case lifecycle changes."""

    def __init__(self, repository: UseCaseRepository, event_bus: EventBus):
        self._repository = repository
        self._bus = event_bus

    async def list_all(self) -> list[UseCaseResponse]:
        """All records, newest first."""
        try:
            return await self._repository.find_all()
        except Exception as e:
            raise _internal("Failed to fetch use cases", e) from e

    async def read(self, use_case_id: str) -> UseCaseResponse:
        try:
            record = await self._repository.find_by_id(use_case_id)
        except Exception as e:
            raise _internal("Failed to fetch use case", e, use_case_id) from e
        if record is None:
            raise ResourceNotFoundError(RESOURCE, use_case_id)
        return record

    async def create(self, payload: Mapping[str, Any]) -> UseCaseResponse:
        error = validate_create(payload)
        if error:
            raise PayloadValidationError(error)
        request = _parse_payload(UseCaseCreate, payload)

        try:
            record = await self._repository.create(request)
        except Exception as e:
            raise _internal("Failed to create use case", e) from e

        await self._bus.publish(UseCaseEvent.CREATED.value, {
            "id": str(record.id),
            "title": record.title,
            "department": record.department,
            "status": record.status,
        })
        logger.info("Use case created", extra={"use_case_id": str(record.id)})
        return record

    async def update(
        self, use_case_id: str, payload: Mapping[str, Any],
    ) -> UseCaseResponse:
        if not payload:
            raise PayloadValidationError("No update data provided")
        error = validate_update(payload)
        if error:
            raise PayloadValidationError(error)
        request = _parse_payload(UseCaseUpdate, payload)
        changed = request.present_fields
        if not changed:
            raise PayloadValidationError("No update data provided")

        try:
            if await self._repository.find_by_id(use_case_id) is None:
                raise ResourceNotFoundError(RESOURCE, use_case_id)
            record = await self._repository.update(use_case_id, request)
        except ResourceNotFoundError:
            raise
        except Exception as e:
            raise _internal("Failed to update use case", e, use_case_id) from e
        if record is None:
            # removed between the existence check and the update
            raise ResourceNotFoundError(RESOURCE, use_case_id)

        await self._bus.publish(UseCaseEvent.UPDATED.value, {
            "id": str(record.id),
            "title": record.title,
            "changes": {name: payload[name] for name in changed},
        })
        logger.info("Use case updated", extra={"use_case_id": str(record.id)})
        return record

    async def delete(self, use_case_id: str) -> bool:
        try:
            existing = await self._repository.find_by_id(use_case_id)
            if existing is None:
                raise ResourceNotFoundError(RESOURCE, use_case_id)
            deleted = await self._repository.delete(use_case_id)
        except ResourceNotFoundError:
            raise
        except Exception as e:
            raise _internal("Failed to delete use case", e, use_case_id) from e
        if not deleted:
            raise ResourceNotFoundError(RESOURCE, use_case_id)

        await self._bus.publish(UseCaseEvent.DELETED.value, {
            "id": str(existing.id),
            "title": existing.title,
        })
        logger.info("Use case deleted", extra={"use_case_id": str(existing.id)})
        return True
