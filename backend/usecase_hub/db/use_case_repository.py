"""SQL Use Case Repository - storage reads/writes for the use_cases table.

Invariants:
    - create assigns id, created_at and updated_at (one clock reading) and
      defaults related_use_case_ids to an empty list
    - update copies only fields present in the request (explicit per-field
      check against model_fields_set) and always refreshes updated_at
    - updated_at strictly increases on every update, even when the clock
      repeats a reading or steps backwards
    - update locks the row, reads the stored updated_at and writes with
      UPDATE ... RETURNING in one transaction: concurrent updates to the same
      id are last-write-wins at the storage layer
    - An id that is not a valid UUID is treated as unknown, never as an error
    - Every SQLAlchemy failure surfaces as StorageError (via DatabaseSessionManager)
"""

import logging
import uuid
from datetime import datetime, timedelta, timezone

from sqlalchemy import delete, exists, select, update

from usecase_hub.core.domain_types import UseCaseId
from usecase_hub.infrastructure.database import DatabaseSessionManager
from usecase_hub.models.use_case import UseCase
from usecase_hub.schemas.use_case import (
    UPDATABLE_FIELDS, UseCaseCreate, UseCaseResponse, UseCaseUpdate,
)

logger = logging.getLogger(__name__)


def parse_use_case_id(raw: str | uuid.UUID) -> UseCaseId | None:
    """Opaque id -> UUID, or None when it cannot name a stored record."""
    if isinstance(raw, uuid.UUID):
        return UseCaseId(raw)
    try:
        return UseCaseId(uuid.UUID(str(raw)))
    except ValueError:
        return None


def _to_record(row: UseCase) -> UseCaseResponse:
    return UseCaseResponse.model_validate(row)


def build_update_values(request: UseCaseUpdate) -> dict:
    """Column values for the fields the caller sent. Absent fields are never touched."""
    values: dict = {}
    present = request.model_fields_set
    for name in UPDATABLE_FIELDS:
        if name in present:
            values[name] = getattr(request, name)
    return values


def next_updated_at(previous: datetime, now: datetime) -> datetime:
    """The later of now and one microsecond past the stored timestamp."""
    if previous.tzinfo is None:
        # SQLite hands back naive values for timezone-aware columns
        previous = previous.replace(tzinfo=timezone.utc)
    return max(now, previous + timedelta(microseconds=1))


class SqlUseCaseRepository:
    """UseCaseRepository backed by the async SQLAlchemy session manager."""

    def __init__(self, db: DatabaseSessionManager):
        self._db = db

    async def find_all(self) -> list[UseCaseResponse]:
        async with self._db.session() as session:
            result = await session.execute(
                select(UseCase).order_by(UseCase.created_at.desc()),
            )
            return [_to_record(row) for row in result.scalars().all()]

    async def find_by_id(self, use_case_id: str) -> UseCaseResponse | None:
        uid = parse_use_case_id(use_case_id)
        if uid is None:
            return None
        async with self._db.session() as session:
            row = await session.get(UseCase, uid)
            return _to_record(row) if row else None

    async def create(self, request: UseCaseCreate) -> UseCaseResponse:
        now = datetime.now(timezone.utc)
        row = UseCase(
            id=uuid.uuid4(),
            title=request.title,
            short_description=request.short_description,
            full_description=request.full_description,
            department=request.department,
            status=request.status,
            owner_name=request.owner_name,
            owner_email=request.owner_email,
            business_impact=request.business_impact,
            technology_stack=list(request.technology_stack),
            internal_links=dict(request.internal_links),
            tags=list(request.tags),
            related_use_case_ids=list(request.related_use_case_ids or []),
            application_url=request.application_url,
            created_at=now,
            updated_at=now,
        )
        async with self._db.session() as session:
            session.add(row)
            await session.commit()
        logger.debug("Use case inserted", extra={"use_case_id": str(row.id)})
        return _to_record(row)

    async def update(
        self, use_case_id: str, request: UseCaseUpdate,
    ) -> UseCaseResponse | None:
        uid = parse_use_case_id(use_case_id)
        if uid is None:
            return None
        values = build_update_values(request)
        async with self._db.session() as session:
            previous = (await session.execute(
                select(UseCase.updated_at)
                .where(UseCase.id == uid)
                .with_for_update(),
            )).scalar_one_or_none()
            if previous is None:
                return None
            values["updated_at"] = next_updated_at(
                previous, datetime.now(timezone.utc),
            )
            result = await session.execute(
                update(UseCase)
                .where(UseCase.id == uid)
                .values(**values)
                .returning(UseCase),
            )
            row = result.scalar_one_or_none()
            await session.commit()
            return _to_record(row) if row else None

    async def delete(self, use_case_id: str) -> bool:
        uid = parse_use_case_id(use_case_id)
        if uid is None:
            return False
        async with self._db.session() as session:
            result = await session.execute(
                delete(UseCase).where(UseCase.id == uid).returning(UseCase.id),
            )
            deleted = result.scalar_one_or_none() is not None
            await session.commit()
            return deleted

    async def exists(self, use_case_id: str) -> bool:
        uid = parse_use_case_id(use_case_id)
        if uid is None:
            return False
        async with self._db.session() as session:
            result = await session.execute(
                select(exists().where(UseCase.id == uid)),
            )
            return bool(result.scalar())
