"""Use Case Schemas - typed payload and record shapes at the service boundary.

Invariants:
    - UseCaseCreate: every required field mandatory; related_use_case_ids,
      business_impact, application_url optional
    - UseCaseUpdate: every field optional; presence is tracked by model_fields_set
      (absent = leave unchanged, explicit null = clear a nullable field)
    - UseCaseResponse timestamps are always timezone-aware UTC
    - Unknown keys are ignored on both request shapes

Design Decisions:
    - Department / UseCaseStatus enum fields: pydantic rejects out-of-set values natively
    - internal_links typed as dict[str, Any]: a keyed structure, values left free-form
"""

from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from usecase_hub.core.domain_types import Department, UseCaseStatus

UPDATABLE_FIELDS: tuple[str, ...] = (
    "title",
    "short_description",
    "full_description",
    "department",
    "status",
    "owner_name",
    "owner_email",
    "business_impact",
    "technology_stack",
    "internal_links",
    "tags",
    "related_use_case_ids",
    "application_url",
)


class UseCaseCreate(BaseModel):
    """Create request - shape guaranteed after validate_create passes."""
    model_config = ConfigDict(extra="ignore", use_enum_values=True)

    title: str
    short_description: str
    full_description: str
    department: Department
    status: UseCaseStatus
    owner_name: str
    owner_email: str
    business_impact: str | None = None
    technology_stack: list[str]
    tags: list[str]
    internal_links: dict[str, Any]
    related_use_case_ids: list[str] | None = None
    application_url: str | None = None


class UseCaseUpdate(BaseModel):
    """Update request - only fields in model_fields_set are applied."""
    model_config = ConfigDict(extra="ignore", use_enum_values=True)

    title: str | None = None
    short_description: str | None = None
    full_description: str | None = None
    department: Department | None = None
    status: UseCaseStatus | None = None
    owner_name: str | None = None
    owner_email: str | None = None
    business_impact: str | None = None
    technology_stack: list[str] | None = None
    internal_links: dict[str, Any] | None = None
    tags: list[str] | None = None
    related_use_case_ids: list[str] | None = None
    application_url: str | None = None

    @property
    def present_fields(self) -> list[str]:
        """Fields the caller asked to change, in column order."""
        return [name for name in UPDATABLE_FIELDS if name in self.model_fields_set]


class UseCaseResponse(BaseModel):
    """Persisted use case record."""
    model_config = ConfigDict(from_attributes=True, use_enum_values=True)

    id: UUID
    title: str
    short_description: str
    full_description: str
    department: Department
    status: UseCaseStatus
    owner_name: str
    owner_email: str
    business_impact: str | None = None
    technology_stack: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    internal_links: dict[str, Any] = Field(default_factory=dict)
    related_use_case_ids: list[str] = Field(default_factory=list)
    application_url: str | None = None
    created_at: datetime
    updated_at: datetime

    @field_validator("created_at", "updated_at")
    @classmethod
    def ensure_utc(cls, v: datetime) -> datetime:
        # SQLite hands back naive datetimes; stored values are always UTC
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v
