"""UseCase ORM - persists one innovation/project record per row.

Invariants:
    - id is a UUID primary key assigned by the repository, never updated
    - department and status restricted to their closed sets by CHECK constraints
    - technology_stack, tags, internal_links, related_use_case_ids stored as JSON
    - created_at <= updated_at; both timezone-aware
    - free-text columns are unbounded Text; only the closed-set columns are sized

Design Decisions:
    - JSON columns for the structured fields: stored and returned as-is
    - No server defaults on timestamps: the repository sets both from one clock reading
"""

import uuid
from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Index, JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from usecase_hub.core.domain_types import VALID_DEPARTMENTS, VALID_STATUSES
from usecase_hub.db.base import Base


def _in_clause(column: str, values: tuple[str, ...]) -> str:
    quoted = ", ".join(f"'{v}'" for v in values)
    return f"{column} IN ({quoted})"


class UseCase(Base):
    """A tracked use case."""
    __tablename__ = "use_cases"
    __table_args__ = (
        CheckConstraint(
            _in_clause("department", VALID_DEPARTMENTS),
            name="ck_use_cases_department",
        ),
        CheckConstraint(
            _in_clause("status", VALID_STATUSES),
            name="ck_use_cases_status",
        ),
        Index("ix_use_cases_created_at", "created_at"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    title: Mapped[str] = mapped_column(Text, nullable=False)
    short_description: Mapped[str] = mapped_column(Text, nullable=False)
    full_description: Mapped[str] = mapped_column(Text, nullable=False)
    department: Mapped[str] = mapped_column(String(50), nullable=False)
    status: Mapped[str] = mapped_column(String(50), nullable=False)
    owner_name: Mapped[str] = mapped_column(Text, nullable=False)
    owner_email: Mapped[str] = mapped_column(Text, nullable=False)
    business_impact: Mapped[str | None] = mapped_column(Text, nullable=True)
    technology_stack: Mapped[list] = mapped_column(
        JSON, nullable=False, default=list,
    )
    internal_links: Mapped[dict] = mapped_column(
        JSON, nullable=False, default=dict,
    )
    tags: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    related_use_case_ids: Mapped[list] = mapped_column(
        JSON, nullable=False, default=list,
    )
    application_url: Mapped[str | None] = mapped_column(
        Text, nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
