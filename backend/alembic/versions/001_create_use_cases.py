"""Create use_cases table.

Revision ID: 001_use_cases
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_use_cases"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

DEPARTMENTS = ("Marketing", "R&D", "Procurement", "IT", "HR", "Operations")
STATUSES = ("Ideation", "Pre-Evaluation", "Evaluation", "PoC", "MVP", "Live", "Archived")


def _in_clause(column: str, values: tuple[str, ...]) -> str:
    return f"{column} IN ({', '.join(repr(v) for v in values)})"


def upgrade() -> None:
    op.create_table(
        "use_cases",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("title", sa.Text, nullable=False),
        sa.Column("short_description", sa.Text, nullable=False),
        sa.Column("full_description", sa.Text, nullable=False),
        sa.Column("department", sa.String(50), nullable=False),
        sa.Column("status", sa.String(50), nullable=False),
        sa.Column("owner_name", sa.Text, nullable=False),
        sa.Column("owner_email", sa.Text, nullable=False),
        sa.Column("business_impact", sa.Text, nullable=True),
        sa.Column("technology_stack", sa.JSON, nullable=False),
        sa.Column("internal_links", sa.JSON, nullable=False),
        sa.Column("tags", sa.JSON, nullable=False),
        sa.Column("related_use_case_ids", sa.JSON, nullable=False),
        sa.Column("application_url", sa.Text, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint(
            _in_clause("department", DEPARTMENTS),
            name="ck_use_cases_department",
        ),
        sa.CheckConstraint(
            _in_clause("status", STATUSES),
            name="ck_use_cases_status",
        ),
    )
    op.create_index("ix_use_cases_created_at", "use_cases", ["created_at"])


def downgrade() -> None:
    op.drop_index("ix_use_cases_created_at", table_name="use_cases")
    op.drop_table("use_cases")
