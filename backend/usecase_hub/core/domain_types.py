"""Domain Types - identity types and closed enumerations for use case records.

Invariants:
    - UseCaseId wraps a UUID; ids are assigned by the repository, never by callers
    - Department and UseCaseStatus are closed sets: no other value is ever persisted
    - UseCaseStatus members are declared in lifecycle order (Ideation first, Archived last)
    - Event type names are the wire names published on the notification bus

Design Decisions:
    - str Enums: members compare equal to their raw values and serialize to JSON as-is
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

UseCaseId = NewType("UseCaseId", UUID)


# ─── Enums ───────────────────────────────────────────────────────

class Department(str, Enum):
    """Owning department of a use case."""
    MARKETING = "Marketing"
    RND = "R&D"
    PROCUREMENT = "Procurement"
    IT = "IT"
    HR = "HR"
    OPERATIONS = "Operations"


class UseCaseStatus(str, Enum):
    """Lifecycle status, in order of progression."""
    IDEATION = "Ideation"
    PRE_EVALUATION = "Pre-Evaluation"
    EVALUATION = "Evaluation"
    POC = "PoC"
    MVP = "MVP"
    LIVE = "Live"
    ARCHIVED = "Archived"


class UseCaseEvent(str, Enum):
    """Event types announced after a committed state change."""
    CREATED = "useCase.created"
    UPDATED = "useCase.updated"
    DELETED = "useCase.deleted"


VALID_DEPARTMENTS: tuple[str, ...] = tuple(d.value for d in Department)
VALID_STATUSES: tuple[str, ...] = tuple(s.value for s in UseCaseStatus)
