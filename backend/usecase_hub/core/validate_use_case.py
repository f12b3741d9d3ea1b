"""Payload Validation - pure rule checks gating create and update of use cases.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - Each check returns an error message on violation, None on success
    - validate_create / validate_update chain the checks in a fixed order; first error wins
    - On update a rule only fires for fields present in the payload

Rule order:
    1. title, short_description, full_description non-empty after trim
    2. department in the closed Department set
    3. status in the closed UseCaseStatus set
    4. owner_name non-empty (on update only when present and not null)
    5. owner_email has a local@domain.tld shape
    6. technology_stack is a sequence
    7. tags is a sequence
    8. internal_links is a keyed structure
    9. related_use_case_ids is a sequence (when present)
   10. non-nullable fields are not set to null (update only)
"""

import re
from collections.abc import Mapping
from typing import Any

from usecase_hub.core.domain_types import VALID_DEPARTMENTS, VALID_STATUSES

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")

TEXT_FIELDS: tuple[tuple[str, str], ...] = (
    ("title", "Title"),
    ("short_description", "Short description"),
    ("full_description", "Full description"),
)

NON_NULLABLE_FIELDS: tuple[str, ...] = (
    "title", "short_description", "full_description",
    "department", "status", "owner_name", "owner_email",
    "technology_stack", "tags", "internal_links", "related_use_case_ids",
)


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


def _is_sequence(value: Any) -> bool:
    # str is a Sequence too; only JSON arrays count here
    return isinstance(value, (list, tuple))


def is_valid_email(value: Any) -> bool:
    return isinstance(value, str) and EMAIL_PATTERN.fullmatch(value) is not None


# ─── Individual rules ────────────────────────────────────────────

def check_required_text(payload: Mapping) -> str | None:
    """Rule 1 (create): descriptive text fields must be present and non-blank."""
    for name, label in TEXT_FIELDS:
        if _is_blank(payload.get(name)):
            return f"{label} is required"
    return None


def check_present_text(payload: Mapping) -> str | None:
    """Rule 1 (update): descriptive text fields, when present, must be non-blank."""
    for name, label in TEXT_FIELDS:
        if name in payload and _is_blank(payload[name]):
            return f"{label} cannot be empty"
    return None


def check_department(value: Any) -> str | None:
    """Rule 2: department must belong to the closed set."""
    if value not in VALID_DEPARTMENTS:
        return f"Invalid department. Must be one of: {', '.join(VALID_DEPARTMENTS)}"
    return None


def check_status(value: Any) -> str | None:
    """Rule 3: status must belong to the closed set."""
    if value not in VALID_STATUSES:
        return f"Invalid status. Must be one of: {', '.join(VALID_STATUSES)}"
    return None


def check_owner_name(value: Any) -> str | None:
    """Rule 4: owner name is required on create."""
    if _is_blank(value):
        return "Owner name is required"
    return None


def check_present_owner_name(payload: Mapping) -> str | None:
    """Rule 4 (update): a present owner name must be non-blank. Null is left to rule 10."""
    value = payload.get("owner_name")
    if value is not None and _is_blank(value):
        return "Owner name cannot be empty"
    return None


def check_technology_stack(value: Any) -> str | None:
    """Rule 6."""
    if not _is_sequence(value):
        return "Technology stack must be an array"
    return None


def check_tags(value: Any) -> str | None:
    """Rule 7."""
    if not _is_sequence(value):
        return "Tags must be an array"
    return None


def check_internal_links(value: Any) -> str | None:
    """Rule 8: a keyed structure, never a sequence or scalar."""
    if not isinstance(value, Mapping):
        return "Internal links must be an object"
    return None


def check_related_ids(value: Any) -> str | None:
    """Rule 9."""
    if not _is_sequence(value):
        return "Related use case ids must be an array"
    return None


def check_not_null(payload: Mapping) -> str | None:
    """Rule 10: an update may clear only the nullable fields."""
    for name in NON_NULLABLE_FIELDS:
        if name in payload and payload[name] is None:
            return f"{name} cannot be null"
    return None


# ─── Chains ──────────────────────────────────────────────────────

def validate_create(payload: Mapping) -> str | None:
    """Validate a create payload. Returns the first violated rule's message or None."""
    if not isinstance(payload, Mapping):
        return "Request body must be an object"
    error = (
        check_required_text(payload)
        or check_department(payload.get("department"))
        or check_status(payload.get("status"))
        or check_owner_name(payload.get("owner_name"))
    )
    if error:
        return error
    if not is_valid_email(payload.get("owner_email")):
        return "Valid owner email is required"
    error = (
        check_technology_stack(payload.get("technology_stack"))
        or check_tags(payload.get("tags"))
        or check_internal_links(payload.get("internal_links"))
    )
    if error:
        return error
    related = payload.get("related_use_case_ids")
    if related is not None:
        return check_related_ids(related)
    return None


def validate_update(payload: Mapping) -> str | None:
    """Validate the fields present in an update payload. Emptiness is checked by the caller."""
    if not isinstance(payload, Mapping):
        return "Request body must be an object"
    error = check_present_text(payload)
    if error:
        return error
    if "department" in payload:
        error = check_department(payload["department"])
        if error:
            return error
    if "status" in payload:
        error = check_status(payload["status"])
        if error:
            return error
    error = check_present_owner_name(payload)
    if error:
        return error
    if "owner_email" in payload and not is_valid_email(payload["owner_email"]):
        return "Invalid email format"
    for name, check in (
        ("technology_stack", check_technology_stack),
        ("tags", check_tags),
        ("internal_links", check_internal_links),
        ("related_use_case_ids", check_related_ids),
    ):
        if name in payload:
            error = check(payload[name])
            if error:
                return error
    return check_not_null(payload)
