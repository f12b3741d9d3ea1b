"""Payload Validation - tests for the pure create/update rule chains.

Tests cover:
    - validate_create accepts a complete payload and rejects each rule violation
    - First violated rule wins (fixed order, no aggregation)
    - Closed enumerations enforced on both create and update
    - validate_update only checks present fields
    - Email shape check matches local@domain.tld and nothing looser
"""

import pytest

from usecase_hub.core.validate_use_case import (
    check_internal_links,
    check_not_null,
    is_valid_email,
    validate_create,
    validate_update,
)
from tests.payloads import VALID_PAYLOAD


def _payload(**overrides) -> dict:
    data = dict(VALID_PAYLOAD)
    data.update(overrides)
    return data


# ─── validate_create ─────────────────────────────────────────────

def test_create_accepts_valid_payload():
    assert validate_create(_payload()) is None


def test_create_accepts_optional_fields():
    payload = _payload(
        business_impact=None,
        application_url="https://example.com",
        related_use_case_ids=["abc"],
    )
    assert validate_create(payload) is None


@pytest.mark.parametrize("field, message", [
    ("title", "Title is required"),
    ("short_description", "Short description is required"),
    ("full_description", "Full description is required"),
    ("owner_name", "Owner name is required"),
])
def test_create_rejects_blank_text(field, message):
    assert validate_create(_payload(**{field: "   "})) == message


def test_create_rejects_missing_title():
    payload = _payload()
    del payload["title"]
    assert validate_create(payload) == "Title is required"


def test_create_rejects_department_outside_closed_set():
    error = validate_create(_payload(department="Sales"))
    assert error.startswith("Invalid department. Must be one of:")
    assert "R&D" in error


def test_create_rejects_status_outside_closed_set():
    error = validate_create(_payload(status="Done"))
    assert error.startswith("Invalid status. Must be one of:")


def test_create_rejects_bad_email():
    assert validate_create(_payload(owner_email="not-an-email")) == (
        "Valid owner email is required"
    )


def test_create_rejects_scalar_technology_stack():
    assert validate_create(_payload(technology_stack="python")) == (
        "Technology stack must be an array"
    )


def test_create_rejects_scalar_tags():
    assert validate_create(_payload(tags="ai")) == "Tags must be an array"


@pytest.mark.parametrize("links", [[], "x", 3, None])
def test_create_rejects_non_keyed_internal_links(links):
    assert validate_create(_payload(internal_links=links)) == (
        "Internal links must be an object"
    )


def test_create_rejects_scalar_related_ids():
    assert validate_create(_payload(related_use_case_ids="abc")) == (
        "Related use case ids must be an array"
    )


def test_create_reports_first_violation_only():
    payload = _payload(title="", department="Sales", owner_email="nope")
    assert validate_create(payload) == "Title is required"


def test_create_department_checked_before_status():
    payload = _payload(department="Sales", status="Done")
    assert validate_create(payload).startswith("Invalid department")


def test_create_rejects_non_object_body():
    assert validate_create(["title"]) == "Request body must be an object"


# ─── validate_update ─────────────────────────────────────────────

def test_update_accepts_single_field():
    assert validate_update({"status": "Archived"}) is None


def test_update_ignores_absent_fields():
    # only title present: missing required fields are fine on update
    assert validate_update({"title": "New"}) is None


def test_update_rejects_blank_title_when_present():
    assert validate_update({"title": "  "}) == "Title cannot be empty"


def test_update_rejects_department_outside_closed_set():
    assert validate_update({"department": "Sales"}).startswith("Invalid department")


def test_update_rejects_status_outside_closed_set():
    assert validate_update({"status": "Done"}).startswith("Invalid status")


def test_update_rejects_bad_email():
    assert validate_update({"owner_email": "a@b"}) == "Invalid email format"


def test_update_rejects_scalar_tags():
    assert validate_update({"tags": "x"}) == "Tags must be an array"


def test_update_rejects_sequence_internal_links():
    assert validate_update({"internal_links": ["a"]}) == (
        "Internal links must be an object"
    )


def test_update_allows_clearing_nullable_fields():
    assert validate_update({"business_impact": None, "application_url": None}) is None


def test_update_rejects_blank_owner_name_when_present():
    assert validate_update({"owner_name": "  "}) == "Owner name cannot be empty"


def test_update_owner_name_checked_before_email():
    payload = {"owner_name": "", "owner_email": "bad"}
    assert validate_update(payload) == "Owner name cannot be empty"


def test_update_rejects_null_owner_name():
    assert validate_update({"owner_name": None}) == "owner_name cannot be null"


def test_check_not_null_ignores_absent_fields():
    assert check_not_null({}) is None


# ─── helpers ─────────────────────────────────────────────────────

@pytest.mark.parametrize("email, ok", [
    ("x@y.com", True),
    ("first.last@corp.example.org", True),
    ("not-an-email", False),
    ("a@b", False),
    ("a b@c.de", False),
    ("a@b.c\n", False),
    (None, False),
])
def test_is_valid_email(email, ok):
    assert is_valid_email(email) is ok


def test_check_internal_links_accepts_mapping():
    assert check_internal_links({"wiki": "https://wiki"}) is None
