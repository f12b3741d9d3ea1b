"""Structured Logging - JSONFormatter output shape."""

import json
import logging

from usecase_hub.infrastructure.observability import JSONFormatter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "usecase_hub.test", logging.INFO, __file__, 1, "hello %s", ("world",), None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_core_fields():
    out = json.loads(JSONFormatter().format(_record()))
    assert out["level"] == "INFO"
    assert out["logger"] == "usecase_hub.test"
    assert out["message"] == "hello world"
    assert "timestamp" in out


def test_json_formatter_surfaces_known_extras_only():
    out = json.loads(JSONFormatter().format(
        _record(use_case_id="abc", event_type="useCase.created", unrelated="x"),
    ))
    assert out["use_case_id"] == "abc"
    assert out["event_type"] == "useCase.created"
    assert "unrelated" not in out
