"""Notification Bus - subscribe/publish/unsubscribe/clear behavior.

Tests cover:
    - Handlers run in registration order and receive a full envelope
    - Publishing with zero subscribers is a no-op
    - A failing handler is isolated: later handlers still run, publish does not raise
    - Async handlers are awaited
    - unsubscribe removes exactly one registration; clear drops one type or all
    - Unsubscribing during a publish does not disturb the in-flight delivery
"""

import logging
from datetime import datetime

from usecase_hub.infrastructure.event_bus import EventBus, EventEnvelope


async def test_publish_invokes_handlers_in_registration_order():
    bus = EventBus()
    calls = []
    bus.subscribe("useCase.created", lambda e: calls.append("first"))
    bus.subscribe("useCase.created", lambda e: calls.append("second"))

    await bus.publish("useCase.created", {"id": "1"})

    assert calls == ["first", "second"]


async def test_envelope_carries_type_data_timestamp_and_metadata():
    bus = EventBus()
    received: list[EventEnvelope] = []
    bus.subscribe("useCase.updated", received.append)

    await bus.publish("useCase.updated", {"id": "1"}, metadata={"source": "test"})

    envelope = received[0]
    assert envelope.event_type == "useCase.updated"
    assert envelope.data == {"id": "1"}
    assert envelope.metadata == {"source": "test"}
    assert isinstance(envelope.timestamp, datetime)
    assert envelope.timestamp.tzinfo is not None


async def test_metadata_defaults_to_none():
    bus = EventBus()
    received = []
    bus.subscribe("x", received.append)
    await bus.publish("x", 1)
    assert received[0].metadata is None


async def test_publish_without_subscribers_is_noop():
    bus = EventBus()
    envelope = await bus.publish("nobody.listens", {"id": "1"})
    assert envelope.event_type == "nobody.listens"


async def test_handlers_only_receive_their_event_type():
    bus = EventBus()
    created, deleted = [], []
    bus.subscribe("useCase.created", created.append)
    bus.subscribe("useCase.deleted", deleted.append)

    await bus.publish("useCase.created", {})

    assert len(created) == 1
    assert deleted == []


async def test_failing_handler_does_not_stop_others(caplog):
    bus = EventBus()
    calls = []

    def boom(envelope):
        raise RuntimeError("handler exploded")

    bus.subscribe("useCase.created", boom)
    bus.subscribe("useCase.created", lambda e: calls.append(e.data))

    with caplog.at_level(logging.ERROR):
        await bus.publish("useCase.created", {"id": "1"})

    assert calls == [{"id": "1"}]
    assert "handler exploded" in caplog.text


async def test_async_handlers_are_awaited():
    bus = EventBus()
    calls = []

    async def handler(envelope):
        calls.append(envelope.event_type)

    bus.subscribe("useCase.deleted", handler)
    await bus.publish("useCase.deleted", {"id": "1"})

    assert calls == ["useCase.deleted"]


async def test_failing_async_handler_is_isolated():
    bus = EventBus()
    calls = []

    async def boom(envelope):
        raise ValueError("async failure")

    bus.subscribe("e", boom)
    bus.subscribe("e", lambda e: calls.append(1))

    await bus.publish("e", None)

    assert calls == [1]


async def test_unsubscribe_removes_exactly_one_registration():
    bus = EventBus()
    calls = []

    def handler(envelope):
        calls.append(1)

    bus.subscribe("e", handler)
    bus.subscribe("e", handler)
    bus.unsubscribe("e", handler)

    await bus.publish("e", None)

    assert calls == [1]
    assert bus.handler_count("e") == 1


def test_unsubscribe_unknown_handler_is_noop():
    bus = EventBus()
    bus.unsubscribe("never.registered", lambda e: None)
    bus.subscribe("e", lambda e: None)
    bus.unsubscribe("e", lambda e: None)
    assert bus.handler_count("e") == 1


def test_clear_single_event_type():
    bus = EventBus()
    bus.subscribe("a", lambda e: None)
    bus.subscribe("b", lambda e: None)

    bus.clear("a")

    assert bus.handler_count("a") == 0
    assert bus.handler_count("b") == 1


def test_clear_all_event_types():
    bus = EventBus()
    bus.subscribe("a", lambda e: None)
    bus.subscribe("b", lambda e: None)

    bus.clear()

    assert bus.handler_count("a") == 0
    assert bus.handler_count("b") == 0


async def test_unsubscribe_during_publish_keeps_current_delivery():
    bus = EventBus()
    calls = []

    def second(envelope):
        calls.append("second")

    def first(envelope):
        calls.append("first")
        bus.unsubscribe("e", second)

    bus.subscribe("e", first)
    bus.subscribe("e", second)

    await bus.publish("e", None)
    await bus.publish("e", None)

    assert calls == ["first", "second", "first"]
