"""Event Logging Subscriber - writes one log line per use case lifecycle event."""

import logging

from usecase_hub.core.domain_types import UseCaseEvent
from usecase_hub.infrastructure.event_bus import EventBus, EventEnvelope

logger = logging.getLogger(__name__)


def log_use_case_event(envelope: EventEnvelope) -> None:
    data = envelope.data if isinstance(envelope.data, dict) else {}
    logger.info(
        f"{envelope.event_type}: {data.get('title')!r}",
        extra={
            "event_type": envelope.event_type,
            "use_case_id": data.get("id"),
        },
    )


def register_event_logging(bus: EventBus) -> None:
    """Subscribe log_use_case_event to every lifecycle event type."""
    for event in UseCaseEvent:
        bus.subscribe(event.value, log_use_case_event)
