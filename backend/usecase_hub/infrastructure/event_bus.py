"""Notification Bus - in-process publish/subscribe keyed by event type.

Invariants:
    - Handlers run synchronously, in registration order, once per registration
    - publish never raises because of a handler: each invocation is isolated and
      failures are logged with the handler name
    - publish iterates a snapshot of the handler list, so subscribe/unsubscribe
      during a publish (or from another thread) never corrupts the registry
    - unsubscribe removes exactly one matching registration
    - No durability, no retry: best-effort, same-process only

Design Decisions:
    - Handlers may be plain callables or coroutine functions; awaitable results are awaited
    - One lock guards registry mutation; handlers are never invoked while holding it
"""

import inspect
import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Union

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EventEnvelope:
    """What every handler receives."""
    event_type: str
    data: Any
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    metadata: dict[str, Any] | None = None


EventHandler = Callable[[EventEnvelope], Union[None, Awaitable[None]]]


def _handler_name(handler: EventHandler) -> str:
    return getattr(handler, "__qualname__", None) or repr(handler)


class EventBus:
    """Registry of handlers per event type."""

    def __init__(self, verbose: bool = False):
        self._handlers: dict[str, list[EventHandler]] = {}
        self._lock = threading.Lock()
        self._verbose = verbose

    def subscribe(self, event_type: str, handler: EventHandler) -> None:
        with self._lock:
            self._handlers.setdefault(event_type, []).append(handler)

    def unsubscribe(self, event_type: str, handler: EventHandler) -> None:
        with self._lock:
            handlers = self._handlers.get(event_type)
            if handlers and handler in handlers:
                handlers.remove(handler)

    def clear(self, event_type: str | None = None) -> None:
        """Drop handlers for one event type, or for all types when omitted."""
        with self._lock:
            if event_type is None:
                self._handlers.clear()
            else:
                self._handlers.pop(event_type, None)

    def handler_count(self, event_type: str) -> int:
        with self._lock:
            return len(self._handlers.get(event_type, ()))

    async def publish(
        self,
        event_type: str,
        data: Any,
        metadata: dict[str, Any] | None = None,
    ) -> EventEnvelope:
        """Deliver an envelope to every handler currently registered for event_type."""
        envelope = EventEnvelope(event_type=event_type, data=data, metadata=metadata)
        with self._lock:
            handlers = tuple(self._handlers.get(event_type, ()))

        for handler in handlers:
            try:
                result = handler(envelope)
                if inspect.isawaitable(result):
                    await result
            except Exception as e:
                logger.error(
                    f"Event handler failed for {event_type}: {e}",
                    exc_info=True,
                    extra={
                        "event_type": event_type,
                        "handler": _handler_name(handler),
                    },
                )

        if self._verbose:
            logger.debug(
                f"Event published: {event_type}",
                extra={
                    "event_type": event_type,
                    "subscriber_count": len(handlers),
                },
            )
        return envelope
