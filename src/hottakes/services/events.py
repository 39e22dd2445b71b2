"""Post-commit change notifications.

Services publish here only after their unit of work has committed. Real-time
delivery (websocket fan-out, push, ...) subscribes on the other side and is
not part of this package.
"""

from __future__ import annotations

import json
import logging
from collections import defaultdict
from collections.abc import Callable, Mapping
from threading import Lock
from typing import Any, Final, Protocol

import redis

from hottakes.core.settings import settings

logger = logging.getLogger(__name__)

POST_ADDED: Final[str] = "post_added"
POST_UPDATED: Final[str] = "post_updated"
POST_REMOVED: Final[str] = "post_removed"
MOD_MESSAGE: Final[str] = "mod_message"

EventHandler = Callable[[str, Mapping[str, Any]], None]


class EventPublishError(RuntimeError):
    """Raised when a notification could not be handed to the bus."""


class EventBus(Protocol):
    """Capability to publish a committed state change."""

    def publish(self, topic: str, payload: Mapping[str, Any]) -> None:
        """Publish `payload` on `topic`."""


class InMemoryEventBus:
    """Process-local bus delivering events synchronously to subscribers."""

    def __init__(self) -> None:
        self._handlers: dict[str, list[EventHandler]] = defaultdict(list)
        self._lock = Lock()

    def subscribe(self, topic: str, handler: EventHandler) -> Callable[[], None]:
        """Register `handler` for `topic` and return a function that removes it."""
        with self._lock:
            self._handlers[topic].append(handler)

        def _unsubscribe() -> None:
            with self._lock:
                if handler in self._handlers[topic]:
                    self._handlers[topic].remove(handler)

        return _unsubscribe

    def publish(self, topic: str, payload: Mapping[str, Any]) -> None:
        with self._lock:
            handlers = list(self._handlers.get(topic, ()))
        for handler in handlers:
            try:
                handler(topic, payload)
            except Exception as exc:
                raise EventPublishError(f"subscriber failed for {topic}: {exc}") from exc


class RedisEventBus:
    """Bus backed by Redis pub/sub; payloads are JSON encoded."""

    def __init__(self, url: str | None = None, prefix: str | None = None) -> None:
        self._redis = redis.from_url(url or settings.redis_url)  # type: ignore[no-untyped-call]
        self._prefix = prefix or settings.event_channel_prefix

    def channel(self, topic: str) -> str:
        return f"{self._prefix}:{topic}"

    def publish(self, topic: str, payload: Mapping[str, Any]) -> None:
        message = json.dumps(dict(payload), default=str)
        try:
            self._redis.publish(self.channel(topic), message)
        except redis.RedisError as exc:
            raise EventPublishError(f"redis publish failed for {topic}: {exc}") from exc


def publish_safely(bus: EventBus | None, topic: str, payload: Mapping[str, Any]) -> None:
    """Publish and log failures instead of raising.

    The state change has already committed, so a delivery failure must not be
    reported to the caller as a failed operation.
    """
    if bus is None:
        return
    try:
        bus.publish(topic, payload)
    except EventPublishError as exc:
        logger.warning("Failed to publish %s event: %s", topic, exc)


_EVENT_BUS: EventBus | None = None
_BUS_LOCK = Lock()


def get_event_bus() -> EventBus:
    """Return the process-wide event bus selected by configuration."""
    global _EVENT_BUS
    with _BUS_LOCK:
        if _EVENT_BUS is None:
            backend = settings.event_bus_backend.lower()
            if backend == "redis":
                _EVENT_BUS = RedisEventBus()
            elif backend == "memory":
                _EVENT_BUS = InMemoryEventBus()
            else:
                raise ValueError(f"Unknown event bus backend: {settings.event_bus_backend}")
        return _EVENT_BUS
