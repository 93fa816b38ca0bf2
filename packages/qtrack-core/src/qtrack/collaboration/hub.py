"""Collaboration hub — in-process publish/subscribe per topic.

Topics are usually one per ticket (``ticket:<id>``). Publishing is
idempotent by event id within a bounded window of recently seen ids.
A handler that raises does not stop delivery to the remaining handlers;
the failure is logged and kept in ``dead_letters``.
Each topic keeps a bounded buffer of recent events and the set of users
currently present.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Awaitable, Callable

from qtrack.collaboration.envelope import CollabEvent, MessageType, build_event

logger = logging.getLogger(__name__)

EventHandler = Callable[[CollabEvent], Awaitable[None]]


@dataclass
class DeadLetter:
    event: CollabEvent
    error: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class CollaborationHub:
    def __init__(self, recent_limit: int = 50, seen_limit: int | None = None) -> None:
        self._handlers: dict[str, list[EventHandler]] = {}
        # Dedup window; the oldest id is forgotten once the limit is reached.
        self._seen_limit = seen_limit if seen_limit is not None else recent_limit
        self._processed_ids: set[str] = set()
        self._processed_order: deque[str] = deque()
        self._recent: dict[str, deque[CollabEvent]] = {}
        self._presence: dict[str, set[str]] = {}
        self._recent_limit = recent_limit
        self.dead_letters: list[DeadLetter] = []

    def subscribe(self, topic: str, handler: EventHandler) -> None:
        if topic not in self._handlers:
            self._handlers[topic] = []
        self._handlers[topic].append(handler)

    def unsubscribe(self, topic: str, handler: EventHandler) -> None:
        handlers = self._handlers.get(topic, [])
        if handler in handlers:
            handlers.remove(handler)

    async def publish(self, event: CollabEvent) -> None:
        if event.id in self._processed_ids:
            return
        self._remember(event.id)

        if event.topic not in self._recent:
            self._recent[event.topic] = deque(maxlen=self._recent_limit)
        self._recent[event.topic].append(event)

        for handler in list(self._handlers.get(event.topic, [])):
            try:
                await handler(event)
            except Exception as e:
                logger.exception("Collaboration handler failed for %s on %s", event.type.value, event.topic)
                self.dead_letters.append(DeadLetter(event=event, error=str(e)))

    def _remember(self, event_id: str) -> None:
        if self._seen_limit <= 0:
            return
        while len(self._processed_order) >= self._seen_limit:
            self._processed_ids.discard(self._processed_order.popleft())
        self._processed_order.append(event_id)
        self._processed_ids.add(event_id)

    async def join(self, topic: str, user_id: str) -> bool:
        """Mark a user present. Returns False if they already were."""
        present = self._presence.setdefault(topic, set())
        if user_id in present:
            return False
        present.add(user_id)
        await self.publish(build_event(MessageType.PRESENCE_JOINED, topic, {"userId": user_id}))
        return True

    async def leave(self, topic: str, user_id: str) -> bool:
        present = self._presence.get(topic, set())
        if user_id not in present:
            return False
        present.discard(user_id)
        await self.publish(build_event(MessageType.PRESENCE_LEFT, topic, {"userId": user_id}))
        return True

    def present(self, topic: str) -> list[str]:
        return sorted(self._presence.get(topic, set()))

    def recent(self, topic: str, limit: int | None = None) -> list[CollabEvent]:
        events = list(self._recent.get(topic, ()))
        if limit is not None:
            events = events[-limit:] if limit > 0 else []
        return events
