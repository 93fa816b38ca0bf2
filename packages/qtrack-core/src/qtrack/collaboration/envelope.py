"""Collaboration message envelope and message types."""

from __future__ import annotations

import uuid
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from enum import Enum


class MessageType(str, Enum):
    PRESENCE_JOINED = "presence.joined"
    PRESENCE_LEFT = "presence.left"
    COMMENT_ADDED = "comment.added"
    NOTIFICATION = "notification"


@dataclass
class CollabEvent:
    type: MessageType
    topic: str
    data: dict = field(default_factory=dict)
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    time: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())

    def to_dict(self) -> dict:
        payload = asdict(self)
        payload["type"] = self.type.value
        return payload


def ticket_topic(ticket_id: str) -> str:
    return f"ticket:{ticket_id}"


def build_event(message_type: MessageType, topic: str, data: dict) -> CollabEvent:
    return CollabEvent(type=message_type, topic=topic, data=data)
