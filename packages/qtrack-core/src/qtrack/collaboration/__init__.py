"""Collaboration channel — typed messages on per-ticket topics."""

from qtrack.collaboration.envelope import CollabEvent, MessageType, build_event, ticket_topic
from qtrack.collaboration.hub import CollaborationHub, DeadLetter, EventHandler

__all__ = [
    "CollabEvent",
    "CollaborationHub",
    "DeadLetter",
    "EventHandler",
    "MessageType",
    "build_event",
    "ticket_topic",
]
