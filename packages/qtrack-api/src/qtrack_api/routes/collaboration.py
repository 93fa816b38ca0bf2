"""Collaboration endpoints -- presence and recent events per ticket."""
from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, Depends, Query

from qtrack.collaboration import ticket_topic
from qtrack.models import CamelModel
from qtrack_api.deps import Container, get_container

router = APIRouter(prefix="/api/collaboration", tags=["collaboration"])


class PresenceRequest(CamelModel):
    user_id: str
    action: Literal["join", "leave"]


@router.post("/{ticket_id}/presence")
async def update_presence(
    ticket_id: str,
    body: PresenceRequest,
    container: Container = Depends(get_container),
):
    topic = ticket_topic(ticket_id)
    if body.action == "join":
        changed = await container.hub.join(topic, body.user_id)
    else:
        changed = await container.hub.leave(topic, body.user_id)
    return {"changed": changed, "present": container.hub.present(topic)}


@router.get("/{ticket_id}/presence")
async def get_presence(ticket_id: str, container: Container = Depends(get_container)):
    return {"present": container.hub.present(ticket_topic(ticket_id))}


@router.get("/{ticket_id}/events")
async def recent_events(
    ticket_id: str,
    limit: int = Query(default=50, ge=1, le=500),
    container: Container = Depends(get_container),
):
    events = container.hub.recent(ticket_topic(ticket_id), limit)
    return {"events": [e.to_dict() for e in events]}
