"""Ticket endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from qtrack.models import TicketCreate, TicketUpdate
from qtrack.services import TicketFilters
from qtrack_api.deps import Container, get_container
from qtrack_api.routes import actor, payload

router = APIRouter(prefix="/api/tickets", tags=["tickets"])


class TicketCreateRequest(TicketCreate):
    reported_by: str | None = None


class TicketUpdateRequest(TicketUpdate):
    updated_by: str | None = None


@router.get("")
async def list_tickets(
    status: str | None = None,
    assigned_to: str | None = Query(default=None, alias="assignedTo"),
    priority: str | None = None,
    category: str | None = None,
    search: str | None = None,
    container: Container = Depends(get_container),
):
    tickets = await container.tickets.list_tickets(TicketFilters(
        status=status,
        assigned_to=assigned_to,
        priority=priority,
        category=category,
        search=search,
    ))
    return {"tickets": tickets, "total": len(tickets)}


@router.post("", status_code=201)
async def create_ticket(body: TicketCreateRequest, container: Container = Depends(get_container)):
    reported_by = actor(body.reported_by, "reportedBy")
    ticket = await container.tickets.create_ticket(payload(body, TicketCreate, "reported_by"), reported_by)
    return {"ticket": ticket}


@router.get("/{ticket_id}")
async def get_ticket(ticket_id: str, container: Container = Depends(get_container)):
    return {"ticket": await container.tickets.get_ticket(ticket_id)}


@router.put("/{ticket_id}")
async def update_ticket(
    ticket_id: str,
    body: TicketUpdateRequest,
    container: Container = Depends(get_container),
):
    updated_by = actor(body.updated_by, "updatedBy")
    ticket = await container.tickets.update_ticket(
        ticket_id, payload(body, TicketUpdate, "updated_by"), updated_by,
    )
    return {"ticket": ticket}


@router.delete("/{ticket_id}")
async def delete_ticket(
    ticket_id: str,
    deleted_by: str | None = Query(default=None, alias="deletedBy"),
    container: Container = Depends(get_container),
):
    await container.tickets.delete_ticket(ticket_id, actor(deleted_by, "deletedBy"))
    return {"message": "Ticket deleted successfully"}
