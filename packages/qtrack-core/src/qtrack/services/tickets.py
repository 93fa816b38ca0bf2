"""Ticket service — validation, filtering and activity logging for tickets."""

from __future__ import annotations

from dataclasses import dataclass

from qtrack.errors import NotFoundError, ValidationError
from qtrack.models import (
    EntityType,
    Ticket,
    TicketCreate,
    TicketStatus,
    TicketUpdate,
    changes_from,
    utcnow,
)
from qtrack.repositories import ActivityLogRepository, TicketRepository

# Changes to these fields are recorded in the activity log.
SIGNIFICANT_FIELDS = ("priority", "assigned_to")

NULLABLE_FIELDS = frozenset({"assigned_to", "estimated_hours", "actual_hours"})


@dataclass
class TicketFilters:
    status: str | None = None
    assigned_to: str | None = None
    priority: str | None = None
    category: str | None = None
    search: str | None = None


class TicketService:
    def __init__(self, tickets: TicketRepository, activity: ActivityLogRepository) -> None:
        self._tickets = tickets
        self._activity = activity

    async def list_tickets(self, filters: TicketFilters | None = None) -> list[Ticket]:
        f = filters or TicketFilters()
        tickets = await self._tickets.search(f.search) if f.search else await self._tickets.get_all()
        if f.status:
            tickets = [t for t in tickets if t.status == f.status]
        if f.assigned_to:
            tickets = [t for t in tickets if t.assigned_to == f.assigned_to]
        if f.priority:
            tickets = [t for t in tickets if t.priority == f.priority]
        if f.category:
            tickets = [t for t in tickets if t.category == f.category]
        return sorted(tickets, key=lambda t: t.updated_at, reverse=True)

    async def get_ticket(self, ticket_id: str) -> Ticket:
        ticket = await self._tickets.get_by_id(ticket_id)
        if ticket is None:
            raise NotFoundError(f"Ticket with id {ticket_id} not found")
        return ticket

    async def create_ticket(self, data: TicketCreate, reported_by: str) -> Ticket:
        self._validate(data)
        ticket = await self._tickets.create({
            **data.model_dump(),
            "status": TicketStatus.OPEN,
            "reported_by": reported_by,
            "attachments": [],
        })
        await self._activity.log(
            reported_by, "ticket_created", EntityType.TICKET, ticket.id,
            {"title": data.title, "priority": data.priority.value, "category": data.category.value},
        )
        return ticket

    async def update_ticket(self, ticket_id: str, data: TicketUpdate, updated_by: str) -> Ticket:
        existing = await self.get_ticket(ticket_id)
        changes = changes_from(data, NULLABLE_FIELDS)
        if changes.get("estimated_hours") is not None and changes["estimated_hours"] < 0:
            raise ValidationError("Estimated hours must be positive")

        new_status = changes.get("status")
        if new_status == TicketStatus.RESOLVED and existing.status != TicketStatus.RESOLVED:
            changes["resolved_at"] = utcnow()

        ticket = await self._tickets.update(ticket_id, changes)
        if ticket is None:
            raise NotFoundError(f"Failed to update ticket with id {ticket_id}")

        if new_status and new_status != existing.status:
            await self._activity.log(
                updated_by, "ticket_status_changed", EntityType.TICKET, ticket_id,
                {"from": existing.status.value, "to": ticket.status.value},
            )
        for name in SIGNIFICANT_FIELDS:
            if name in changes and changes[name] != getattr(existing, name):
                await self._activity.log(
                    updated_by, "ticket_updated", EntityType.TICKET, ticket_id,
                    {
                        "field": name,
                        "old_value": _plain(getattr(existing, name)),
                        "new_value": _plain(getattr(ticket, name)),
                    },
                )
        return ticket

    async def delete_ticket(self, ticket_id: str, deleted_by: str) -> None:
        ticket = await self.get_ticket(ticket_id)
        if not await self._tickets.delete(ticket_id):
            raise NotFoundError(f"Failed to delete ticket with id {ticket_id}")
        await self._activity.log(
            deleted_by, "ticket_deleted", EntityType.TICKET, ticket_id, {"title": ticket.title},
        )

    @staticmethod
    def _validate(data: TicketCreate) -> None:
        if not data.title.strip():
            raise ValidationError("Title is required")
        if not data.description.strip():
            raise ValidationError("Description is required")
        if data.estimated_hours is not None and data.estimated_hours < 0:
            raise ValidationError("Estimated hours must be positive")


def _plain(value):
    return getattr(value, "value", value)
