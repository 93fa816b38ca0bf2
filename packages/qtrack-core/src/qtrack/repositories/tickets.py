"""Ticket repository."""

from __future__ import annotations

from qtrack.models import Ticket
from qtrack.repositories.base import Repository


class TicketRepository(Repository[Ticket]):
    model = Ticket
    collection = "qtrack_tickets"

    async def get_by_status(self, status: str) -> list[Ticket]:
        return await self.query(lambda t: t.status == status)

    async def get_by_assignee(self, assigned_to: str) -> list[Ticket]:
        return await self.query(lambda t: t.assigned_to == assigned_to)

    async def get_by_priority(self, priority: str) -> list[Ticket]:
        return await self.query(lambda t: t.priority == priority)

    async def get_by_category(self, category: str) -> list[Ticket]:
        return await self.query(lambda t: t.category == category)

    async def search(self, text: str) -> list[Ticket]:
        """Case-insensitive match on title, description or any tag."""
        needle = text.lower()
        return await self.query(
            lambda t: needle in t.title.lower()
            or needle in t.description.lower()
            or any(needle in tag.lower() for tag in t.tags)
        )
