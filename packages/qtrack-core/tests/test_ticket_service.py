"""Tests for TicketService — validation, filters, activity logging."""

import asyncio

import pytest

from qtrack.errors import NotFoundError, ValidationError
from qtrack.models import Priority, TicketCategory, TicketCreate, TicketStatus, TicketUpdate
from qtrack.services import TicketFilters, TicketService


def _create(**kw) -> TicketCreate:
    return TicketCreate(**{
        "title": "Login fails",
        "description": "500 on submit",
        "priority": Priority.HIGH,
        "category": TicketCategory.BUG,
        **kw,
    })


@pytest.fixture
def service(ticket_repo, activity_repo):
    return TicketService(ticket_repo, activity_repo)


class TestCreate:
    @pytest.mark.asyncio
    async def test_create_ticket(self, service, activity_repo):
        ticket = await service.create_ticket(_create(tags=["auth"]), "u-1")
        assert ticket.status == TicketStatus.OPEN
        assert ticket.reported_by == "u-1"
        assert ticket.attachments == []

        [entry] = await activity_repo.get_all()
        assert entry.action == "ticket_created"
        assert entry.entity_id == ticket.id
        assert entry.details == {"title": "Login fails", "priority": "high", "category": "bug"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("kw,message", [
        ({"title": "  "}, "Title is required"),
        ({"description": ""}, "Description is required"),
        ({"estimated_hours": -1}, "Estimated hours must be positive"),
    ])
    async def test_validation(self, service, activity_repo, kw, message):
        with pytest.raises(ValidationError, match=message):
            await service.create_ticket(_create(**kw), "u-1")
        assert await activity_repo.get_all() == []


class TestList:
    @pytest.mark.asyncio
    async def test_filters_are_combined(self, service):
        await service.create_ticket(_create(title="A", assigned_to="u-2"), "u-1")
        await service.create_ticket(_create(title="B", assigned_to="u-2", priority=Priority.LOW), "u-1")
        await service.create_ticket(_create(title="C", priority=Priority.LOW), "u-1")

        tickets = await service.list_tickets(TicketFilters(assigned_to="u-2", priority="low"))
        assert [t.title for t in tickets] == ["B"]

    @pytest.mark.asyncio
    async def test_search_then_filter(self, service):
        await service.create_ticket(_create(title="Checkout broken"), "u-1")
        await service.create_ticket(
            _create(title="Checkout slow", category=TicketCategory.ENHANCEMENT), "u-1",
        )
        tickets = await service.list_tickets(TicketFilters(search="checkout", category="bug"))
        assert [t.title for t in tickets] == ["Checkout broken"]

    @pytest.mark.asyncio
    async def test_newest_update_first(self, service):
        first = await service.create_ticket(_create(title="first"), "u-1")
        await service.create_ticket(_create(title="second"), "u-1")
        await asyncio.sleep(0.001)
        await service.update_ticket(first.id, TicketUpdate(title="first, edited"), "u-1")
        titles = [t.title for t in await service.list_tickets()]
        assert titles[0] == "first, edited"


class TestUpdate:
    @pytest.mark.asyncio
    async def test_resolving_sets_resolved_at(self, service, activity_repo):
        ticket = await service.create_ticket(_create(), "u-1")
        updated = await service.update_ticket(ticket.id, TicketUpdate(status=TicketStatus.RESOLVED), "u-2")
        assert updated.resolved_at is not None

        [entry] = await activity_repo.get_by_user("u-2")
        assert entry.action == "ticket_status_changed"
        assert entry.details == {"from": "open", "to": "resolved"}

    @pytest.mark.asyncio
    async def test_significant_field_changes_logged(self, service, activity_repo):
        ticket = await service.create_ticket(_create(), "u-1")
        await service.update_ticket(
            ticket.id, TicketUpdate(priority=Priority.CRITICAL, assigned_to="u-3"), "u-2",
        )
        entries = await activity_repo.get_by_user("u-2")
        assert [e.action for e in entries] == ["ticket_updated", "ticket_updated"]
        assert entries[0].details == {"field": "priority", "old_value": "high", "new_value": "critical"}
        assert entries[1].details == {"field": "assigned_to", "old_value": None, "new_value": "u-3"}

    @pytest.mark.asyncio
    async def test_unchanged_value_not_logged(self, service, activity_repo):
        ticket = await service.create_ticket(_create(), "u-1")
        await service.update_ticket(ticket.id, TicketUpdate(priority=Priority.HIGH), "u-2")
        assert await activity_repo.get_by_user("u-2") == []

    @pytest.mark.asyncio
    async def test_explicit_null_unassigns(self, service):
        ticket = await service.create_ticket(_create(assigned_to="u-3"), "u-1")
        updated = await service.update_ticket(ticket.id, TicketUpdate(assigned_to=None), "u-1")
        assert updated.assigned_to is None

    @pytest.mark.asyncio
    async def test_null_on_required_field_ignored(self, service):
        ticket = await service.create_ticket(_create(), "u-1")
        updated = await service.update_ticket(ticket.id, TicketUpdate(title=None), "u-1")
        assert updated.title == "Login fails"

    @pytest.mark.asyncio
    async def test_update_missing(self, service):
        with pytest.raises(NotFoundError):
            await service.update_ticket("nope", TicketUpdate(title="x"), "u-1")


class TestDelete:
    @pytest.mark.asyncio
    async def test_delete_ticket(self, service, activity_repo):
        ticket = await service.create_ticket(_create(), "u-1")
        await service.delete_ticket(ticket.id, "u-9")
        with pytest.raises(NotFoundError):
            await service.get_ticket(ticket.id)
        [entry] = await activity_repo.get_by_user("u-9")
        assert entry.action == "ticket_deleted"
        assert entry.details == {"title": "Login fails"}

    @pytest.mark.asyncio
    async def test_delete_missing(self, service):
        with pytest.raises(NotFoundError):
            await service.delete_ticket("nope", "u-1")
