"""Comment repository."""

from __future__ import annotations

from qtrack.models import Comment
from qtrack.repositories.base import Repository


class CommentRepository(Repository[Comment]):
    model = Comment
    collection = "qtrack_comments"

    async def get_by_ticket(self, ticket_id: str) -> list[Comment]:
        return await self.query(lambda c: c.ticket_id == ticket_id)

    async def get_by_user(self, user_id: str) -> list[Comment]:
        return await self.query(lambda c: c.user_id == user_id)
