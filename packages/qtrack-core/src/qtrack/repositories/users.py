"""User repository."""

from __future__ import annotations

from qtrack.models import User
from qtrack.repositories.base import Repository


class UserRepository(Repository[User]):
    model = User
    collection = "qtrack_users"

    async def get_by_email(self, email: str) -> User | None:
        matches = await self.query(lambda u: u.email == email)
        return matches[0] if matches else None

    async def get_by_role(self, role: str) -> list[User]:
        return await self.query(lambda u: u.role == role)
