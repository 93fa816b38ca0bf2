"""User service."""

from __future__ import annotations

import re

from qtrack.errors import ConflictError, NotFoundError, ValidationError
from qtrack.models import EntityType, User, UserCreate, UserUpdate, changes_from
from qtrack.permissions import Permission
from qtrack.repositories import ActivityLogRepository, UserRepository

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

NULLABLE_FIELDS = frozenset({"avatar", "department"})


class UserService:
    def __init__(self, users: UserRepository, activity: ActivityLogRepository) -> None:
        self._users = users
        self._activity = activity

    async def list_users(self, role: str | None = None, is_active: bool | None = None) -> list[User]:
        users = await self._users.get_by_role(role) if role else await self._users.get_all()
        if is_active is not None:
            users = [u for u in users if u.is_active == is_active]
        return sorted(users, key=lambda u: u.name.lower())

    async def get_user(self, user_id: str) -> User:
        user = await self._users.get_by_id(user_id)
        if user is None:
            raise NotFoundError(f"User with id {user_id} not found")
        return user

    async def create_user(self, data: UserCreate, created_by: str | None = None) -> User:
        if not data.email.strip():
            raise ValidationError("Email is required")
        if not data.name.strip():
            raise ValidationError("Name is required")
        if not EMAIL_RE.match(data.email):
            raise ValidationError("Invalid email format")
        if await self._users.get_by_email(data.email) is not None:
            raise ConflictError("User with this email already exists")

        user = await self._users.create({**data.model_dump(), "is_active": True})
        await self._activity.log(
            created_by or user.id, "user_created", EntityType.USER, user.id,
            {"email": user.email, "role": user.role.value},
        )
        return user

    async def update_user(self, user_id: str, data: UserUpdate, updated_by: str | None = None) -> User:
        existing = await self.get_user(user_id)
        changes = changes_from(data, NULLABLE_FIELDS)

        email = changes.get("email")
        if email and email != existing.email:
            if not EMAIL_RE.match(email):
                raise ValidationError("Invalid email format")
            if await self._users.get_by_email(email) is not None:
                raise ConflictError("User with this email already exists")

        user = await self._users.update(user_id, changes)
        if user is None:
            raise NotFoundError(f"Failed to update user with id {user_id}")

        await self._activity.log(
            updated_by or user_id, "user_updated", EntityType.USER, user_id, {"fields": sorted(changes)},
        )
        return user

    async def activate_user(self, user_id: str, updated_by: str | None = None) -> User:
        return await self.update_user(user_id, UserUpdate(is_active=True), updated_by)

    async def deactivate_user(self, user_id: str, updated_by: str | None = None) -> User:
        return await self.update_user(user_id, UserUpdate(is_active=False), updated_by)

    async def permissions_for(self, user_id: str) -> list[Permission]:
        user = await self.get_user(user_id)
        if not user.is_active:
            return []
        return sorted(user.role.permissions, key=lambda p: p.value)
