"""Activity log repository — append-only audit trail of domain actions."""

from __future__ import annotations

from typing import Any

from qtrack.models import ActivityLog, EntityType
from qtrack.repositories.base import Repository


class ActivityLogRepository(Repository[ActivityLog]):
    model = ActivityLog
    collection = "qtrack_activity_logs"

    async def log(
        self,
        user_id: str,
        action: str,
        entity_type: EntityType,
        entity_id: str,
        details: dict[str, Any] | None = None,
    ) -> ActivityLog:
        return await self.create({
            "user_id": user_id,
            "action": action,
            "entity_type": entity_type,
            "entity_id": entity_id,
            "details": details or {},
        })

    async def get_by_user(self, user_id: str) -> list[ActivityLog]:
        return await self.query(lambda a: a.user_id == user_id)

    async def get_by_entity(self, entity_type: str, entity_id: str) -> list[ActivityLog]:
        return await self.query(lambda a: a.entity_type == entity_type and a.entity_id == entity_id)
