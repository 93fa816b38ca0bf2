"""Read side of the activity log."""

from __future__ import annotations

from qtrack.models import ActivityLog
from qtrack.repositories import ActivityLogRepository


class ActivityService:
    def __init__(self, activity: ActivityLogRepository) -> None:
        self._activity = activity

    async def list_activity(
        self,
        user_id: str | None = None,
        entity_type: str | None = None,
        entity_id: str | None = None,
        limit: int | None = None,
    ) -> list[ActivityLog]:
        entries = await self._activity.get_all()
        if user_id:
            entries = [a for a in entries if a.user_id == user_id]
        if entity_type:
            entries = [a for a in entries if a.entity_type == entity_type]
        if entity_id:
            entries = [a for a in entries if a.entity_id == entity_id]
        entries.sort(key=lambda a: a.created_at, reverse=True)
        if limit is not None:
            entries = entries[:max(limit, 0)]
        return entries
