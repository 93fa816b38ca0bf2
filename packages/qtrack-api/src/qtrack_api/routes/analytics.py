"""Analytics and activity feed endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from qtrack_api.deps import Container, get_container

router = APIRouter(prefix="/api", tags=["analytics"])


@router.get("/analytics")
async def analytics(period: str = "7d", container: Container = Depends(get_container)):
    """Aggregates over the trailing period (7d, 30d or 90d; anything else means 7d)."""
    return await container.analytics.get_analytics(period)


@router.get("/activity")
async def activity(
    user_id: str | None = Query(default=None, alias="userId"),
    entity_type: str | None = Query(default=None, alias="entityType"),
    entity_id: str | None = Query(default=None, alias="entityId"),
    limit: int | None = Query(default=None, ge=1, le=1000),
    container: Container = Depends(get_container),
):
    entries = await container.activity.list_activity(
        user_id=user_id, entity_type=entity_type, entity_id=entity_id, limit=limit,
    )
    return {"activities": entries, "total": len(entries)}
