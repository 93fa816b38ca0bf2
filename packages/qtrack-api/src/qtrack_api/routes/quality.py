"""Quality gate and metrics endpoints."""
from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query

from qtrack.errors import NotFoundError, ValidationError
from qtrack.models import CamelModel
from qtrack.monitoring import flatten_metrics, summarize
from qtrack_api.auth import verify_token
from qtrack_api.deps import Container, get_container

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/quality", tags=["quality"])


class GateUpdateRequest(CamelModel):
    gate_id: str | None = None
    updates: dict[str, Any] | None = None


@router.get("/gates")
async def get_gates(container: Container = Depends(get_container)):
    """Collect a fresh snapshot and evaluate every enabled gate against it."""
    try:
        gates = container.gates.list_gates()
        snapshot = container.collector.collect()
        results = container.gates.evaluate(flatten_metrics(snapshot))
        summary = summarize(results)
    except Exception:
        logger.exception("Quality gate evaluation failed")
        raise HTTPException(status_code=500, detail="Failed to fetch quality gates")
    return {"gates": gates, "results": results, "metrics": snapshot, "summary": summary}


@router.put("/gates", dependencies=[Depends(verify_token)])
async def update_gate(body: GateUpdateRequest, container: Container = Depends(get_container)):
    if not body.gate_id or body.updates is None:
        raise ValidationError("Gate ID and updates are required")
    if container.gates.update_gate(body.gate_id, body.updates) is None:
        raise NotFoundError(f"Quality gate {body.gate_id} not found")
    return {"success": True}


@router.get("/metrics")
async def metrics_history(
    limit: int = Query(default=100, ge=1, le=1000),
    container: Container = Depends(get_container),
):
    return {"metrics": container.collector.history(limit)}


@router.get("/metrics/latest")
async def latest_metrics(container: Container = Depends(get_container)):
    return {"metrics": container.collector.latest()}
