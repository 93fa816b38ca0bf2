"""Comment endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from qtrack.models import CommentCreate, CommentUpdate
from qtrack_api.deps import Container, get_container
from qtrack_api.routes import actor, payload

router = APIRouter(prefix="/api/comments", tags=["comments"])


class CommentUpdateRequest(CommentUpdate):
    updated_by: str | None = None


@router.get("")
async def list_comments(
    ticket_id: str | None = Query(default=None, alias="ticketId"),
    container: Container = Depends(get_container),
):
    return {"comments": await container.comments.list_comments(ticket_id)}


@router.post("", status_code=201)
async def create_comment(body: CommentCreate, container: Container = Depends(get_container)):
    return {"comment": await container.comments.create_comment(body)}


@router.put("/{comment_id}")
async def update_comment(
    comment_id: str,
    body: CommentUpdateRequest,
    container: Container = Depends(get_container),
):
    updated_by = actor(body.updated_by, "updatedBy")
    comment = await container.comments.update_comment(
        comment_id, payload(body, CommentUpdate, "updated_by"), updated_by,
    )
    return {"comment": comment}


@router.delete("/{comment_id}")
async def delete_comment(
    comment_id: str,
    deleted_by: str | None = Query(default=None, alias="deletedBy"),
    container: Container = Depends(get_container),
):
    await container.comments.delete_comment(comment_id, actor(deleted_by, "deletedBy"))
    return {"message": "Comment deleted successfully"}
