"""Comment service."""

from __future__ import annotations

from qtrack.collaboration import CollaborationHub, MessageType, build_event, ticket_topic
from qtrack.errors import NotFoundError, ValidationError
from qtrack.models import Comment, CommentCreate, CommentUpdate, EntityType, changes_from
from qtrack.repositories import ActivityLogRepository, CommentRepository

MAX_CONTENT_LENGTH = 5000


class CommentService:
    def __init__(
        self,
        comments: CommentRepository,
        activity: ActivityLogRepository,
        hub: CollaborationHub | None = None,
    ) -> None:
        self._comments = comments
        self._activity = activity
        self._hub = hub

    async def list_comments(self, ticket_id: str | None = None) -> list[Comment]:
        """Per ticket: oldest first. Across all tickets: newest first."""
        if ticket_id:
            comments = await self._comments.get_by_ticket(ticket_id)
            return sorted(comments, key=lambda c: c.created_at)
        comments = await self._comments.get_all()
        return sorted(comments, key=lambda c: c.created_at, reverse=True)

    async def get_comment(self, comment_id: str) -> Comment:
        comment = await self._comments.get_by_id(comment_id)
        if comment is None:
            raise NotFoundError(f"Comment with id {comment_id} not found")
        return comment

    async def create_comment(self, data: CommentCreate) -> Comment:
        self._validate(data)
        comment = await self._comments.create(data.model_dump())
        await self._activity.log(
            data.user_id, "comment_added", EntityType.COMMENT, comment.id,
            {"ticketId": data.ticket_id, "contentLength": len(data.content), "isInternal": data.is_internal},
        )
        if self._hub is not None:
            await self._hub.publish(build_event(
                MessageType.COMMENT_ADDED,
                ticket_topic(data.ticket_id),
                comment.model_dump(mode="json", by_alias=True),
            ))
        return comment

    async def update_comment(self, comment_id: str, data: CommentUpdate, updated_by: str) -> Comment:
        existing = await self.get_comment(comment_id)
        changes = changes_from(data)
        if "content" in changes:
            self._check_content(changes["content"])

        comment = await self._comments.update(comment_id, changes)
        if comment is None:
            raise NotFoundError(f"Failed to update comment with id {comment_id}")

        await self._activity.log(
            updated_by, "comment_updated", EntityType.COMMENT, comment_id, {"ticketId": existing.ticket_id},
        )
        return comment

    async def delete_comment(self, comment_id: str, deleted_by: str) -> None:
        comment = await self.get_comment(comment_id)
        if not await self._comments.delete(comment_id):
            raise NotFoundError(f"Failed to delete comment with id {comment_id}")
        await self._activity.log(
            deleted_by, "comment_deleted", EntityType.COMMENT, comment_id, {"ticketId": comment.ticket_id},
        )

    def _validate(self, data: CommentCreate) -> None:
        if not data.ticket_id.strip():
            raise ValidationError("Ticket ID is required")
        if not data.user_id.strip():
            raise ValidationError("User ID is required")
        self._check_content(data.content)

    @staticmethod
    def _check_content(content: str) -> None:
        if not content.strip():
            raise ValidationError("Comment content is required")
        if len(content) > MAX_CONTENT_LENGTH:
            raise ValidationError(f"Comment content too long (max {MAX_CONTENT_LENGTH} characters)")
