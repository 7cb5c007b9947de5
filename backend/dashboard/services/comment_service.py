"""Comment service: posting, editing and moderating project comments."""

import logging
from typing import List

from dashboard.auth.basic import Identity
from dashboard.auth.exceptions import AuthenticationError
from dashboard.auth.permissions import ensure_owner_or_admin
from dashboard.database.repositories import (
    CommentRepository,
    ProjectRepository,
    UserRepository,
)
from dashboard.exceptions import BadRequestError, NotFoundError
from dashboard.models.comment import Comment
from dashboard.schemas.comment import CreateCommentRequest, UpdateCommentRequest

logger = logging.getLogger(__name__)


class CommentService:
    """
    Comments are visible as soon as they are posted. Admins can hide one
    by unapproving it and show it again by approving it.
    """

    async def list_comments(self, comments: CommentRepository) -> List[Comment]:
        return await comments.find_all()

    async def get_comment(self, comments: CommentRepository, comment_id: str) -> Comment:
        comment = await comments.find_by_id(comment_id)
        if comment is None:
            raise NotFoundError("Comment not found")
        return comment

    async def list_project_comments(
        self, comments: CommentRepository, project_id: str
    ) -> List[Comment]:
        return await comments.find_by_project_id(project_id)

    async def list_approved_comments(
        self, comments: CommentRepository, project_id: str
    ) -> List[Comment]:
        return [c for c in await comments.find_by_project_id(project_id) if c.approved]

    async def create_comment(
        self,
        comments: CommentRepository,
        projects: ProjectRepository,
        users: UserRepository,
        request: CreateCommentRequest,
        identity: Identity,
    ) -> Comment:
        """
        Post a comment as the caller.

        Raises:
            BadRequestError: content or projectId blank
            AuthenticationError: the caller's user no longer exists
            NotFoundError: the project does not exist
        """
        if not request.content or not request.content.strip():
            raise BadRequestError("Content is required")
        if not request.project_id or not request.project_id.strip():
            raise BadRequestError("Project ID is required")

        author = await users.find_by_id(identity.user_id)
        if author is None:
            raise AuthenticationError("User not found")

        project = await projects.find_by_id(request.project_id)
        if project is None:
            raise NotFoundError("Project not found")

        comment = Comment(
            project_id=project.id,
            user_id=author.id,
            user_name=author.full_name,
            content=request.content,
            approved=True,
        )
        await comments.create(comment)
        logger.info(f"User {author.id} commented on project {project.id}")
        return comment

    async def update_comment(
        self,
        comments: CommentRepository,
        comment_id: str,
        request: UpdateCommentRequest,
        identity: Identity,
    ) -> None:
        """Replace the content; the approval flag changes only for admins."""
        comment = await self.get_comment(comments, comment_id)
        ensure_owner_or_admin(identity, comment.user_id, "update this comment")

        comment.content = request.content
        if identity.is_admin and request.approved is not None:
            comment.approved = request.approved

        await comments.replace(comment_id, comment)

    async def delete_comment(
        self, comments: CommentRepository, comment_id: str, identity: Identity
    ) -> None:
        comment = await self.get_comment(comments, comment_id)
        ensure_owner_or_admin(identity, comment.user_id, "delete this comment")
        await comments.delete(comment_id)

    async def set_approval(
        self, comments: CommentRepository, comment_id: str, approved: bool
    ) -> None:
        """Approve or unapprove a comment. Callers must already be admins."""
        comment = await self.get_comment(comments, comment_id)
        comment.approved = approved
        await comments.replace(comment_id, comment)
        logger.info(f"Comment {comment_id} {'approved' if approved else 'unapproved'}")


comment_service = CommentService()
