"""Comment Pydantic schemas."""

from typing import Optional

from dashboard.schemas.common import BaseSchema, TimestampSchema


class CreateCommentRequest(BaseSchema):
    project_id: str
    content: str


class UpdateCommentRequest(BaseSchema):
    """Replacement of a comment's content. ``approved`` is applied for admins only."""

    content: str
    approved: Optional[bool] = None


class CommentResponse(TimestampSchema):
    id: str
    project_id: str
    user_id: str
    user_name: str
    content: str
    approved: bool
