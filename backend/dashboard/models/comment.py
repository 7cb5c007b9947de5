"""Comment document model for the 'comments' collection."""

from dashboard.models.base import MongoModel


class Comment(MongoModel):
    """A comment posted on a project. New comments start out approved."""

    reference_fields = ("projectId", "userId")

    project_id: str
    user_id: str
    user_name: str
    content: str
    approved: bool = True
