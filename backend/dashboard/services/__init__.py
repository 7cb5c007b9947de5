"""Business logic layer. Each service is exported as a module-level singleton."""

from dashboard.services.comment_service import CommentService, comment_service
from dashboard.services.project_service import ProjectService, project_service
from dashboard.services.setup_service import SetupService, setup_service
from dashboard.services.user_service import UserService, user_service

__all__ = [
    "CommentService",
    "ProjectService",
    "SetupService",
    "UserService",
    "comment_service",
    "project_service",
    "setup_service",
    "user_service",
]
