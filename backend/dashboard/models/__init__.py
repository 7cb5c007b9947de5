"""
MongoDB Document Models

Each model represents a collection in the database with type hints and
validation using Pydantic.

Collections:
- users: Registered users with Argon2id password hashes and roles
- projects: Projects with embedded tasks and team members
- comments: Comments on projects, subject to admin approval
"""

from dashboard.models.base import CamelModel, MongoModel, parse_object_id, utc_now
from dashboard.models.comment import Comment
from dashboard.models.project import (
    Project,
    ProjectStatus,
    Task,
    TaskPriority,
    TaskStatus,
)
from dashboard.models.user import User, UserRole

__all__ = [
    "CamelModel",
    "MongoModel",
    "parse_object_id",
    "utc_now",
    "Comment",
    "Project",
    "ProjectStatus",
    "Task",
    "TaskPriority",
    "TaskStatus",
    "User",
    "UserRole",
]
