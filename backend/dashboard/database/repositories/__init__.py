"""
Repository Pattern for MongoDB

Database abstraction layer providing:
- Testability with fake collections
- Centralized query logic

Repositories:
- BaseRepository: Common CRUD operations
- UserRepository: Lookup by email and role
- ProjectRepository: Projects by owner
- CommentRepository: Comments by project
"""

from dashboard.database.repositories.base import BaseRepository
from dashboard.database.repositories.comments import CommentRepository
from dashboard.database.repositories.projects import ProjectRepository
from dashboard.database.repositories.users import UserRepository

__all__ = [
    "BaseRepository",
    "CommentRepository",
    "ProjectRepository",
    "UserRepository",
]
