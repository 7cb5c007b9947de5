"""
Database module initialization.
Exports database components for use throughout the application.
"""

from dashboard.database.connection import (
    check_db_connection,
    close_db,
    get_client,
    get_database,
    get_db_info,
    init_db,
    sanitize_mongodb_url,
)
from dashboard.database.dependencies import (
    get_comment_repository,
    get_db,
    get_project_repository,
    get_user_repository,
)
from dashboard.database.repositories import (
    BaseRepository,
    CommentRepository,
    ProjectRepository,
    UserRepository,
)

__all__ = [
    # Connection management
    "init_db",
    "close_db",
    "get_client",
    "get_database",
    # Dependencies
    "get_db",
    "get_user_repository",
    "get_project_repository",
    "get_comment_repository",
    # Repositories
    "BaseRepository",
    "CommentRepository",
    "ProjectRepository",
    "UserRepository",
    # Utilities
    "check_db_connection",
    "get_db_info",
    "sanitize_mongodb_url",
]
