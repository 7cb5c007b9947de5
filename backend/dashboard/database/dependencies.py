"""
FastAPI dependency injection for the database and repositories.
"""

from fastapi import Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from dashboard.database.connection import get_database
from dashboard.database.repositories import (
    CommentRepository,
    ProjectRepository,
    UserRepository,
)


def get_db() -> AsyncIOMotorDatabase:
    """
    FastAPI dependency that provides the MongoDB database.

    Usage:
        @router.get("/projects")
        async def list_projects(db: AsyncIOMotorDatabase = Depends(get_db)):
            ...
    """
    return get_database()


def get_user_repository(db: AsyncIOMotorDatabase = Depends(get_db)) -> UserRepository:
    return UserRepository(db)


def get_project_repository(db: AsyncIOMotorDatabase = Depends(get_db)) -> ProjectRepository:
    return ProjectRepository(db)


def get_comment_repository(db: AsyncIOMotorDatabase = Depends(get_db)) -> CommentRepository:
    return CommentRepository(db)
