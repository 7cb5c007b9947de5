"""
MongoDB Index Definitions

Creates all required indexes on startup.

Indexes by Collection:
- users: email (unique), role
- projects: userId
- comments: projectId, userId

Called from database/connection.py on application startup.
"""

import logging

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING, IndexModel

logger = logging.getLogger(__name__)

INDEXES = {
    "users": [
        IndexModel([("email", ASCENDING)], unique=True, name="email_unique"),
        IndexModel([("role", ASCENDING)], name="role"),
    ],
    "projects": [
        IndexModel([("userId", ASCENDING)], name="userId"),
    ],
    "comments": [
        IndexModel([("projectId", ASCENDING)], name="projectId"),
        IndexModel([("userId", ASCENDING)], name="userId"),
    ],
}


async def create_indexes(db: AsyncIOMotorDatabase) -> None:
    """Create every index in INDEXES; existing indexes are left alone."""
    for collection_name, indexes in INDEXES.items():
        names = await db[collection_name].create_indexes(indexes)
        logger.info(f"Ensured indexes on {collection_name}: {', '.join(names)}")
