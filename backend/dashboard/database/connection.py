"""
MongoDB connection management.

This module provides:
- MongoDB client connection via Motor (async driver)
- Index creation on startup
- Health check utilities
"""

import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from dashboard.config import Settings, get_settings
from dashboard.database.indexes import create_indexes

logger = logging.getLogger(__name__)

# Global MongoDB client instance
_client: Optional[AsyncIOMotorClient] = None
_database_name: Optional[str] = None


async def init_db(settings: Optional[Settings] = None) -> None:
    """
    Initialize the MongoDB client and ensure indexes exist.

    Index creation failures are logged, not raised, so the API can still
    start (and report itself degraded) when the server is unreachable.
    """
    global _client, _database_name

    settings = settings or get_settings()

    _client = AsyncIOMotorClient(
        settings.mongodb.url,
        serverSelectionTimeoutMS=settings.mongodb.server_selection_timeout_ms,
        connectTimeoutMS=settings.mongodb.connect_timeout_ms,
        tz_aware=True,
    )
    _database_name = settings.database_name

    logger.info(
        f"Using MongoDB at {sanitize_mongodb_url(settings.mongodb.url)} "
        f"(database: {_database_name})"
    )

    try:
        await create_indexes(_client[_database_name])
    except PyMongoError as e:
        logger.warning(f"Index creation skipped: {e}")


async def close_db() -> None:
    """
    Close MongoDB connection.
    """
    global _client
    if _client is not None:
        _client.close()
        _client = None


def get_client() -> AsyncIOMotorClient:
    """
    Get the MongoDB client instance.
    """
    if _client is None:
        raise RuntimeError("Database not initialized. Call init_db() first.")
    return _client


def get_database() -> AsyncIOMotorDatabase:
    """
    Get the MongoDB database instance.
    """
    return get_client()[_database_name or get_settings().database_name]


async def check_db_connection() -> bool:
    """
    Check if MongoDB connection is healthy.
    """
    if _client is None:
        return False

    try:
        await _client.admin.command("ping")
        return True
    except PyMongoError:
        return False


def get_db_info() -> dict:
    """
    Get database connection information and status.
    """
    settings = get_settings()

    return {
        "status": "connected" if _client is not None else "disconnected",
        "url": sanitize_mongodb_url(settings.mongodb.url),
        "database": _database_name or settings.database_name,
        "environment": settings.environment,
    }


def sanitize_mongodb_url(url: str) -> str:
    """
    Hide password in MongoDB URL for safe logging.
    """
    if not url:
        return "[empty]"
    if "@" not in url or "://" not in url:
        return url

    protocol, rest = url.split("://", 1)
    credentials, host = rest.rsplit("@", 1)
    if ":" in credentials:
        username = credentials.split(":", 1)[0]
        return f"{protocol}://{username}:***@{host}"
    return url
