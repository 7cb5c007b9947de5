"""Health check endpoints for load balancers and monitoring."""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from dashboard.config import get_settings
from dashboard.database import get_db
from dashboard.models.base import utc_now
from dashboard.schemas import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get("/", response_class=PlainTextResponse, include_in_schema=False)
async def root() -> str:
    """Root endpoint pointing at the interactive docs."""
    return "Projects Dashboard API is running. See /docs for the API reference."


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Liveness probe. Does not touch the database.

    Returns:
        HealthResponse: status, timestamp and environment
    """
    return HealthResponse(
        status="online",
        timestamp=utc_now(),
        message="Projects Dashboard API is running",
        environment=get_settings().environment,
    )


@router.get("/api/health")
async def api_health(db: AsyncIOMotorDatabase = Depends(get_db)) -> Dict[str, Any]:
    """
    Readiness probe including a database round trip.

    Always answers 200; a database failure is reported in the body.
    """
    result: Dict[str, Any] = {
        "status": "online",
        "timestamp": utc_now().isoformat(),
        "databaseName": db.name,
    }

    try:
        await db.command("ping")
        result["databaseConnection"] = "connected"
        result["userCount"] = await db["users"].count_documents({})
    except PyMongoError as e:
        logger.warning(f"Health check database error: {e}")
        result["databaseConnection"] = "error"
        result["errorType"] = type(e).__name__
        result["errorMessage"] = str(e)

    return result
