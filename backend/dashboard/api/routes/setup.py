"""
First-run setup routes.

``/api/setup`` reports installation status and creates the first admin.
``/api/public-setup`` exposes the first-admin endpoint again together with a
database-free liveness probe, for setup screens served from another origin.
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from dashboard.database import get_db, get_user_repository
from dashboard.database.repositories import UserRepository
from dashboard.models.base import utc_now
from dashboard.schemas import (
    FirstAdminRequest,
    FirstAdminResponse,
    HealthResponse,
    SetupStatusResponse,
)
from dashboard.services import setup_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/setup", tags=["Setup"])
public_router = APIRouter(prefix="/api/public-setup", tags=["Setup"])


async def _create_first_admin(body: FirstAdminRequest, users: UserRepository) -> FirstAdminResponse:
    admin = await setup_service.create_first_admin(
        users,
        email=body.email,
        password=body.password,
        first_name=body.first_name,
        last_name=body.last_name,
        description=body.description,
    )
    return FirstAdminResponse(
        message="First admin user created successfully",
        user_id=admin.id,
        email=admin.email,
        role=admin.effective_role,
    )


@router.get("/status", response_model=SetupStatusResponse)
async def get_setup_status(
    db: AsyncIOMotorDatabase = Depends(get_db),
    users: UserRepository = Depends(get_user_repository),
):
    """Database reachability, user count and whether an admin exists."""
    try:
        await db.command("ping")
        return await setup_service.get_status(users, db.name)
    except PyMongoError as e:
        logger.error(f"Setup status check failed: {e}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"status": "error", "databaseConnected": False, "error": str(e)},
        )


@router.post(
    "/first-admin",
    response_model=FirstAdminResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_first_admin(
    body: FirstAdminRequest,
    users: UserRepository = Depends(get_user_repository),
):
    """Create the first admin. Refused with 409 once any user exists."""
    return await _create_first_admin(body, users)


@public_router.post(
    "/first-admin",
    response_model=FirstAdminResponse,
    status_code=status.HTTP_201_CREATED,
)
async def public_create_first_admin(
    body: FirstAdminRequest,
    users: UserRepository = Depends(get_user_repository),
):
    return await _create_first_admin(body, users)


@public_router.get("/health", response_model=HealthResponse, response_model_exclude_none=True)
async def public_health():
    return HealthResponse(
        status="online",
        timestamp=utc_now(),
        message="Public setup API is running",
    )
