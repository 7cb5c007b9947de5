"""Users API routes."""

from typing import Optional

from fastapi import APIRouter, Depends, Request, Response, status

from dashboard.auth import Identity, get_current_identity, get_optional_identity
from dashboard.database import get_user_repository
from dashboard.database.repositories import UserRepository
from dashboard.schemas import (
    LoginModel,
    UserCreateRequest,
    UserRegistrationRequest,
    UserResponse,
    UserUpdateRequest,
)
from dashboard.services import setup_service, user_service

router = APIRouter(prefix="/api/users", tags=["Users"])


@router.get("", response_model=list[UserResponse])
async def list_users(users: UserRepository = Depends(get_user_repository)):
    """List all users."""
    return [UserResponse.model_validate(u) for u in await user_service.list_users(users)]


@router.get("/admins", response_model=list[UserResponse])
async def list_admins(users: UserRepository = Depends(get_user_repository)):
    """List users holding the Admin role."""
    return [UserResponse.model_validate(u) for u in await user_service.list_admins(users)]


@router.get("/me", response_model=UserResponse)
async def get_me(
    identity: Identity = Depends(get_current_identity),
    users: UserRepository = Depends(get_user_repository),
):
    """Get the authenticated user."""
    user = await user_service.get_current_user(users, identity)
    return UserResponse.model_validate(user)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: str, users: UserRepository = Depends(get_user_repository)):
    user = await user_service.get_user(users, user_id)
    return UserResponse.model_validate(user)


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register_user(
    body: UserCreateRequest,
    request: Request,
    response: Response,
    users: UserRepository = Depends(get_user_repository),
    caller: Optional[Identity] = Depends(get_optional_identity),
):
    """
    Register a new user.

    Anyone may register. The requested role is honoured only when the
    caller authenticates as an admin.
    """
    user = await user_service.register(users, body, caller)
    response.headers["Location"] = str(request.url_for("get_user", user_id=user.id))
    return UserResponse.model_validate(user)


@router.post("/setup-admin", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def setup_admin(
    body: UserRegistrationRequest,
    users: UserRepository = Depends(get_user_repository),
):
    """Create the first user of an empty installation as Admin."""
    admin = await setup_service.create_first_admin(
        users,
        email=body.email,
        password=body.password,
        first_name=body.first_name,
        last_name=body.last_name,
        description=body.description,
    )
    return UserResponse.model_validate(admin)


@router.put("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_user(
    user_id: str,
    body: UserUpdateRequest,
    identity: Identity = Depends(get_current_identity),
    users: UserRepository = Depends(get_user_repository),
):
    await user_service.update_user(users, user_id, body, identity)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: str,
    identity: Identity = Depends(get_current_identity),
    users: UserRepository = Depends(get_user_repository),
):
    await user_service.delete_user(users, user_id, identity)


@router.patch("/{user_id}/security", status_code=status.HTTP_204_NO_CONTENT)
async def update_security(
    user_id: str,
    body: LoginModel,
    identity: Identity = Depends(get_current_identity),
    users: UserRepository = Depends(get_user_repository),
):
    """Change a user's email and password."""
    await user_service.update_security(users, user_id, body, identity)
