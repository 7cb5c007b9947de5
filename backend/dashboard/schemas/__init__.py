"""Request and response schemas for the HTTP API."""

from dashboard.schemas.comment import (
    CommentResponse,
    CreateCommentRequest,
    UpdateCommentRequest,
)
from dashboard.schemas.common import BaseSchema, TimestampSchema
from dashboard.schemas.project import (
    CreateProjectRequest,
    CreateTaskRequest,
    ProjectResponse,
    TaskResponse,
    TeamMemberRequest,
    UpdateProjectRequest,
    UpdateTaskRequest,
)
from dashboard.schemas.setup import (
    FirstAdminRequest,
    FirstAdminResponse,
    HealthResponse,
    SetupStatusResponse,
)
from dashboard.schemas.user import (
    LoginModel,
    UserCreateRequest,
    UserRegistrationRequest,
    UserResponse,
    UserUpdateRequest,
)

__all__ = [
    "BaseSchema",
    "TimestampSchema",
    "CommentResponse",
    "CreateCommentRequest",
    "UpdateCommentRequest",
    "CreateProjectRequest",
    "CreateTaskRequest",
    "ProjectResponse",
    "TaskResponse",
    "TeamMemberRequest",
    "UpdateProjectRequest",
    "UpdateTaskRequest",
    "FirstAdminRequest",
    "FirstAdminResponse",
    "HealthResponse",
    "SetupStatusResponse",
    "LoginModel",
    "UserCreateRequest",
    "UserRegistrationRequest",
    "UserResponse",
    "UserUpdateRequest",
]
