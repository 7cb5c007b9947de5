"""Project and task Pydantic schemas."""

from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator

from dashboard.models.project import ProjectStatus, TaskPriority, TaskStatus
from dashboard.schemas.common import BaseSchema, EmailAddress, TimestampSchema


class CreateProjectRequest(BaseSchema):
    """Project creation schema."""

    title: str = Field(..., max_length=100)
    description: str = Field(..., max_length=1000)
    github_url: Optional[str] = None
    live_site_url: Optional[str] = None
    status: ProjectStatus = ProjectStatus.NOT_STARTED
    tools: Optional[str] = None


class UpdateProjectRequest(CreateProjectRequest):
    """
    Replacement of a project's editable fields.

    Owner, tasks and team members are managed elsewhere and survive a PUT.
    """

    progress: Optional[int] = Field(default=None, ge=0, le=100)


class TeamMemberRequest(BaseSchema):
    email: EmailAddress


class CreateTaskRequest(BaseSchema):
    """Task creation schema."""

    title: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    status: TaskStatus = TaskStatus.TO_DO
    priority: TaskPriority = TaskPriority.MEDIUM
    assigned_to: Optional[str] = None
    due_date: Optional[datetime] = None


class UpdateTaskRequest(BaseSchema):
    """Partial task update: only the fields present in the body change."""

    title: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    assigned_to: Optional[str] = None
    due_date: Optional[datetime] = None

    @field_validator("title", "status", "priority")
    @classmethod
    def not_null(cls, v):
        if v is None:
            raise ValueError("may be omitted but not null")
        return v


class TaskResponse(BaseSchema):
    id: str
    title: str
    description: Optional[str] = None
    status: str
    priority: str
    assigned_to: Optional[str] = None
    due_date: Optional[datetime] = None
    created_by: Optional[str] = None
    created_at: datetime


class ProjectResponse(TimestampSchema):
    """Project as returned by the API, tasks embedded."""

    id: str
    title: str
    description: str
    user_id: str
    user_name: str
    github_url: Optional[str] = None
    live_site_url: Optional[str] = None
    status: str
    tools: Optional[str] = None
    team_members: List[str] = Field(default_factory=list)
    tasks: List[TaskResponse] = Field(default_factory=list)
    progress: int = 0
