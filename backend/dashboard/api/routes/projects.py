"""Projects API routes, including team members and tasks."""

from fastapi import APIRouter, Depends, Request, Response, status

from dashboard.auth import Identity, get_current_identity
from dashboard.database import (
    get_comment_repository,
    get_project_repository,
    get_user_repository,
)
from dashboard.database.repositories import (
    CommentRepository,
    ProjectRepository,
    UserRepository,
)
from dashboard.schemas import (
    CreateProjectRequest,
    CreateTaskRequest,
    ProjectResponse,
    TeamMemberRequest,
    UpdateProjectRequest,
    UpdateTaskRequest,
)
from dashboard.services import project_service

router = APIRouter(prefix="/api/projects", tags=["Projects"])


@router.get("", response_model=list[ProjectResponse])
async def list_projects(projects: ProjectRepository = Depends(get_project_repository)):
    """List all projects."""
    return [ProjectResponse.model_validate(p) for p in await project_service.list_projects(projects)]


@router.get("/my-projects", response_model=list[ProjectResponse])
async def list_my_projects(
    identity: Identity = Depends(get_current_identity),
    projects: ProjectRepository = Depends(get_project_repository),
):
    """Projects owned by the authenticated user."""
    owned = await project_service.list_user_projects(projects, identity.user_id)
    return [ProjectResponse.model_validate(p) for p in owned]


@router.get("/user/{user_id}", response_model=list[ProjectResponse])
async def list_user_projects(
    user_id: str,
    projects: ProjectRepository = Depends(get_project_repository),
):
    owned = await project_service.list_user_projects(projects, user_id)
    return [ProjectResponse.model_validate(p) for p in owned]


@router.get("/{project_id}", response_model=ProjectResponse)
async def get_project(
    project_id: str,
    projects: ProjectRepository = Depends(get_project_repository),
):
    project = await project_service.get_project(projects, project_id)
    return ProjectResponse.model_validate(project)


@router.post("", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
async def create_project(
    body: CreateProjectRequest,
    request: Request,
    response: Response,
    identity: Identity = Depends(get_current_identity),
    projects: ProjectRepository = Depends(get_project_repository),
    users: UserRepository = Depends(get_user_repository),
):
    """Create a project owned by the authenticated user."""
    project = await project_service.create_project(projects, users, body, identity)
    response.headers["Location"] = str(request.url_for("get_project", project_id=project.id))
    return ProjectResponse.model_validate(project)


@router.put("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_project(
    project_id: str,
    body: UpdateProjectRequest,
    identity: Identity = Depends(get_current_identity),
    projects: ProjectRepository = Depends(get_project_repository),
):
    await project_service.update_project(projects, project_id, body, identity)


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_project(
    project_id: str,
    identity: Identity = Depends(get_current_identity),
    projects: ProjectRepository = Depends(get_project_repository),
    comments: CommentRepository = Depends(get_comment_repository),
):
    """Delete a project and every comment posted on it."""
    await project_service.delete_project(projects, comments, project_id, identity)


# ============================================================================
# Team members
# ============================================================================

@router.put("/{project_id}/team", response_model=ProjectResponse)
async def add_team_member(
    project_id: str,
    body: TeamMemberRequest,
    identity: Identity = Depends(get_current_identity),
    projects: ProjectRepository = Depends(get_project_repository),
    users: UserRepository = Depends(get_user_repository),
):
    """Add the user with the given email to the project team."""
    project = await project_service.add_team_member(
        projects, users, project_id, body.email, identity
    )
    return ProjectResponse.model_validate(project)


@router.delete("/{project_id}/team/{user_id}", response_model=ProjectResponse)
async def remove_team_member(
    project_id: str,
    user_id: str,
    identity: Identity = Depends(get_current_identity),
    projects: ProjectRepository = Depends(get_project_repository),
):
    project = await project_service.remove_team_member(projects, project_id, user_id, identity)
    return ProjectResponse.model_validate(project)


# ============================================================================
# Tasks
# ============================================================================

@router.post(
    "/{project_id}/tasks",
    response_model=ProjectResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_task(
    project_id: str,
    body: CreateTaskRequest,
    identity: Identity = Depends(get_current_identity),
    projects: ProjectRepository = Depends(get_project_repository),
):
    """Add a task and return the updated project."""
    project = await project_service.add_task(projects, project_id, body, identity)
    return ProjectResponse.model_validate(project)


@router.put("/{project_id}/tasks/{task_id}", response_model=ProjectResponse)
async def update_task(
    project_id: str,
    task_id: str,
    body: UpdateTaskRequest,
    identity: Identity = Depends(get_current_identity),
    projects: ProjectRepository = Depends(get_project_repository),
):
    """Update only the task fields present in the body."""
    project = await project_service.update_task(projects, project_id, task_id, body, identity)
    return ProjectResponse.model_validate(project)


@router.delete("/{project_id}/tasks/{task_id}", response_model=ProjectResponse)
async def delete_task(
    project_id: str,
    task_id: str,
    identity: Identity = Depends(get_current_identity),
    projects: ProjectRepository = Depends(get_project_repository),
):
    project = await project_service.delete_task(projects, project_id, task_id, identity)
    return ProjectResponse.model_validate(project)
