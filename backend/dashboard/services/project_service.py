"""Project management service."""

import logging
from typing import List

from dashboard.auth.basic import Identity
from dashboard.auth.exceptions import AuthenticationError
from dashboard.auth.permissions import ensure_any_of_or_admin, ensure_owner_or_admin
from dashboard.database.repositories import (
    CommentRepository,
    ProjectRepository,
    UserRepository,
)
from dashboard.exceptions import BadRequestError, NotFoundError
from dashboard.models.project import Project, ProjectStatus, Task
from dashboard.schemas.project import (
    CreateProjectRequest,
    CreateTaskRequest,
    UpdateProjectRequest,
    UpdateTaskRequest,
)

logger = logging.getLogger(__name__)


class ProjectService:
    """
    Manages projects, their team members and their embedded tasks.

    Editing or deleting a project is reserved to its owner and admins.
    Team members may additionally add and edit tasks.
    """

    async def list_projects(self, projects: ProjectRepository) -> List[Project]:
        return await projects.find_all()

    async def list_user_projects(self, projects: ProjectRepository, user_id: str) -> List[Project]:
        return await projects.find_by_user_id(user_id)

    async def get_project(self, projects: ProjectRepository, project_id: str) -> Project:
        project = await projects.find_by_id(project_id)
        if project is None:
            raise NotFoundError("Project not found")
        return project

    async def create_project(
        self,
        projects: ProjectRepository,
        users: UserRepository,
        request: CreateProjectRequest,
        identity: Identity,
    ) -> Project:
        """
        Create a project owned by the caller.

        Raises:
            BadRequestError: title or description blank
            AuthenticationError: the caller's user no longer exists
        """
        if not request.title or not request.title.strip():
            raise BadRequestError("Title is required")
        if not request.description or not request.description.strip():
            raise BadRequestError("Description is required")

        owner = await users.find_by_id(identity.user_id)
        if owner is None:
            raise AuthenticationError("User not found")

        project = Project(
            title=request.title,
            description=request.description,
            github_url=request.github_url,
            live_site_url=request.live_site_url,
            status=request.status or ProjectStatus.NOT_STARTED,
            tools=request.tools,
            user_id=identity.user_id,
            user_name=owner.full_name,
        )
        await projects.create(project)
        logger.info(f"User {identity.user_id} created project {project.id}")
        return project

    async def update_project(
        self,
        projects: ProjectRepository,
        project_id: str,
        request: UpdateProjectRequest,
        identity: Identity,
    ) -> None:
        """
        Replace the editable fields of a project.

        Owner, owner name, creation date, tasks and team members are kept
        from the stored document.
        """
        project = await self.get_project(projects, project_id)
        ensure_owner_or_admin(identity, project.user_id, "update this project")

        project.title = request.title
        project.description = request.description
        project.github_url = request.github_url
        project.live_site_url = request.live_site_url
        project.status = request.status
        project.tools = request.tools
        if request.progress is not None and not project.tasks:
            project.progress = request.progress

        await projects.replace(project_id, project)

    async def delete_project(
        self,
        projects: ProjectRepository,
        comments: CommentRepository,
        project_id: str,
        identity: Identity,
    ) -> None:
        """Delete a project together with its comments."""
        project = await self.get_project(projects, project_id)
        ensure_owner_or_admin(identity, project.user_id, "delete this project")

        await projects.delete(project_id)
        removed = await comments.delete_by_project_id(project_id)
        logger.info(f"Deleted project {project_id} and {removed} comments")

    # ========================================================================
    # Team members
    # ========================================================================

    async def add_team_member(
        self,
        projects: ProjectRepository,
        users: UserRepository,
        project_id: str,
        email: str,
        identity: Identity,
    ) -> Project:
        project = await self.get_project(projects, project_id)
        ensure_owner_or_admin(identity, project.user_id, "modify this project")

        member = await users.find_by_email(email)
        if member is None:
            raise NotFoundError("User not found")

        if project.is_team_member(member.id):
            raise BadRequestError("User is already a team member")

        project.team_members = [*project.team_members, member.id]
        await projects.replace(project_id, project)
        return project

    async def remove_team_member(
        self,
        projects: ProjectRepository,
        project_id: str,
        user_id: str,
        identity: Identity,
    ) -> Project:
        project = await self.get_project(projects, project_id)
        ensure_owner_or_admin(identity, project.user_id, "modify this project")

        if not project.is_team_member(user_id):
            raise BadRequestError("User is not a team member")

        project.team_members = [member for member in project.team_members if member != user_id]
        await projects.replace(project_id, project)
        return project

    # ========================================================================
    # Tasks
    # ========================================================================

    async def add_task(
        self,
        projects: ProjectRepository,
        project_id: str,
        request: CreateTaskRequest,
        identity: Identity,
    ) -> Project:
        """Append a task; the owner, team members and admins may do so."""
        project = await self.get_project(projects, project_id)
        ensure_any_of_or_admin(
            identity,
            [project.user_id, *project.team_members],
            "modify this project",
        )

        task = Task(
            title=request.title,
            description=request.description,
            status=request.status,
            priority=request.priority,
            assigned_to=request.assigned_to,
            due_date=request.due_date,
            created_by=identity.user_id,
        )
        project.tasks = [*project.tasks, task]

        if project.status == ProjectStatus.NOT_STARTED:
            project.status = ProjectStatus.IN_PROGRESS
        project.refresh_progress()

        await projects.replace(project_id, project)
        return project

    async def update_task(
        self,
        projects: ProjectRepository,
        project_id: str,
        task_id: str,
        request: UpdateTaskRequest,
        identity: Identity,
    ) -> Project:
        """Apply the fields present in the request to one task."""
        project = await self.get_project(projects, project_id)
        task = self._get_task(project, task_id)
        ensure_any_of_or_admin(
            identity,
            [project.user_id, task.created_by, task.assigned_to, *project.team_members],
            "modify this task",
        )

        for field, value in request.model_dump(exclude_unset=True).items():
            setattr(task, field, value)
        project.refresh_progress()

        await projects.replace(project_id, project)
        return project

    async def delete_task(
        self,
        projects: ProjectRepository,
        project_id: str,
        task_id: str,
        identity: Identity,
    ) -> Project:
        project = await self.get_project(projects, project_id)
        task = self._get_task(project, task_id)
        ensure_any_of_or_admin(
            identity,
            [project.user_id, task.created_by],
            "delete this task",
        )

        project.tasks = [t for t in project.tasks if t.id != task_id]
        project.refresh_progress()

        await projects.replace(project_id, project)
        return project

    @staticmethod
    def _get_task(project: Project, task_id: str) -> Task:
        task = project.find_task(task_id)
        if task is None:
            raise NotFoundError("Task not found")
        return task


project_service = ProjectService()
