"""
Project MongoDB Schema

Defines the Project document model for the 'projects' collection.

Schema Fields:
- _id: ObjectId (MongoDB auto-generated)
- title, description: Required text
- userId: Owner (ObjectId), userName: owner's display name at creation
- githubUrl, liveSiteUrl, tools: Optional free text
- status: Not Started | In Progress | Completed | On Hold
- teamMembers: User ids allowed to work on tasks
- tasks: Embedded task list
- progress: Percentage of completed tasks (0-100)
- createdDate, modifiedDate: Timestamps

Indexes:
- userId
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from bson import ObjectId
from pydantic import Field

from dashboard.models.base import CamelModel, MongoModel, utc_now


class ProjectStatus(str, Enum):
    """Project lifecycle status."""

    NOT_STARTED = "Not Started"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    ON_HOLD = "On Hold"


class TaskStatus(str, Enum):
    """Task board column."""

    TO_DO = "To Do"
    IN_PROGRESS = "In Progress"
    REVIEW = "Review"
    COMPLETED = "Completed"


class TaskPriority(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    URGENT = "Urgent"


def _new_task_id() -> str:
    return str(ObjectId())


class Task(CamelModel):
    """Task embedded in a project document."""

    id: str = Field(default_factory=_new_task_id)
    title: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    status: TaskStatus = TaskStatus.TO_DO
    priority: TaskPriority = TaskPriority.MEDIUM
    assigned_to: Optional[str] = None
    due_date: Optional[datetime] = None
    created_by: Optional[str] = None
    created_at: datetime = Field(default_factory=utc_now)


class Project(MongoModel):
    """Project document."""

    reference_fields = ("userId",)

    title: str = Field(..., max_length=100)
    description: str = Field(..., max_length=1000)
    user_id: str
    user_name: str
    github_url: Optional[str] = None
    live_site_url: Optional[str] = None
    status: ProjectStatus = ProjectStatus.NOT_STARTED
    tools: Optional[str] = None
    team_members: List[str] = Field(default_factory=list)
    tasks: List[Task] = Field(default_factory=list)
    progress: int = Field(default=0, ge=0, le=100)

    def find_task(self, task_id: str) -> Optional[Task]:
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None

    def is_team_member(self, user_id: str) -> bool:
        return user_id in self.team_members

    def calculate_progress(self) -> int:
        """Percentage of tasks marked Completed, rounded half up."""
        if not self.tasks:
            return 0
        completed = sum(1 for task in self.tasks if task.status == TaskStatus.COMPLETED)
        return int(completed * 100 / len(self.tasks) + 0.5)

    def refresh_progress(self) -> None:
        """
        Recompute progress from the task list and derive the status from it.

        With no tasks the stored progress is kept. Full progress marks the
        project Completed; any progress marks it In Progress.
        """
        if self.tasks:
            self.progress = self.calculate_progress()

        if self.progress == 100:
            self.status = ProjectStatus.COMPLETED
        elif self.progress > 0:
            self.status = ProjectStatus.IN_PROGRESS
