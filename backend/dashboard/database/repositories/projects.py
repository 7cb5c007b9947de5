"""
ProjectRepository

MongoDB operations for the 'projects' collection.

Specialized Methods:
- find_by_user_id(user_id): Projects owned by a user
"""

from typing import List

from dashboard.database.repositories.base import BaseRepository
from dashboard.models.base import parse_object_id
from dashboard.models.project import Project


class ProjectRepository(BaseRepository[Project]):
    collection_name = "projects"
    model = Project

    async def find_by_user_id(self, user_id: str) -> List[Project]:
        oid = parse_object_id(user_id)
        if oid is None:
            return []
        return await self.find_many({"userId": oid})
