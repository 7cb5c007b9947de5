"""
CommentRepository

MongoDB operations for the 'comments' collection.

Specialized Methods:
- find_by_project_id(project_id): Comments on a project
- delete_by_project_id(project_id): Cleanup when a project is removed
"""

from typing import List

from dashboard.database.repositories.base import BaseRepository
from dashboard.models.base import parse_object_id
from dashboard.models.comment import Comment


class CommentRepository(BaseRepository[Comment]):
    collection_name = "comments"
    model = Comment

    async def find_by_project_id(self, project_id: str) -> List[Comment]:
        oid = parse_object_id(project_id)
        if oid is None:
            return []
        return await self.find_many({"projectId": oid})

    async def delete_by_project_id(self, project_id: str) -> int:
        oid = parse_object_id(project_id)
        if oid is None:
            return 0
        result = await self.collection.delete_many({"projectId": oid})
        return result.deleted_count
