"""
UserRepository

MongoDB operations for the 'users' collection.

Specialized Methods:
- find_by_email(email): Login and duplicate-registration lookups
- find_by_role(role): Admin listing
"""

from typing import List, Optional

from dashboard.database.repositories.base import BaseRepository
from dashboard.models.user import User


class UserRepository(BaseRepository[User]):
    collection_name = "users"
    model = User

    async def find_by_email(self, email: str) -> Optional[User]:
        return await self.find_one({"email": email})

    async def find_by_role(self, role: str) -> List[User]:
        return await self.find_many({"role": role})
