"""
User Repository Interface.
Defines specific data access operations for Users.
"""

from typing import Any, Dict

from admin_backend.domain.repositories.base import BaseRepository
from admin_backend.domain.models.user import User
from admin_backend.domain.schemas.user import ListUserQuery


class UserRepository(BaseRepository[User]):
    """Interface for User-specific operations."""

    def get_with_filters(self, query: ListUserQuery) -> Dict[str, Any]:
        """Get one page of matching users and the total match count, from one snapshot."""
        ...
