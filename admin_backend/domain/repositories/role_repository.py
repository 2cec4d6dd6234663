"""
Role Repository Interface.
"""

from typing import Optional

from admin_backend.domain.repositories.base import BaseRepository
from admin_backend.domain.models.role import Role


class RoleRepository(BaseRepository[Role]):
    """Interface for Role lookups."""

    def get_by_name(self, name: str) -> Optional[Role]:
        """Get a role by its unique name."""
        ...
