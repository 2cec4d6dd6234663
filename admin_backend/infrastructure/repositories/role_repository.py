"""
SQLAlchemy Implementation of Role Repository.
"""

from typing import Optional

from sqlalchemy import select

from admin_backend.domain.models.role import Role
from admin_backend.domain.models.user import User  # noqa: F401  (mapper registration)
from admin_backend.domain.repositories.role_repository import RoleRepository
from admin_backend.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyRoleRepository(SQLAlchemyRepository[Role], RoleRepository):
    """Role repository implementation using SQLAlchemy."""

    def get_by_name(self, name: str) -> Optional[Role]:
        return self.db.scalars(select(Role).where(Role.name == name)).first()
