"""
API Dependencies.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from admin_backend.infrastructure.database import get_db
from admin_backend.domain.models.role import Role
from admin_backend.domain.models.user import User
from admin_backend.domain.repositories.role_repository import RoleRepository
from admin_backend.domain.repositories.user_repository import UserRepository
from admin_backend.infrastructure.repositories.role_repository import SQLAlchemyRoleRepository
from admin_backend.infrastructure.repositories.user_repository import SQLAlchemyUserRepository


def get_user_repository(db: Session = Depends(get_db)) -> UserRepository:
    """Get user repository instance."""
    return SQLAlchemyUserRepository(db, User)


def get_role_repository(db: Session = Depends(get_db)) -> RoleRepository:
    """Get role repository instance."""
    return SQLAlchemyRoleRepository(db, Role)
