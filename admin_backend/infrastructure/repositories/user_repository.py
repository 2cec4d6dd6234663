"""
SQLAlchemy Implementation of User Repository.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import selectinload
from sqlalchemy.sql.elements import ColumnElement

from admin_backend.domain.models.role import Role  # noqa: F401  (mapper registration)
from admin_backend.domain.models.user import User
from admin_backend.domain.repositories.user_repository import UserRepository
from admin_backend.domain.schemas.user import ListUserQuery
from admin_backend.infrastructure.database import snapshot
from admin_backend.infrastructure.repositories.base_repository import SQLAlchemyRepository


def build_user_filters(query: ListUserQuery) -> List[ColumnElement]:
    """Build one WHERE clause per filter field present in the query.

    An empty list matches every user. A status of 0 is a real filter.
    """
    clauses: List[ColumnElement] = []
    if query.status is not None:
        clauses.append(User.status == query.status)
    if query.phone:
        clauses.append(User.phone.contains(query.phone, autoescape=True))
    if query.user_name:
        clauses.append(User.user_name.contains(query.user_name, autoescape=True))
    return clauses


class SQLAlchemyUserRepository(SQLAlchemyRepository[User], UserRepository):
    """User repository implementation using SQLAlchemy."""

    def get_by_id(self, id: int) -> Optional[User]:
        stmt = select(User).options(selectinload(User.role)).where(User.id == id)
        return self.db.scalars(stmt).first()

    def get_with_filters(self, query: ListUserQuery) -> Dict[str, Any]:
        """Get users with filtering and pagination.

        Count and page are read in the same transaction so ``total`` always
        describes the row set the page was cut from.
        """
        clauses = build_user_filters(query)
        count_stmt = select(func.count(User.id)).where(*clauses)
        page_stmt = (
            select(User)
            .options(selectinload(User.role))
            .where(*clauses)
            .order_by(User.id.asc())
            .offset(query.skip)
            .limit(query.take)
        )

        with snapshot(self.db) as db:
            total = db.scalar(count_stmt) or 0
            users = db.scalars(page_stmt).all()

        return {"list": list(users), "total": total}
