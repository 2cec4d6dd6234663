"""Role lookup model — maps to the 'roles' table."""

from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from admin_backend.infrastructure.database import Base

DEFAULT_ROLE_NAME = "owner"


class Role(Base):
    __tablename__ = "roles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(50), unique=True, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    users = relationship("User", back_populates="role")

    def __repr__(self):
        return f"<Role {self.name}>"
