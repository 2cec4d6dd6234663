"""Seed data required before users can be created."""

from typing import Iterable, List

import structlog
from sqlalchemy import select
from sqlalchemy.orm import Session

from admin_backend.domain.models.role import DEFAULT_ROLE_NAME, Role

logger = structlog.get_logger(__name__)


def seed_roles(db: Session, names: Iterable[str] = (DEFAULT_ROLE_NAME,)) -> List[Role]:
    """Insert the named roles that do not exist yet. Safe to run repeatedly."""
    wanted = list(dict.fromkeys(names))
    existing = set(db.scalars(select(Role.name).where(Role.name.in_(wanted))).all())

    created = [Role(name=name) for name in wanted if name not in existing]
    if created:
        db.add_all(created)
        db.commit()
        logger.info("Roles seeded", roles=[role.name for role in created])
    return created
