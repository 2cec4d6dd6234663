"""Create the database tables and the default roles.

Usage: DATABASE_URL=... python scripts/seed_roles.py [role ...]
"""

import sys

from admin_backend.config import get_settings
from admin_backend.core.logging import configure_logging
from admin_backend.domain.models.role import DEFAULT_ROLE_NAME
from admin_backend.domain.models.user import User  # noqa: F401  (table registration)
from admin_backend.infrastructure.database import Base, build_engine, build_session_factory
from admin_backend.infrastructure.seed import seed_roles


def main(argv: list[str]) -> None:
    settings = get_settings()
    configure_logging(settings)
    engine = build_engine(settings.DATABASE_URL)
    Base.metadata.create_all(bind=engine)

    db = build_session_factory(engine)()
    try:
        seed_roles(db, argv or [DEFAULT_ROLE_NAME])
    finally:
        db.close()
        engine.dispose()


if __name__ == "__main__":
    main(sys.argv[1:])
