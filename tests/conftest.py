from __future__ import annotations

from collections.abc import Callable, Generator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import StaticPool
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from admin_backend.config import Settings
from admin_backend.domain.models.role import Role
from admin_backend.domain.models.user import User
from admin_backend.infrastructure.database import Base, build_engine, get_db
from admin_backend.infrastructure.seed import seed_roles
from admin_backend.main import create_app


@pytest.fixture
def engine() -> Generator[Engine, None, None]:
    """In-memory SQLite engine shared by every connection of one test."""
    engine = build_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def db_session(engine: Engine) -> Generator[Session, None, None]:
    session = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def owner_role(db_session: Session) -> Role:
    return seed_roles(db_session)[0]


@pytest.fixture
def make_user(db_session: Session, owner_role: Role) -> Callable[..., User]:
    """Insert a user directly, bypassing the service layer."""

    def _make_user(phone: str, user_name: str | None = None, status: int = 1) -> User:
        user = User(phone=phone, user_name=user_name, status=status, role_id=owner_role.id)
        db_session.add(user)
        db_session.commit()
        return user

    return _make_user


@pytest.fixture
def test_settings() -> Settings:
    return Settings(ENVIRONMENT="test", DATABASE_URL="sqlite://", _env_file=None)


@pytest.fixture
def app(test_settings: Settings, db_session: Session) -> FastAPI:
    app = create_app(test_settings)

    def _override_get_db() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[get_db] = _override_get_db
    return app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)
