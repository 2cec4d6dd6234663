"""Unit tests for the user service workflows."""

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from admin_backend.application.services import user_service
from admin_backend.core.exceptions import EntityNotFoundException, PreconditionException
from admin_backend.domain.models.role import Role
from admin_backend.domain.models.user import User
from admin_backend.domain.schemas.user import ListUserQuery, UserCreate, UserUpdate
from admin_backend.infrastructure.repositories.role_repository import SQLAlchemyRoleRepository
from admin_backend.infrastructure.repositories.user_repository import SQLAlchemyUserRepository


@pytest.fixture
def repo(db_session):
    return SQLAlchemyUserRepository(db_session, User)


@pytest.fixture
def role_repo(db_session):
    return SQLAlchemyRoleRepository(db_session, Role)


def _user_count(db_session) -> int:
    return db_session.scalar(select(func.count(User.id)))


class TestCreateUser:
    """Tests for the create-user workflow."""

    def test_links_user_to_owner_role(self, repo, role_repo, owner_role):
        """Should create a user referencing the seeded owner role."""
        user = user_service.create_user(repo, role_repo, UserCreate(phone="13800138000"))
        assert user.id is not None
        assert user.role_id == owner_role.id
        assert user.role.name == "owner"

    def test_persists_every_declared_field(self, repo, role_repo, owner_role, db_session):
        """Should store username and status along with the phone."""
        created = user_service.create_user(
            repo, role_repo, UserCreate(phone="+86 139 0013 9000", username="john.doe", status=0)
        )
        row = db_session.get(User, created.id)
        assert row.phone == "13900139000"
        assert row.user_name == "john.doe"
        assert row.status == 0

    def test_missing_owner_role_fails_without_insert(self, repo, role_repo, db_session):
        """Should raise PreconditionException and insert nothing when owner is not seeded."""
        with pytest.raises(PreconditionException) as exc_info:
            user_service.create_user(repo, role_repo, UserCreate(phone="13800138000"))

        assert 'Default role "owner" not found' in exc_info.value.message
        assert exc_info.value.status_code == 500
        assert _user_count(db_session) == 0

    def test_duplicate_phone_surfaces_integrity_error(self, repo, role_repo, owner_role, db_session):
        """Should let the unique constraint violation propagate and keep the session usable."""
        user_service.create_user(repo, role_repo, UserCreate(phone="13800138000"))
        with pytest.raises(IntegrityError):
            user_service.create_user(repo, role_repo, UserCreate(phone="13800138000"))
        assert _user_count(db_session) == 1


class TestListUsers:
    def test_returns_page_and_total(self, repo, make_user):
        """Should wrap repository rows into a UserPage."""
        for i in range(3):
            make_user(f"1380013800{i}")

        page = user_service.list_users(repo, ListUserQuery(pageSize=2))
        assert page.total == 3
        assert len(page.items) == 2
        assert page.items[0].role.name == "owner"


class TestGetUpdateDelete:
    def test_get_user(self, repo, make_user):
        """Should return the user projection."""
        user = make_user("13800138000", "alice")
        assert user_service.get_user(repo, user.id).user_name == "alice"

    @pytest.mark.parametrize("action", ["get", "update", "delete"])
    def test_missing_user_is_not_found(self, repo, owner_role, action):
        """Should raise EntityNotFoundException for an unknown id."""
        with pytest.raises(EntityNotFoundException) as exc_info:
            if action == "get":
                user_service.get_user(repo, 42)
            elif action == "update":
                user_service.update_user(repo, 42, UserUpdate(status=0))
            else:
                user_service.delete_user(repo, 42)
        assert exc_info.value.status_code == 404
        assert exc_info.value.message == "User 42 not found"

    def test_update_applies_only_sent_fields(self, repo, make_user):
        """Should change the sent fields and leave the others alone."""
        user = make_user("13800138000", "alice", 1)
        updated = user_service.update_user(repo, user.id, UserUpdate.model_validate({"username": "alicia"}))
        assert updated.user_name == "alicia"
        assert updated.status == 1
        assert updated.phone == "13800138000"

    def test_update_ignores_null_for_required_columns(self, repo, make_user):
        """Should keep phone and status when the body sends null for them."""
        user = make_user("13800138000", "alice", 1)
        body = UserUpdate.model_validate({"phone": None, "status": None, "username": None})
        updated = user_service.update_user(repo, user.id, body)
        assert updated.phone == "13800138000"
        assert updated.status == 1
        assert updated.user_name is None

    def test_delete_removes_row(self, repo, make_user, db_session):
        """Should delete the user and return its last projection."""
        user = make_user("13800138000", "alice")
        deleted = user_service.delete_user(repo, user.id)
        assert deleted.id == user.id
        assert _user_count(db_session) == 0
