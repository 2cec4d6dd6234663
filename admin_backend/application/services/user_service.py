"""User service — business logic for user administration."""

import structlog

from admin_backend.core.exceptions import EntityNotFoundException, PreconditionException
from admin_backend.domain.models.role import DEFAULT_ROLE_NAME
from admin_backend.domain.models.user import User
from admin_backend.domain.repositories.role_repository import RoleRepository
from admin_backend.domain.repositories.user_repository import UserRepository
from admin_backend.domain.schemas.user import ListUserQuery, UserCreate, UserPage, UserRead, UserUpdate

logger = structlog.get_logger(__name__)


def _get_or_404(repo: UserRepository, user_id: int) -> User:
    user = repo.get_by_id(user_id)
    if user is None:
        raise EntityNotFoundException(f"User {user_id} not found")
    return user


def list_users(repo: UserRepository, query: ListUserQuery) -> UserPage:
    """Get one page of users matching the query, with the total match count."""
    result = repo.get_with_filters(query)
    return UserPage(
        items=[UserRead.model_validate(u) for u in result["list"]],
        total=result["total"],
    )


def create_user(repo: UserRepository, role_repo: RoleRepository, body: UserCreate) -> UserRead:
    """Create a user linked to the default owner role.

    Raises PreconditionException, without inserting anything, when the owner
    role has not been seeded.
    """
    owner = role_repo.get_by_name(DEFAULT_ROLE_NAME)
    if owner is None:
        raise PreconditionException(
            f'Default role "{DEFAULT_ROLE_NAME}" not found. Please seed the database.'
        )

    user = repo.create(
        {
            "phone": body.phone,
            "user_name": body.username,
            "status": body.status,
            "role_id": owner.id,
        }
    )
    logger.info("User created", user_id=user.id, role=owner.name)
    return UserRead.model_validate(user)


def get_user(repo: UserRepository, user_id: int) -> UserRead:
    return UserRead.model_validate(_get_or_404(repo, user_id))


def update_user(repo: UserRepository, user_id: int, body: UserUpdate) -> UserRead:
    """Apply the fields present in the body to an existing user."""
    user = _get_or_404(repo, user_id)
    changes = body.model_dump(exclude_unset=True)
    # phone and status are NOT NULL; an explicit null leaves them untouched
    for field in ("phone", "status"):
        if field in changes and changes[field] is None:
            del changes[field]
    if "username" in changes:
        changes["user_name"] = changes.pop("username")
    user = repo.update(user, changes)
    logger.info("User updated", user_id=user_id, fields=sorted(changes))
    return UserRead.model_validate(user)


def delete_user(repo: UserRepository, user_id: int) -> UserRead:
    user = _get_or_404(repo, user_id)
    deleted = UserRead.model_validate(user)
    repo.delete(user_id)
    logger.info("User deleted", user_id=user_id)
    return deleted
