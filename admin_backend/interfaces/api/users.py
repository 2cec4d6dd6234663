"""User API routes — create, list, fetch, update and delete users."""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Path, status

from admin_backend.core.envelope import EnvelopeRoute
from admin_backend.interfaces.deps import get_role_repository, get_user_repository
from admin_backend.domain.repositories.role_repository import RoleRepository
from admin_backend.domain.repositories.user_repository import UserRepository
from admin_backend.domain.schemas.user import ListUserQuery, UserCreate, UserPage, UserRead, UserUpdate
from admin_backend.application.services import user_service

router = APIRouter(prefix="/user", tags=["User"], route_class=EnvelopeRoute)

UserId = Annotated[int, Path(ge=1, description="User ID")]


@router.post(
    "/create",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new user",
)
def create_user(
    body: UserCreate,
    repo: UserRepository = Depends(get_user_repository),
    role_repo: RoleRepository = Depends(get_role_repository),
):
    return user_service.create_user(repo, role_repo, body)


@router.post("/list", response_model=UserPage, summary="List users")
def list_users(
    query: Optional[ListUserQuery] = None,
    repo: UserRepository = Depends(get_user_repository),
):
    """List users with filtering and pagination."""
    return user_service.list_users(repo, query or ListUserQuery())


@router.get("/{user_id}", response_model=UserRead, summary="Get a single user")
def get_user(
    user_id: UserId,
    repo: UserRepository = Depends(get_user_repository),
):
    return user_service.get_user(repo, user_id)


@router.patch("/{user_id}", response_model=UserRead, summary="Update a user")
def update_user(
    body: UserUpdate,
    user_id: UserId,
    repo: UserRepository = Depends(get_user_repository),
):
    return user_service.update_user(repo, user_id, body)


@router.delete("/{user_id}", response_model=UserRead, summary="Delete a user")
def delete_user(
    user_id: UserId,
    repo: UserRepository = Depends(get_user_repository),
):
    return user_service.delete_user(repo, user_id)
