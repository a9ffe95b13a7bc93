"""User API router with CRUD operations."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, status

from user_manager.api.http.deps import get_user_service
from user_manager.core.errors import UserManagerError, UserNotFoundError, UserValidationError
from user_manager.core.models.user import INT32_MAX, UserInput
from user_manager.core.services.user import (
    Failed,
    NotFound,
    Rejected,
    UserService,
)
from user_manager.core.services.user.user_service import CreateOutcome, UpdateOutcome
from user_manager.entities.core.user import User

router = APIRouter(prefix="/users", tags=["users"])

UserId = Annotated[int, Path(ge=1, le=INT32_MAX, description="User id")]


def _raise_for_outcome(outcome: CreateOutcome | UpdateOutcome) -> None:
    if isinstance(outcome, Rejected):
        raise UserValidationError(outcome.violation)
    if isinstance(outcome, NotFound):
        raise UserNotFoundError(outcome.user_id)
    if isinstance(outcome, Failed):
        raise UserManagerError(outcome.error)


@router.get("", response_model=list[User])
def list_users(service: UserService = Depends(get_user_service)) -> list[User]:
    """Retrieve a list of all users."""
    return service.list_users()


@router.post("", response_model=User, status_code=status.HTTP_201_CREATED)
def create_user(
    user: UserInput,
    service: UserService = Depends(get_user_service),
) -> User:
    """Create a new user."""
    outcome = service.create_user(user)
    _raise_for_outcome(outcome)
    return outcome.record


@router.get("/{user_id}", response_model=User)
def get_user(
    user_id: UserId,
    service: UserService = Depends(get_user_service),
) -> User:
    """Retrieve a single user."""
    return service.get_user(user_id)


@router.patch("/{user_id}")
def update_user(
    user_id: UserId,
    user: UserInput,
    service: UserService = Depends(get_user_service),
) -> dict[str, str]:
    """Update an existing user."""
    outcome = service.update_user(user_id, user)
    _raise_for_outcome(outcome)
    return {"message": f"User updated with id: {user_id}"}


@router.delete("/{user_id}")
def delete_user(
    user_id: UserId,
    service: UserService = Depends(get_user_service),
) -> dict[str, str]:
    """Delete an existing user."""
    service.delete_user(user_id)
    return {"message": f"User deleted with id: {user_id}"}
