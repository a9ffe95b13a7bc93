"""Create/update flows and the user service facade used by the HTTP layer."""

from __future__ import annotations

from dataclasses import dataclass

from loguru import logger

from user_manager.core.errors import (
    INTERNAL_ERROR_MESSAGE,
    UserNotFoundError,
    UserValidationError,
)
from user_manager.core.models.user import UserInput
from user_manager.core.services.user.gateway import UserGateway
from user_manager.core.services.user.validation import FieldViolation, validate
from user_manager.entities.core.user.entity import User


@dataclass(frozen=True)
class Created:
    record: User


@dataclass(frozen=True)
class Updated:
    user_id: int


@dataclass(frozen=True)
class Rejected:
    violation: FieldViolation

    @property
    def message(self) -> str:
        return self.violation.message


@dataclass(frozen=True)
class NotFound:
    user_id: int


@dataclass(frozen=True)
class Failed:
    error: str = INTERNAL_ERROR_MESSAGE


CreateOutcome = Created | Rejected | Failed
UpdateOutcome = Updated | Rejected | NotFound | Failed


def create_user(user_input: UserInput, gateway: UserGateway) -> CreateOutcome:
    """Validate ``user_input`` and store it as a new user."""
    try:
        params = validate(user_input)
    except UserValidationError as exc:
        logger.info("Validation Failed on: {}", exc.message)
        return Rejected(exc.violation)

    try:
        record = gateway.create_user(params)
    except Exception:
        logger.exception("Failed to create user")
        return Failed()

    logger.bind(user_id=record.id).info("User created with name: {}", record.first_name)
    return Created(record)


def update_user(user_id: int, user_input: UserInput, gateway: UserGateway) -> UpdateOutcome:
    """Validate ``user_input`` and apply it to the user with ``user_id``.

    A store that reports zero affected rows yields :class:`NotFound`.
    """
    try:
        params = validate(user_input)
    except UserValidationError as exc:
        logger.info("Validation Failed on: {}", exc.message)
        return Rejected(exc.violation)

    try:
        affected = gateway.update_user(user_id, params)
    except Exception:
        logger.bind(user_id=user_id).exception("Failed to update user")
        return Failed()

    if affected == 0:
        logger.bind(user_id=user_id).info("No user to update")
        return NotFound(user_id)

    logger.bind(user_id=user_id).info("User updated")
    return Updated(user_id)


class UserService:
    """User operations on top of a gateway.

    Create and update return outcomes; list, get and delete raise
    :class:`UserManagerError` subclasses.
    """

    def __init__(self, gateway: UserGateway) -> None:
        self._gateway = gateway

    def list_users(self) -> list[User]:
        users = self._gateway.list_users()
        logger.debug("Retrieved {} users", len(users))
        return users

    def get_user(self, user_id: int) -> User:
        user = self._gateway.get_user(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    def create_user(self, user_input: UserInput) -> CreateOutcome:
        return create_user(user_input, self._gateway)

    def update_user(self, user_id: int, user_input: UserInput) -> UpdateOutcome:
        return update_user(user_id, user_input, self._gateway)

    def delete_user(self, user_id: int) -> None:
        if not self._gateway.delete_user(user_id):
            raise UserNotFoundError(user_id)
        logger.bind(user_id=user_id).info("User deleted")
