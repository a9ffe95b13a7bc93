"""User repository for data access operations."""

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from user_manager.core.errors import PersistenceError
from user_manager.core.models.user import UserParams
from user_manager.entities.core.user.entity import User, UserStatus
from user_manager.entities.core.user.table import UserTable

# Drivers may raise plain OverflowError for integers they cannot bind
DATABASE_ERRORS = (SQLAlchemyError, OverflowError)


def _check_status(status: str | None) -> str | None:
    if status is None:
        return None
    try:
        return UserStatus(status).value
    except ValueError as e:
        raise PersistenceError(
            f"invalid input value for enum userstatus: {status!r}"
        ) from e


class UserRepository:
    """Data-access layer for users.

    Each mutating call runs in its own transaction: it commits on success and
    rolls back before raising :class:`PersistenceError` on failure.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def list_users(self) -> list[User]:
        try:
            rows = self._session.exec(select(UserTable).order_by(UserTable.id)).all()
        except DATABASE_ERRORS as e:
            self._session.rollback()
            raise PersistenceError("Failed to list users") from e
        return [User.model_validate(row, from_attributes=True) for row in rows]

    def get_user(self, user_id: int) -> User | None:
        try:
            row = self._session.get(UserTable, user_id)
        except DATABASE_ERRORS as e:
            self._session.rollback()
            raise PersistenceError(f"Failed to load user {user_id}") from e
        if row is None:
            return None
        return User.model_validate(row, from_attributes=True)

    def create_user(self, params: UserParams) -> User:
        row = UserTable(
            first_name=params.first_name,
            last_name=params.last_name,
            email=params.email,
            phone=params.phone,
            age=params.age,
            status=_check_status(params.status),
        )
        try:
            self._session.add(row)
            self._session.commit()
            self._session.refresh(row)
        except DATABASE_ERRORS as e:
            self._session.rollback()
            raise PersistenceError("Failed to create user") from e

        logger.debug("Inserted user row {}", row.id)
        return User.model_validate(row, from_attributes=True)

    def update_user(self, user_id: int, params: UserParams) -> int:
        status = _check_status(params.status)
        try:
            row = self._session.get(UserTable, user_id)
            if row is None:
                return 0

            row.first_name = params.first_name
            row.last_name = params.last_name
            row.email = params.email
            row.phone = params.phone
            row.age = params.age
            row.status = status
            self._session.add(row)
            self._session.commit()
        except DATABASE_ERRORS as e:
            self._session.rollback()
            raise PersistenceError(f"Failed to update user {user_id}") from e
        return 1

    def delete_user(self, user_id: int) -> bool:
        try:
            row = self._session.get(UserTable, user_id)
            if row is None:
                return False
            self._session.delete(row)
            self._session.commit()
        except DATABASE_ERRORS as e:
            self._session.rollback()
            raise PersistenceError(f"Failed to delete user {user_id}") from e
        return True
