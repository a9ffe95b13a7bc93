"""Error taxonomy for the user service.

Every error carries the HTTP status it maps to; the exception handlers in
``user_manager.api.http.error_handlers`` turn them into JSON responses.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from user_manager.core.services.user.validation import FieldViolation

INTERNAL_ERROR_MESSAGE = "Internal Server Error"


class UserManagerError(Exception):
    """Base class for all service errors."""

    http_status: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    @property
    def public_message(self) -> str:
        """Message that may be returned to the client."""
        return self.message


class UserValidationError(UserManagerError):
    """Client-supplied user data violated a field rule."""

    http_status = 400

    def __init__(self, violation: FieldViolation) -> None:
        super().__init__(violation.message)
        self.violation = violation

    @property
    def public_message(self) -> str:
        return f"Validation Failed on: {self.message}"


class UserNotFoundError(UserManagerError):
    """No user exists with the requested id."""

    http_status = 404

    def __init__(self, user_id: int) -> None:
        super().__init__(f"User with id {user_id} not found")
        self.user_id = user_id


class PersistenceError(UserManagerError):
    """The data store failed or refused an operation.

    The underlying cause is kept for logging but never sent to the client.
    """

    http_status = 500

    @property
    def public_message(self) -> str:
        return INTERNAL_ERROR_MESSAGE
