"""User domain entity."""

from enum import Enum

from pydantic import Field

from user_manager.entities.core._base import Entity


class UserStatus(str, Enum):
    """Account states accepted by the data store."""

    ACTIVE = "active"
    INACTIVE = "inactive"


class User(Entity):
    """User entity representing a stored person.

    Serializes with the camelCase keys used on the wire
    (``firstName``, ``lastName``, ...).
    """

    first_name: str = Field(description="User's first name")
    last_name: str = Field(description="User's last name")
    email: str = Field(description="User's email address")
    phone: str | None = Field(default=None, description="User's phone number, E.164")
    age: int | None = Field(default=None, gt=0, description="User's age")
    status: UserStatus | None = Field(default=None, description="Account status")
