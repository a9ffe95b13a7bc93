"""User database table model."""

from sqlmodel import Field

from user_manager.entities.core._base import EntityTable


class UserTable(EntityTable, table=True):
    """Database persistence model for users.

    This represents how the User entity is stored in the database.
    """

    __tablename__ = "users"

    first_name: str = Field(max_length=50)
    last_name: str = Field(max_length=50)
    email: str = Field(max_length=255)
    phone: str | None = Field(default=None, max_length=16)
    age: int | None = None
    status: str | None = Field(default=None, max_length=16)
