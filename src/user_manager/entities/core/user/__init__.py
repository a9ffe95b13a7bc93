"""User entity module.

- User: Domain entity returned by the data access layer
- UserTable: Database persistence model
- UserRepository: Data access layer implementing the user gateway
"""

from .entity import User, UserStatus
from .repository import UserRepository
from .table import UserTable

__all__ = ["User", "UserRepository", "UserStatus", "UserTable"]
