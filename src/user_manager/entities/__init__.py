"""Entities module with hybrid entity-centric structure.

Each entity has its own package containing:
- entity.py: Domain model returned to callers
- table.py: Database persistence model
- repository.py: Data access layer
"""

from .core.user import User, UserRepository, UserStatus, UserTable

__all__ = [
    "User",
    "UserRepository",
    "UserStatus",
    "UserTable",
]
