"""Core services exports."""

# Database Service
from .database.db_session import DbSessionService

# User Services
from .user.gateway import UserGateway
from .user.user_service import UserService

__all__ = [
    # Database Service
    "DbSessionService",
    # User Services
    "UserGateway",
    "UserService",
]
