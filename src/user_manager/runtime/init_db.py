"""Database initialization script."""

from user_manager.core.services.database.db_session import DbSessionService
from user_manager.runtime.context import get_config


def init_db() -> None:
    """Create all database tables for the configured database."""
    db_service = DbSessionService(get_config().database)
    try:
        db_service.create_all()
    finally:
        db_service.dispose()


if __name__ == "__main__":
    init_db()
