"""Database engine and session factory used across the application."""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from loguru import logger
from sqlalchemy import StaticPool, text
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel, create_engine

from user_manager.runtime.config.config_data import DatabaseConfig
from user_manager.runtime.context import get_config

APPLICATION_NAME = "user_manager"


def engine_options(db_config: DatabaseConfig) -> dict[str, Any]:
    """Keyword arguments for ``create_engine`` suited to the configured backend."""
    options: dict[str, Any] = {"pool_pre_ping": True, "echo": False}

    if db_config.is_sqlite:
        # Sessions are used from FastAPI's threadpool
        options["connect_args"] = {"check_same_thread": False, "timeout": 20}
        if db_config.is_memory:
            # One shared connection, otherwise every session sees an empty database
            options["poolclass"] = StaticPool
        return options

    options.update(
        pool_size=db_config.pool_size,
        max_overflow=db_config.max_overflow,
        pool_timeout=db_config.pool_timeout,
        pool_recycle=db_config.pool_recycle,
    )
    if db_config.backend == "postgresql":
        options["connect_args"] = {
            "application_name": APPLICATION_NAME,
            "connect_timeout": 30,
        }
    return options


class DbSessionService:
    """Owns the engine for the user store and hands out sessions."""

    def __init__(self, database_config: DatabaseConfig | None = None):
        db_config = database_config or get_config().database
        self._config = db_config
        self._engine = create_engine(db_config.connection_string, **engine_options(db_config))

        logger.bind(
            backend=db_config.backend,
            pool_size=None if db_config.is_sqlite else db_config.pool_size,
        ).info("Database engine initialized")

    @property
    def backend(self) -> str:
        return self._config.backend

    def get_session(self) -> Session:
        """Return a new SQLModel session bound to the shared engine."""
        # Records stay readable after commit without another round trip
        return Session(self._engine, expire_on_commit=False)

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """Yield a session that commits on success and rolls back on error."""
        db = self.get_session()
        try:
            yield db
            db.commit()
        except Exception as e:
            db.rollback()
            logger.bind(error_type=type(e).__name__).error(
                "Database transaction failed: {}", e
            )
            raise
        finally:
            db.close()

    def create_all(self) -> None:
        """Create the users table if it does not exist."""
        from user_manager.entities.core.user import UserTable

        SQLModel.metadata.create_all(self._engine, tables=[UserTable.__table__])
        logger.info("Ensured table {} exists", UserTable.__tablename__)

    def health_check(self) -> bool:
        """Return True when the database answers a trivial query."""
        try:
            with self._engine.connect() as connection:
                connection.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            logger.bind(error_type=type(e).__name__).error(
                "Database health check failed: {}", e
            )
            return False
        return True

    def dispose(self) -> None:
        """Close all pooled connections."""
        self._engine.dispose()
        logger.info("Database connections closed")
