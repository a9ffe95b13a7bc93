"""Pydantic models for parsing the config.yaml configuration file.

This module contains Pydantic models that correspond to the structure of config.yaml.
These models handle validation and type conversion of the YAML configuration data.
"""

from __future__ import annotations

from typing import Literal

from loguru import logger
from pydantic import BaseModel, Field, computed_field, model_validator
from sqlalchemy.engine import URL, make_url


class CORSConfig(BaseModel):
    """CORS configuration for the application."""

    origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:3001"]
    )
    allow_credentials: bool = True
    allow_methods: list[str] = Field(
        default=["GET", "POST", "PATCH", "DELETE", "OPTIONS"]
    )
    allow_headers: list[str] = Field(default=["*"])


class LoggingConfig(BaseModel):
    """Logging configuration model."""

    level: str = Field(default="INFO", description="Logging level")
    format: Literal["json", "plain"] = Field(default="plain", description="Log format")
    file: str | None = Field(default=None, description="Log file path")
    max_size_mb: int = Field(default=10, description="Maximum log file size in MB")
    backup_count: int = Field(
        default=5, description="Number of backup log files to keep"
    )


class DatabaseConfig(BaseModel):
    """Database configuration model.

    Either ``url`` is given, or the connection string is assembled from the
    individual host/port/user/password/name settings.
    """

    url: str | None = Field(
        default="sqlite:///./users.db",
        description="Database connection URL; takes precedence over the parts below",
    )
    host: str | None = Field(default=None, description="Database host")
    port: int = Field(default=5432, description="Database port")
    user: str | None = Field(default=None, description="Database username")
    password: str | None = Field(default=None, description="Database password")
    name: str | None = Field(default=None, description="Database name")
    driver: str = Field(
        default="postgresql+psycopg2",
        description="SQLAlchemy driver used when assembling the URL from parts",
    )
    pool_size: int = Field(default=20, description="Connection pool size")
    max_overflow: int = Field(default=10, description="Maximum pool overflow")
    pool_timeout: int = Field(default=30, description="Pool timeout in seconds")
    pool_recycle: int = Field(default=1800, description="Pool recycle time in seconds")
    create_tables: bool = Field(
        default=True, description="Create missing tables on application startup"
    )

    @model_validator(mode="after")
    def _check_connection_parts(self) -> DatabaseConfig:
        if self.url:
            return self
        missing = [
            name
            for name in ("host", "user", "password", "name")
            if not getattr(self, name)
        ]
        if self.port <= 0:
            missing.append("port")
        if missing:
            raise ValueError(
                f"Invalid database configuration; missing or invalid: {', '.join(missing)}"
            )
        return self

    @computed_field
    @property
    def connection_string(self) -> str:
        """Construct the database connection string."""
        if self.url:
            return self.url

        url = URL.create(
            self.driver,
            username=self.user,
            password=self.password,
            host=self.host,
            port=self.port,
            database=self.name,
        )
        # Render manually to avoid SQLAlchemy's password masking
        return url.render_as_string(hide_password=False)

    @property
    def backend(self) -> str:
        """Name of the database backend, e.g. ``sqlite`` or ``postgresql``."""
        return make_url(self.connection_string).get_backend_name()

    @property
    def is_sqlite(self) -> bool:
        return self.backend == "sqlite"

    @property
    def is_memory(self) -> bool:
        """True for in-memory SQLite databases."""
        if not self.is_sqlite:
            return False
        database = make_url(self.connection_string).database
        return database in (None, "", ":memory:")


class AppConfig(BaseModel):
    """Application configuration model."""

    environment: Literal["development", "production", "test"] = Field(
        default="development", description="Application environment"
    )
    host: str = Field(default="localhost", description="Application host")
    port: int = Field(default=8080, gt=0, description="Application port")
    cors: CORSConfig = Field(
        default_factory=CORSConfig, description="CORS configuration"
    )

    @property
    def base_url(self) -> str:
        """Construct the base URL from host and port."""
        scheme = "https" if self.environment == "production" else "http"
        return f"{scheme}://{self.host}:{self.port}"

    @property
    def docs_enabled(self) -> bool:
        return self.environment != "production"


class ConfigData(BaseModel):
    """Root configuration model that matches the config.yaml structure."""

    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
    database: DatabaseConfig = Field(
        default_factory=DatabaseConfig, description="Database configuration"
    )
    app: AppConfig = Field(
        default_factory=AppConfig, description="Application configuration"
    )

    @model_validator(mode="after")
    def _warn_on_production_sqlite(self) -> ConfigData:
        if self.app.environment == "production" and self.database.is_sqlite:
            logger.warning(
                "SQLite is not recommended for production use. "
                "Consider PostgreSQL for better performance and reliability."
            )
        return self
