"""
Database configuration settings.

Builds the async SQLAlchemy URL for the folder and session tables.
PostgreSQL via asyncpg is the default; POSTGRES_URL overrides the whole
DSN (e.g. sqlite+aiosqlite for local runs), in which case the pool
options are left to SQLAlchemy.

Dependencies: pydantic, pydantic_settings
System role: Database connection configuration for ORM
"""

from typing import Any

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from therapy_planner.configs.base import BaseSettings


class DatabaseSettings(BaseSettings):
    """Folder/session store connection configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="POSTGRES_",
        case_sensitive=False,
        extra="ignore",
    )

    url: str | None = Field(default=None, description="Full async DSN, overrides the fields below")

    host: str = Field(default="localhost", description="PostgreSQL host")
    port: int = Field(default=5432, description="PostgreSQL port")
    user: str = Field(default="postgres", description="PostgreSQL user")
    password: str = Field(default="postgres", description="PostgreSQL password")
    db: str = Field(default="therapyplanner", description="PostgreSQL database name")
    ssl: bool = Field(default=False, description="Require TLS on asyncpg connections")

    # Every concurrent session write holds its own connection, so
    # pool_size + max_overflow should cover SCHEDULING_MAX_CONCURRENCY.
    pool_size: int = Field(default=10, ge=1, description="Connection pool size")
    max_overflow: int = Field(default=20, ge=0, description="Maximum overflow connections")
    pool_timeout: int = Field(default=30, ge=1, description="Connection pool timeout in seconds")
    echo_sql: bool = Field(default=False, description="Echo SQL statements to logs")

    @property
    def async_database_url(self) -> str:
        """
        Construct the async connection URL.

        Returns:
            str: POSTGRES_URL if set, otherwise a postgresql+asyncpg URL
        """
        if self.url:
            return self.url
        query = "?ssl=require" if self.ssl else ""
        return (
            f"postgresql+asyncpg://{self.user}:{self.password}"
            f"@{self.host}:{self.port}/{self.db}{query}"
        )

    @property
    def is_sqlite(self) -> bool:
        return self.async_database_url.startswith("sqlite")

    def engine_options(self) -> dict[str, Any]:
        """Keyword arguments for create_async_engine()."""
        options: dict[str, Any] = {"echo": self.echo_sql, "pool_pre_ping": True}
        if not self.is_sqlite:
            options.update(
                pool_size=self.pool_size,
                max_overflow=self.max_overflow,
                pool_timeout=self.pool_timeout,
            )
        return options
