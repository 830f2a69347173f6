"""
Database table creation script.

Creates all tables defined in ORM models using SQLAlchemy metadata.

Dependencies: sqlalchemy, therapy_planner.configs
System role: Database schema initialization

Usage:
    python -m therapy_planner.boundary.db.create_tables
"""

import asyncio

from sqlalchemy.ext.asyncio import AsyncEngine

from therapy_planner.boundary.db.base import Base
from therapy_planner.boundary.db.connection import get_async_engine

# Import all models to register them with Base.metadata
from therapy_planner.boundary.db.models.folder_model import SessionFolderModel  # noqa: F401
from therapy_planner.boundary.db.models.session_model import TherapySessionModel  # noqa: F401


async def create_all_tables(engine: AsyncEngine | None = None) -> None:
    """
    Create all database tables from registered ORM models.

    Idempotent: existing tables remain unchanged.

    Args:
        engine: Engine to use (defaults to the configured engine)
    """
    engine = engine or get_async_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    print("All tables created successfully.")


async def drop_all_tables(engine: AsyncEngine | None = None) -> None:
    """
    Drop all database tables and their data.

    WARNING: Irreversible data loss. Only use in development environments.
    """
    engine = engine or get_async_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    print("All tables dropped successfully.")


if __name__ == "__main__":
    asyncio.run(create_all_tables())
