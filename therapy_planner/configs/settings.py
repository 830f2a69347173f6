"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides dependency injection factory for FastAPI.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from therapy_planner.configs.base import BaseSettings
from therapy_planner.configs.database import DatabaseSettings
from therapy_planner.configs.scheduling import SchedulingSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    # Aggregated settings
    database: DatabaseSettings = DatabaseSettings()
    scheduling: SchedulingSettings = SchedulingSettings()


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns Settings instance, cached for dependency injection.
    Environment variables loaded once at startup.

    Returns:
        Settings: Application settings instance

    Usage:
        from therapy_planner.configs import get_settings
        settings = get_settings()
        batch_size = settings.scheduling.batch_size
    """
    return Settings()
