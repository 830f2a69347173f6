"""
Dependency injection container.

Factory functions for FastAPI dependencies.

Dependencies: therapy_planner.configs, therapy_planner.application, therapy_planner.boundary
System role: DI container for service injection
"""

from functools import lru_cache

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from therapy_planner.configs import Settings, get_settings
from therapy_planner.boundary.db import (
    FolderRecordStore,
    get_async_db,
    get_async_session_factory,
)
from therapy_planner.application.services import (
    ActivationService,
    FolderService,
    ScheduleService,
)


class ServiceCache:
    """Container for cached service instances."""

    def __init__(self):
        self._session_factory = None
        self._record_store = None

    @property
    def session_factory(self) -> async_sessionmaker:
        """Get cached async session factory."""
        if self._session_factory is None:
            self._session_factory = get_async_session_factory()
        return self._session_factory

    @property
    def record_store(self) -> FolderRecordStore:
        """Get cached folder record store."""
        if self._record_store is None:
            self._record_store = FolderRecordStore(self.session_factory)
        return self._record_store

    def clear(self) -> None:
        """Clear all cached instances."""
        self._session_factory = None
        self._record_store = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


@lru_cache
def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


def get_record_store() -> FolderRecordStore:
    """
    Get folder record store.

    Each store call opens its own short transaction, so the store is shared
    across requests rather than bound to the request session.

    Returns:
        FolderRecordStore: Cached record store
    """
    return get_service_cache().record_store


def get_activation_service(
    store: FolderRecordStore = Depends(get_record_store),
) -> ActivationService:
    """
    Get activation service instance.

    Args:
        store: Folder record store (injected via Depends)

    Returns:
        ActivationService: Activation service instance
    """
    return ActivationService(store)


def get_schedule_service(
    store: FolderRecordStore = Depends(get_record_store),
    activation_service: ActivationService = Depends(get_activation_service),
    settings: Settings = Depends(get_settings_dependency),
) -> ScheduleService:
    """
    Get schedule creation service instance.

    Args:
        store: Folder record store (injected via Depends)
        activation_service: Activation service (injected via Depends)
        settings: Application settings (injected via Depends)

    Returns:
        ScheduleService: Schedule service configured from scheduling settings
    """
    return ScheduleService(
        store=store,
        settings=settings.scheduling,
        activation_service=activation_service,
    )


def get_folder_service(db: AsyncSession = Depends(get_async_db)) -> FolderService:
    """
    Get folder service instance.

    Args:
        db: Async database session (injected via Depends)

    Returns:
        FolderService: Folder service instance
    """
    return FolderService(db=db)
