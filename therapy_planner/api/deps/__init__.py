"""Dependency injection for FastAPI routes."""

from .dependencies import (
    ServiceCache,
    get_activation_service,
    get_folder_service,
    get_record_store,
    get_schedule_service,
    get_service_cache,
    get_settings_dependency,
)

__all__ = [
    "ServiceCache",
    "get_activation_service",
    "get_folder_service",
    "get_record_store",
    "get_schedule_service",
    "get_service_cache",
    "get_settings_dependency",
]
