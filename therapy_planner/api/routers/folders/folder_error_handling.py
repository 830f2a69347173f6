"""
Folder error handling utilities.

Provides a decorator for consistent error handling across folder-related
API endpoints.
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from fastapi import HTTPException, status
from pydantic import ValidationError

from therapy_planner.core.exceptions import (
    FolderNotFoundError,
    FolderRepairError,
    SchedulePersistenceError,
    ScheduleValidationError,
)
from therapy_planner.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)

# Type for the decorated function
F = TypeVar("F", bound=Callable[..., Any])


def handle_folder_errors(func: F) -> F:
    """
    Decorator to handle folder-related errors and transform them into HTTPExceptions.

    This centralizes:
    - Logging of errors with context (folder_id)
    - Mapping domain exceptions to HTTP status codes
    - Uniform error bodies; persistence failures keep their write counts
    """
    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)

        except HTTPException:
            raise

        except ScheduleValidationError as e:
            logger.warning(
                "Invalid schedule request",
                extra={"field": e.field, "error": e.message}
            )
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=e.message
            )

        except FolderNotFoundError as e:
            logger.warning(
                "Folder not found",
                extra={"folder_id": str(e.folder_id), "error": e.message}
            )
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=e.message
            )

        except FolderRepairError as e:
            logger.warning("Folder cannot be repaired", extra={"error": e.message})
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=e.message
            )

        except SchedulePersistenceError as e:
            log_exception_with_context(logger, "Schedule persistence failed", e)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail={"error": e.message, "details": e.details}
            )

        except ValidationError as e:
            logger.warning("Pydantic validation error", extra={"error": str(e)})
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=e.errors()
            )

        except Exception as e:
            logger.exception(
                "Unexpected failure in folder operation",
                extra={"error": str(e)}
            )
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"An internal error occurred during folder operation: {str(e)}"
            )

    return wrapper  # type: ignore
