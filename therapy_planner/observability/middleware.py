"""
FastAPI middleware for request logging.

Logs every request with timing and, for folder routes, the folder and
student it concerns so a failed bulk creation or repair can be traced
back to its caller.

Dependencies: fastapi, starlette
System role: Request/response observability
"""

import logging
import re
import time
from typing import Any

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

_FOLDER_PATH = re.compile(r"/folders/(?P<folder_id>[0-9a-fA-F-]{36})(?:/(?P<action>[\w-]+))?/?$")


def request_context(request: Request) -> dict[str, Any]:
    """
    Extract folder/student identifiers from a request.

    Path parameters are not resolved until routing runs, so the folder id
    is read from the URL and the student id from the query string.

    Args:
        request: Incoming request

    Returns:
        dict: folder_id, folder_action and student_id when present
    """
    context: dict[str, Any] = {}
    match = _FOLDER_PATH.search(request.url.path)
    if match:
        context["folder_id"] = match.group("folder_id")
        if match.group("action"):
            context["folder_action"] = match.group("action")

    student_id = request.query_params.get("student_id")
    if student_id:
        context["student_id"] = student_id
    return context


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log HTTP requests with timing and folder context."""

    async def dispatch(self, request: Request, call_next):
        start_time = time.perf_counter()
        method = request.method
        path = request.url.path
        context = {"method": method, "path": path, **request_context(request)}

        logger.info(f"{method} {path}", extra=context)

        try:
            response: Response = await call_next(request)
        except Exception as e:
            logger.exception(
                f"{method} {path} - Exception",
                extra={
                    **context,
                    "process_time_ms": round((time.perf_counter() - start_time) * 1000, 2),
                    "error_type": type(e).__name__,
                },
            )
            raise

        process_time_ms = round((time.perf_counter() - start_time) * 1000, 2)
        level = logging.WARNING if response.status_code >= 500 else logging.INFO
        logger.log(
            level,
            f"{method} {path} - {response.status_code} ({process_time_ms}ms)",
            extra={
                **context,
                "status_code": response.status_code,
                "process_time_ms": process_time_ms,
            },
        )
        return response
