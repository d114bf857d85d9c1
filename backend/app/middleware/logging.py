"""
Noteful Backend: Request Logging Middleware
===========================================

What:  One access log line per HTTP request: method, path, status, duration,
       and the folder or note the request resolved to.
How:   Times the downstream call and picks the log level from the status.
When:  Runs inside RequestIDMiddleware, so the request ID is already set.

What we log vs what we DON'T log:
    Log:       method, path, status, duration, resource, request ID
    Don't log: request bodies (note contents are user data)

Example:
    PATCH /notes/2 204 3.1ms Note#2 [a1b2c3d4]
    POST /folders 400 1.2ms - [e5f6a7b8]
"""

import logging
import time
from typing import Optional, Tuple

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.middleware.request_id import request_id_var

logger = logging.getLogger("noteful.access")

# Probes hit these every few seconds; logging them drowns the access log
UNLOGGED_PATHS = frozenset({"/health"})


def level_for_status(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


def describe_resource(resource: Optional[Tuple[str, int]]) -> str:
    """("Note", 2) -> "Note#2"; "-" when the request never resolved a row."""
    if not resource:
        return "-"
    kind, row_id = resource
    return f"{kind}#{row_id}"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Access log for the folder and note routes.

    The routers record the row a request touched in `request.state.resource`
    (set by resolve_folder/resolve_note, or after an insert), which ends up
    on the log line and in the `resource` extra field.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in UNLOGGED_PATHS:
            return await call_next(request)

        # Created here so the routers write into the same scope-backed state
        state = request.state
        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        rid = request_id_var.get("")
        resource = describe_resource(getattr(state, "resource", None))
        logger.log(
            level_for_status(response.status_code),
            "%s %s %d %.1fms %s [%s]",
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
            resource,
            rid,
            extra={
                "request_id": rid,
                "resource": resource,
                "status": response.status_code,
                "duration_ms": round(duration_ms, 2),
                "client_ip": request.client.host if request.client else "unknown",
            },
        )
        return response
