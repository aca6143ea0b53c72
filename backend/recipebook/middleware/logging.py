"""
RecipeBook Backend — Request Logging Middleware
=================================================

What:  One access log line per HTTP request on the `recipebook.access` logger:

           POST /add_recipe 201 12.4ms rid=3f9a1c2e uid=Kq7... ip=10.0.0.4

       `uid` is the verified caller on bearer-protected routes (set by
       get_auth_context) and `-` everywhere else. Level follows the status
       class: 5xx → ERROR, 4xx → WARNING, otherwise INFO.

Never logged: request bodies (passwords, session tokens), query strings
(emails) and the Authorization header. Health checks and API docs are skipped.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from recipebook.middleware.request_id import request_id_var

logger = logging.getLogger("recipebook.access")

QUIET_PATHS = frozenset({"/health", "/docs", "/redoc", "/openapi.json"})


def level_for_status(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in QUIET_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        logger.log(
            level_for_status(response.status_code),
            "%s %s %d %.1fms rid=%s uid=%s ip=%s",
            request.method,
            path,
            response.status_code,
            duration_ms,
            request_id_var.get() or "-",
            getattr(request.state, "auth_uid", None) or "-",
            request.client.host if request.client else "-",
        )
        return response
