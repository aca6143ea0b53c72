"""
RecipeBook Backend — Request ID Middleware
============================================

What:  Assigns a correlation id to each request and returns it in X-Request-ID.
How:   A client-supplied X-Request-ID is kept when it is a short token of
       letters, digits, '.', '_' or '-'; anything else is replaced by a fresh
       8-character id so it cannot forge or split access log lines.
       The id lives in a ContextVar read by the access logger and the error
       handlers (every error body carries it as `request_id`).
"""

import logging
import re
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
_CLIENT_ID_PATTERN = re.compile(r"^[A-Za-z0-9._-]{1,64}$")

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def resolve_request_id(client_value: str) -> str:
    """Return the client's id when it is safe to log, otherwise a new one."""
    if client_value and _CLIENT_ID_PATTERN.match(client_value):
        return client_value
    if client_value:
        logger.debug("Discarding malformed %s header", REQUEST_ID_HEADER)
    return uuid.uuid4().hex[:8]


class RequestIDMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = resolve_request_id(request.headers.get(REQUEST_ID_HEADER, ""))
        request_id_var.set(rid)

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = rid
        return response
