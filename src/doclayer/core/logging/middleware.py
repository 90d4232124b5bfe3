# src/doclayer/core/logging/middleware.py
"""
Request ID middleware for FastAPI / Starlette.

For each request the middleware takes the incoming `X-Request-ID` header (when it looks
like a UUID) or generates a new UUID4, stores it in the request-id contextvar for the
duration of the request, and echoes it back in the response header. Logs written by
repositories and services while handling the request carry the same id.

Register it early:
    app.add_middleware(RequestIDMiddleware)
"""

import uuid
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from .filters import set_request_id, reset_request_id

REQUEST_ID_HEADER = "X-Request-ID"


def _valid_request_id(value: str | None) -> str | None:
    # Only UUIDs are accepted from clients; anything else could inject into log lines.
    if not value:
        return None
    try:
        return str(uuid.UUID(value))
    except ValueError:
        return None


class RequestIDMiddleware(BaseHTTPMiddleware):

    async def dispatch(self, request: Request, call_next):
        rid = _valid_request_id(request.headers.get(REQUEST_ID_HEADER)) or str(uuid.uuid4())
        token = set_request_id(rid)
        try:
            response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = rid
            return response
        finally:
            reset_request_id(token)
