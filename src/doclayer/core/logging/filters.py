# src/doclayer/core/logging/filters.py
"""
Logging filters

- RequestIdFilter: stamps every LogRecord with the current request id (or "-").
- RedactFilter: masks sensitive attributes passed through `extra={...}`.

The request id lives in a `contextvars.ContextVar`, which follows the logical flow
across `await` boundaries and asyncio tasks (unlike threading.local()). The HTTP
middleware sets it at the start of each request; repository and service logs emitted
while handling that request then carry the same id.

Both filters return True: they annotate records and never drop them.
"""

import logging
from logging import LogRecord
import contextvars

# Default None means "no request id set" for this context.
_request_id_ctx: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id", default=None
)


def set_request_id(request_id: str | None):
    """
    Set the request id in the current context and return the token to allow reset.
    """
    return _request_id_ctx.set(request_id)


def reset_request_id(token):
    """
    Reset the contextvar to the value saved in `token` (returned by set_request_id()).
    """
    _request_id_ctx.reset(token)


def get_request_id() -> str | None:
    return _request_id_ctx.get()


class RequestIdFilter(logging.Filter):
    """
    Guarantees every LogRecord has a `request_id` attribute so format strings using
    %(request_id)s never raise.

    Precedence: explicit `extra={"request_id": ...}`, then the contextvar, then "-".
    """

    def filter(self, record: LogRecord) -> bool:
        record.request_id = (
            getattr(record, "request_id", None) or get_request_id() or "-"
        )
        return True


class RedactFilter(logging.Filter):
    """
    Replaces the value of sensitive record attributes with a fixed marker.

    Connection strings count as sensitive: a DB_URL usually embeds credentials.
    """

    SENSITIVE = {
        "password", "secret", "token", "access_token", "refresh_token",
        "authorization", "db_url", "connection_string",
    }
    MASK = "***REDACTED***"

    def filter(self, record: LogRecord) -> bool:
        for key in list(record.__dict__.keys()):
            if key.lower() in self.SENSITIVE:
                record.__dict__[key] = self.MASK
        return True
