"""
Custom exceptions for the repository and service layers.

Two hierarchies live here and they never mix:

- `AppError` and its subclasses describe failures inside the backend. They carry no
  HTTP semantics and are not meant to reach the end user directly.
- `HTTPError` and its subclasses are what the service layer raises for API responses.
  Each one carries a status code and renders a stable JSON payload.
"""

from typing import Iterable

# =================================================================================================================
# Internal (application-level) errors
# =================================================================================================================


class AppError(Exception):
    """
    Base exception for backend failures.

    - message: text for logs (not shown to clients)
    - fields: optional list of document fields related to the error (e.g. ['email'])
    """

    default_message = "Internal application error"

    def __init__(self, message: str | None = None, *, fields: Iterable[str] | None = None):
        self.message = message or self.default_message
        self.fields = list(fields) if fields else None
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.fields:
            return f"{self.message} (fields: {', '.join(self.fields)})"
        return self.message


class DatabaseError(AppError):
    """Internal database error. Services translate it into an InternalServerError."""

    default_message = "Internal database error"


class DuplicateKeyError(AppError):
    """MongoDB duplicate key (code 11000). Services translate it into a ConflictError."""

    default_message = "Duplicate key"


# =================================================================================================================
# HTTP-facing errors
# =================================================================================================================


class HTTPError(Exception):
    """
    Base exception for errors that end up in an API response.

    - message: human-friendly message (safe to show to clients)
    - status_code: HTTP status that should accompany this error
    - error_code: canonical short code (e.g. 'conflict', 'not_found') used by clients
    - fields: optional list of field names related to the error
    """

    def __init__(self, message: str, status_code: int, *, error_code: str | None = None,
                 fields: Iterable[str] | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.fields = list(fields) if fields else None

    def __str__(self) -> str:
        return f"{self.status_code}: {self.message}"

    def to_payload(self) -> dict:
        """
        Return a JSON-serializable dict suitable for HTTP responses.
        Standard shape:
            {
                "detail": "Conflict",
                "code": "conflict",            # optional canonical code
                "fields": ["email"],           # optional list for client usage
            }
        """
        payload = {"detail": self.message}
        if self.error_code:
            payload["code"] = self.error_code
        if self.fields:
            payload["fields"] = list(self.fields)
        return payload


class InternalServerError(HTTPError):
    def __init__(self):
        super().__init__("Internal server error", 500, error_code="internal_error")


class ValidationError(HTTPError):
    def __init__(self, field: str):
        super().__init__(f"Validation error on field {field}", 400, error_code="validation_error", fields=[field])
        self.field = field


class UnauthorizedError(HTTPError):
    def __init__(self):
        super().__init__("Unauthorized", 401, error_code="unauthorized")


class ForbiddenError(HTTPError):
    def __init__(self):
        super().__init__("Forbidden", 403, error_code="forbidden")


class NotFoundError(HTTPError):
    # Declared for request handlers; the service layer returns None instead of raising it.
    def __init__(self, target: str):
        super().__init__(f"{target} not found", 404, error_code="not_found")
        self.target = target


class ConflictError(HTTPError):
    def __init__(self):
        super().__init__("Conflict", 409, error_code="conflict")


__all__ = [
    "AppError",
    "DatabaseError",
    "DuplicateKeyError",
    "HTTPError",
    "InternalServerError",
    "ValidationError",
    "UnauthorizedError",
    "ForbiddenError",
    "NotFoundError",
    "ConflictError",
]
