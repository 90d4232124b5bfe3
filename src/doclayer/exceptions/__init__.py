# doclayer/
# │
# ├── exceptions/
# │   ├── __init__.py
# │   ├── base.py                        # AppError / HTTPError hierarchies
# │   ├── duplicate_key_classifier.py    # MongoDB-specific error codes
# │   └── mapper.py                      # driver -> app-level -> HTTP-level translation

from .base import (
    AppError,
    DatabaseError,
    DuplicateKeyError,
    HTTPError,
    InternalServerError,
    ValidationError,
    UnauthorizedError,
    ForbiddenError,
    NotFoundError,
    ConflictError,
)

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
