"""
Map low-level faults to the next layer's exceptions.

- `repository_error_handler`: driver exceptions -> DuplicateKeyError / DatabaseError
- `service_error_handler`: repository exceptions -> ConflictError / InternalServerError

Both are async context managers so the guarded block is awaited inside the `try`:
faults raised before the first suspension and faults raised while waiting on the
driver are intercepted the same way.
"""

import logging
import time
from contextlib import asynccontextmanager

from .base import ConflictError, DatabaseError, DuplicateKeyError, InternalServerError
from .duplicate_key_classifier import extract_duplicate_fields, is_duplicate_key_error

logger = logging.getLogger(__name__)


# -----------------------
# Repository layer
# -----------------------

def map_driver_error(exc: Exception) -> DuplicateKeyError | DatabaseError:
    """
    Translate a driver exception into one of the two repository-level errors.
    """
    if isinstance(exc, DuplicateKeyError):
        return exc
    if is_duplicate_key_error(exc):
        return DuplicateKeyError(fields=extract_duplicate_fields(exc))
    return DatabaseError()


@asynccontextmanager
async def repository_error_handler(collection_name: str, operation: str):
    """
    Usage:
        async with repository_error_handler(self.collection_name, "create"):
            ... driver calls ...
    Logs the failure with collection and operation and raises a mapped app-level exception.
    """
    start = time.perf_counter()
    try:
        yield
    except Exception as exc:
        mapped = map_driver_error(exc)
        context = {"collection": collection_name, "operation": operation}

        if isinstance(mapped, DuplicateKeyError):
            # Expected client-level scenario (ends up as a 409), no stack trace needed
            logger.info(
                "Duplicate key in %s.%s: %s",
                collection_name, operation, exc,
                extra={**context, "fields": mapped.fields},
            )
        else:
            logger.exception(
                "Error in %s.%s: %s",
                collection_name, operation, exc,
                extra=context,
            )
        if mapped is exc:
            raise
        raise mapped from exc
    else:
        logger.debug(
            "repo.%s.success",
            operation,
            extra={
                "collection": collection_name,
                "operation": operation,
                "duration_ms": int((time.perf_counter() - start) * 1000),
            },
        )


# -----------------------
# Service layer
# -----------------------

def map_app_error(exc: Exception) -> ConflictError | InternalServerError:
    """
    Translate a repository exception into an HTTP-facing error.
    Only DuplicateKeyError gets a dedicated mapping; everything else is a 500.
    """
    if isinstance(exc, DuplicateKeyError):
        return ConflictError()
    return InternalServerError()


@asynccontextmanager
async def service_error_handler(service_name: str, operation: str):
    """
    Usage:
        async with service_error_handler(type(self).__name__, "create"):
            return await self.repository.create(data)
    """
    try:
        yield
    except Exception as exc:
        mapped = map_app_error(exc)
        logger.warning(
            "[%s] Failed operation %s: %s",
            service_name, operation, exc,
            extra={"service": service_name, "operation": operation, "status_code": mapped.status_code},
        )
        raise mapped from exc
