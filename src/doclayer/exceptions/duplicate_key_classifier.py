import logging
from enum import IntEnum

from pymongo.errors import DuplicateKeyError as PyMongoDuplicateKeyError
from pymongo.errors import BulkWriteError, PyMongoError

logger = logging.getLogger(__name__)

# =================================================================================================================
# MongoDB error code mapping
# =================================================================================================================

# https://www.mongodb.com/docs/manual/reference/error-codes/
class MongoErrorCodes(IntEnum):
    DUPLICATE_KEY = 11000
    # Legacy duplicate key code still reported by some server versions on updates
    DUPLICATE_KEY_LEGACY = 11001


DUPLICATE_KEY_CODES = {MongoErrorCodes.DUPLICATE_KEY, MongoErrorCodes.DUPLICATE_KEY_LEGACY}


# =================================================================================================================
# Duplicate key classifiers
# =================================================================================================================

def _error_code(exc: BaseException) -> int | None:
    # Bulk writes report the code of each failed write in details["writeErrors"]
    if isinstance(exc, BulkWriteError):
        write_errors = (exc.details or {}).get("writeErrors") or []
        if write_errors:
            return write_errors[0].get("code")

    code = getattr(exc, "code", None)
    return code if isinstance(code, int) else None


def is_duplicate_key_error(exc: BaseException) -> bool:
    """
    Return True when a driver exception reports a unique-constraint violation.
    """
    if isinstance(exc, PyMongoDuplicateKeyError):
        return True
    if not isinstance(exc, PyMongoError):
        return False
    return _error_code(exc) in DUPLICATE_KEY_CODES


def extract_duplicate_fields(exc: BaseException) -> list[str] | None:
    """
    Best-effort extraction of the offending key fields from a duplicate key error.

    The server includes `keyPattern` (e.g. {"email": 1}) in the error details; older
    servers only put the index name in the message, which we leave alone.
    """
    details = getattr(exc, "details", None)
    if not isinstance(details, dict):
        return None

    key_pattern = details.get("keyPattern")
    if isinstance(key_pattern, dict) and key_pattern:
        return sorted(key_pattern.keys())

    logger.debug("Duplicate key error without keyPattern", extra={"details_keys": sorted(details.keys())})
    return None
