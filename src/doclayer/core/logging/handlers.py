# src/doclayer/core/logging/handlers.py
"""
Handler factories for logging.dictConfig.

Each function returns a handler configuration dict. They are pure functions of the
settings object, which keeps builder.py short and makes them easy to unit test.

| Name            | Destination  | Levels      | Active when                        |
| --------------- | ------------ | ----------- | ---------------------------------- |
| `console`       | stderr       | >= LOG_LEVEL| always                             |
| `file`          | app.log      | >= LOG_LEVEL| LOG_TO_STDOUT=false and LOG_DIR    |
| `error_file`    | errors.log   | ERROR+      | LOG_TO_STDOUT=false and LOG_DIR    |
| `error_console` | stderr       | ERROR+      | otherwise                          |
"""

from pathlib import Path

from doclayer.config.settings import Settings

_FILTERS = ["request_id", "redact"]


def _formatter_name(settings: Settings) -> str:
    # The builder's "formatters" mapping defines both "json" and "standard".
    return "json" if settings.LOG_FORMAT == "json" else "standard"


def get_console_handler(settings: Settings) -> dict:
    return {
        "class": "logging.StreamHandler",
        "formatter": _formatter_name(settings),
        "level": settings.LOG_LEVEL,
        "filters": list(_FILTERS),
    }


def get_file_handler(settings: Settings) -> dict:
    return {
        "class": "logging.handlers.RotatingFileHandler",
        "formatter": _formatter_name(settings),
        "level": settings.LOG_LEVEL,
        "filename": str(Path(settings.LOG_DIR) / "app.log"),
        "maxBytes": settings.LOG_MAX_BYTES,
        "backupCount": settings.LOG_BACKUP_COUNT,
        "encoding": "utf-8",
        "filters": list(_FILTERS),
    }


def get_error_file_handler(settings: Settings) -> dict:
    # Error files stay structured regardless of LOG_FORMAT, for easier ingestion.
    return {
        "class": "logging.handlers.RotatingFileHandler",
        "formatter": "json",
        "level": "ERROR",
        "filename": str(Path(settings.LOG_DIR) / "errors.log"),
        "maxBytes": settings.LOG_MAX_BYTES,
        "backupCount": settings.LOG_BACKUP_COUNT,
        "encoding": "utf-8",
        "filters": list(_FILTERS),
    }


def get_error_console_handler(settings: Settings) -> dict:
    return {
        "class": "logging.StreamHandler",
        "formatter": "json",
        "level": "ERROR",
        "filters": list(_FILTERS),
    }
