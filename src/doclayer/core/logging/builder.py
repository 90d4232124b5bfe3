# src/doclayer/core/logging/builder.py
"""
Logging builder: build and apply a dictConfig from Settings, optionally moving the
actual log IO to a background QueueListener.

Configuration knobs (on the Settings object):
 - LOG_LEVEL, LOG_FORMAT, LOG_TO_STDOUT, LOG_DIR, LOG_MAX_BYTES, LOG_BACKUP_COUNT, ENV
 - ENABLE_DRIVER_LOGGING: let pymongo/motor DEBUG logs through (they may contain queries)
 - LOG_USE_QUEUE: enqueue records in the producer, write them in a listener thread
 - LOG_QUEUE_MAX_SIZE: > 0 bounds the queue, 0 means unbounded
 - LOG_QUEUE_BLOCKING: with a bounded queue, block producers instead of dropping records

Settings objects are read with getattr() defaults for the optional knobs so tests can
pass small duck-typed stand-ins.
"""

from __future__ import annotations

from pathlib import Path
import logging
import logging.config
import queue as _queue
import threading
from logging.handlers import QueueHandler, QueueListener
from typing import Optional

from doclayer.utils.logging import get_project_name

from .formatters import JsonFormatter, ColorFormatter
from .filters import RequestIdFilter, RedactFilter
from .handlers import (
    get_console_handler,
    get_file_handler,
    get_error_file_handler,
    get_error_console_handler,
)

# Running listener and its queue, so stop_queue_logging() can flush them at shutdown
_QUEUE_LISTENER: Optional[QueueListener] = None
_QUEUE: Optional[_queue.Queue] = None

_DROPPED_LOGS_COUNT = 0
_DROPPED_LOGS_LOCK = threading.Lock()

DRIVER_LOGGERS = ("pymongo", "motor")


class NonBlockingQueueHandler(QueueHandler):
    """
    QueueHandler that drops records (and counts them) when a bounded queue is full,
    instead of blocking the producing coroutine's thread.
    """

    def enqueue(self, record: logging.LogRecord) -> None:
        global _DROPPED_LOGS_COUNT
        try:
            self.queue.put_nowait(record)
        except _queue.Full:
            with _DROPPED_LOGS_LOCK:
                _DROPPED_LOGS_COUNT += 1


def get_queue_stats() -> dict:
    """Diagnostics about queue usage."""
    with _DROPPED_LOGS_LOCK:
        return {"dropped_logs": _DROPPED_LOGS_COUNT, "queue_present": _QUEUE is not None}


def make_dict_config(settings) -> dict:
    """
    Build the dictConfig mapping for the given settings.

    Loggers configured: root, uvicorn.error, uvicorn.access and the MongoDB driver loggers.
    """
    formatters = {
        "standard": {
            "()": ColorFormatter if settings.LOG_FORMAT == "text" else logging.Formatter,
            "format": "%(asctime)s | %(levelname)s | %(name)s | %(request_id)s | %(message)s",
        },
        "json": {
            "()": JsonFormatter,
            "env": settings.ENV,
            "service": get_project_name(default="doclayer"),
        },
    }

    filters = {
        "request_id": {"()": RequestIdFilter},
        "redact": {"()": RedactFilter},
    }

    handlers: dict[str, dict] = {"console": get_console_handler(settings)}
    if (not settings.LOG_TO_STDOUT) and settings.LOG_DIR:
        handlers["file"] = get_file_handler(settings)
        handlers["error_file"] = get_error_file_handler(settings)
    else:
        handlers["error_console"] = get_error_console_handler(settings)

    driver_level = "DEBUG" if getattr(settings, "ENABLE_DRIVER_LOGGING", False) else "WARNING"

    loggers = {
        "": {
            "handlers": list(handlers.keys()),
            "level": settings.LOG_LEVEL,
            "propagate": True,
        },
        "uvicorn.error": {
            "level": settings.LOG_LEVEL,
            "handlers": list(handlers.keys()),
            "propagate": False,
        },
        "uvicorn.access": {
            "level": "INFO",
            "handlers": ["console"],
            "propagate": False,
        },
    }
    for name in DRIVER_LOGGERS:
        loggers[name] = {"level": driver_level, "handlers": ["console"], "propagate": False}

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": formatters,
        "filters": filters,
        "handlers": handlers,
        "loggers": loggers,
    }


def setup_logging(settings) -> None:
    """
    Apply the logging configuration and, if LOG_USE_QUEUE is set, switch the root
    logger to queue-backed logging.

    In queue mode the real handlers are detached from every logger and run by a
    QueueListener thread; the root logger gets a single QueueHandler. Producer-side
    filters (request id, redaction) are attached to that QueueHandler so they run in
    the producer's context, where the request id contextvar is visible.
    """
    global _QUEUE_LISTENER, _QUEUE

    # A previous queue listener would keep the old handlers alive
    stop_queue_logging()

    if (not settings.LOG_TO_STDOUT) and settings.LOG_DIR:
        Path(settings.LOG_DIR).mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(make_dict_config(settings))

    root_logger = logging.getLogger()
    root_logger.addFilter(RequestIdFilter())

    if not getattr(settings, "LOG_USE_QUEUE", False):
        return

    real_handlers = list(root_logger.handlers)
    if not real_handlers:
        return

    to_move = set(real_handlers)
    for logger_obj in list(logging.Logger.manager.loggerDict.values()):
        if isinstance(logger_obj, logging.Logger):
            for h in list(logger_obj.handlers):
                if h in to_move:
                    logger_obj.removeHandler(h)
    for h in real_handlers:
        root_logger.removeHandler(h)

    max_size = getattr(settings, "LOG_QUEUE_MAX_SIZE", 0) or 0
    blocking = bool(getattr(settings, "LOG_QUEUE_BLOCKING", False))
    log_queue: _queue.Queue = _queue.Queue(max_size if max_size > 0 else 0)

    handler_cls = NonBlockingQueueHandler if (max_size > 0 and not blocking) else QueueHandler
    queue_handler = handler_cls(log_queue)
    queue_handler.addFilter(RequestIdFilter())
    queue_handler.addFilter(RedactFilter())

    listener = QueueListener(log_queue, *real_handlers, respect_handler_level=True)
    listener.start()
    root_logger.addHandler(queue_handler)

    _QUEUE_LISTENER = listener
    _QUEUE = log_queue


def stop_queue_logging() -> None:
    """
    Flush and stop the QueueListener (if any). Call at shutdown so queued records are written.
    """
    global _QUEUE_LISTENER, _QUEUE
    listener = _QUEUE_LISTENER
    if listener is None:
        return
    try:
        listener.stop()
    finally:
        _QUEUE_LISTENER = None
        _QUEUE = None
