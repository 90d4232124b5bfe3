# src/doclayer/api/v1/error_handlers.py
"""
FastAPI exception handlers that render service-layer errors as HTTP responses.

- Services raise doclayer.exceptions.HTTPError subclasses (ConflictError, InternalServerError, ...).
  Request handlers may raise NotFoundError / ValidationError / ... themselves.
- An AppError that escaped without going through a service is rendered as a plain 500,
  never with its internal message.

Register them in the app factory:
    register_exception_handlers(app)
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from doclayer.exceptions.base import AppError, HTTPError, InternalServerError

logger = logging.getLogger(__name__)


async def http_error_handler(request: Request, exc: HTTPError) -> JSONResponse:
    """
    Payload: exc.to_payload() -> {"detail": "...", "code": "...", "fields": [...]}
    """
    if exc.status_code >= 500:
        logger.warning("%s for %s %s", type(exc).__name__, request.method, request.url.path)
    else:
        logger.info("%s for %s %s: fields=%s", type(exc).__name__, request.method, request.url.path, exc.fields)
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """
    Fallback for internal errors that were not translated by a service.
    """
    logger.error("Untranslated %s for %s %s: %s", type(exc).__name__, request.method, request.url.path, exc)
    error = InternalServerError()
    return JSONResponse(status_code=error.status_code, content=error.to_payload())


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(HTTPError, http_error_handler)
    app.add_exception_handler(AppError, app_error_handler)
