"""
FastAPI application factory.

Wires the ambient pieces around the repository/service layers:
- logging (dictConfig + request id middleware)
- HTTP error handlers
- database lifecycle: the connection is opened at startup (failing startup if the
  database is unreachable) and closed on shutdown
"""

from contextlib import asynccontextmanager
import logging

from fastapi import Depends, FastAPI

from doclayer.api.v1.error_handlers import register_exception_handlers
from doclayer.config.settings import Settings, get_settings
from doclayer.core.dependencies import get_connection
from doclayer.core.logging import RequestIDMiddleware, setup_logging, stop_queue_logging
from doclayer.database.connection import DatabaseConnection

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None, connection: DatabaseConnection | None = None) -> FastAPI:
    settings = settings or get_settings()
    connection = connection or DatabaseConnection(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(settings)
        logger.info("Starting doclayer", extra={"environment": settings.ENV})

        await connection.connect()
        app.state.db = connection
        try:
            yield
        finally:
            logger.info("Shutting down doclayer")
            await connection.close()
            stop_queue_logging()

    app = FastAPI(title="doclayer", lifespan=lifespan)
    app.add_middleware(RequestIDMiddleware)
    register_exception_handlers(app)

    @app.get("/health", tags=["Health"])
    async def health(db: DatabaseConnection = Depends(get_connection)) -> dict:
        healthy = await db.check_connection()
        return {"status": "ok" if healthy else "degraded", "database": db.get_info()}

    return app
