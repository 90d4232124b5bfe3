from fastapi import Request

from doclayer.database.connection import DatabaseConnection


def get_connection(request: Request) -> DatabaseConnection:
    # Opened by the app lifespan (see doclayer.main.create_app)
    return request.app.state.db
