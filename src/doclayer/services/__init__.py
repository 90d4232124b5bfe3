"""
Service layer.

Usage:
    from doclayer.services import BaseService

    class UserService(BaseService[User]):
        ...

    service = UserService(BaseRepository(User, connection.get_collection("users")))
"""

from .base_service import BaseService

__all__ = ["BaseService"]
