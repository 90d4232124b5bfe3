"""
Repository layer initialization module.

Usage:
    from doclayer.repositories import BaseRepository, RepositoryProtocol
"""

from .base_repository import BaseRepository, RepositoryProtocol, id_filter, to_object_id

__all__ = [
    "BaseRepository",
    "RepositoryProtocol",
    "id_filter",
    "to_object_id",
]
