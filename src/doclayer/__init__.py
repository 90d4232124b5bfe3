"""
doclayer: generic MongoDB repository and service layers.

    from doclayer.database import DatabaseConnection
    from doclayer.repositories import BaseRepository
    from doclayer.services import BaseService
"""

__version__ = "0.1.0"
