"""
Database module initialization.
Exports the connection bootstrap for use throughout the application.
"""

from .connection import DatabaseConnection, POOL_OPTIONS, sanitize_mongodb_url

__all__ = [
    "DatabaseConnection",
    "POOL_OPTIONS",
    "sanitize_mongodb_url",
]
