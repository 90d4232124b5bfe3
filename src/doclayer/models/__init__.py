r"""
Shared document typing for the repository and service layers.

Example:
    from doclayer.models import DocumentT, create_dto, PaginatedResult
"""

from .types import (
    DATABASE_MANAGED_FIELDS,
    DocumentT,
    Filter,
    QueryOptions,
    PaginatedResult,
    ensure_document_model,
    create_dto,
    strip_managed_fields,
)

__all__ = [
    "DATABASE_MANAGED_FIELDS",
    "DocumentT",
    "Filter",
    "QueryOptions",
    "PaginatedResult",
    "ensure_document_model",
    "create_dto",
    "strip_managed_fields",
]
