"""
Type definitions shared by the repository and service layers.

A document model is any Pydantic model with an `id` field. The repository stores that
identity as the collection's `_id` and hands it back as a string, so models do not need
to inherit from a database-specific base class.
"""

from functools import lru_cache
from typing import Any, Generic, Mapping, TypeAlias, TypedDict, TypeVar

from pydantic import BaseModel, ConfigDict, create_model

# Fields assigned by the database, never accepted from callers at creation time.
DATABASE_MANAGED_FIELDS = frozenset({"id", "_id"})

# Type variable for the document model class
DocumentT = TypeVar("DocumentT", bound=BaseModel)

# Passed through to the driver unmodified
Filter: TypeAlias = Mapping[str, Any]


class QueryOptions(TypedDict, total=False):
    """
    Options forwarded as keyword arguments to `find` / `find_one`.
    Not validated here; anything the driver accepts is allowed.
    """
    projection: Mapping[str, Any] | list[str]
    sort: list[tuple[str, int]]
    skip: int
    limit: int


class PaginatedResult(BaseModel, Generic[DocumentT]):
    """
    Page of documents. Not populated by the repository; callers compute the
    pagination fields themselves.
    """
    data: list[DocumentT]
    current_page: int
    total_pages: int
    shown_results: int


def ensure_document_model(model: type[BaseModel]) -> type[BaseModel]:
    """
    Check that `model` satisfies the document contract (a Pydantic model with an `id` field).

    Raises:
        TypeError: If `model` is not a Pydantic model class or has no `id` field.
    """
    if not (isinstance(model, type) and issubclass(model, BaseModel)):
        raise TypeError(f"{model!r} is not a Pydantic model class")
    if "id" not in model.model_fields:
        raise TypeError(f"{model.__name__} has no 'id' field and cannot be used as a document model")
    return model


@lru_cache(maxsize=None)
def create_dto(model: type[BaseModel]) -> type[BaseModel]:
    """
    Build the creation DTO for a document model: the same fields without the
    database-managed ones.

    Example:
        class User(BaseModel):
            id: str | None = None
            username: str

        UserCreate = create_dto(User)   # fields: username
    """
    ensure_document_model(model)
    fields = {
        name: (info.annotation, info)
        for name, info in model.model_fields.items()
        if name not in DATABASE_MANAGED_FIELDS
    }
    return create_model(
        f"{model.__name__}CreateDTO",
        __config__=ConfigDict(extra="forbid"),
        **fields,
    )


def strip_managed_fields(data: Mapping[str, Any]) -> dict[str, Any]:
    """Return a shallow copy of `data` without database-managed keys."""
    return {k: v for k, v in data.items() if k not in DATABASE_MANAGED_FIELDS}


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
