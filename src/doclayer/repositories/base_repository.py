"""
Base repository class providing common MongoDB operations.

`BaseRepository` wraps the CRUD calls of one collection for one document model. It is
generic over the model type, and the collection handle is injected (usually taken from
an open `DatabaseConnection`), so tests can hand it an in-memory collection.

Every public method runs its driver call inside `repository_error_handler`, which means
callers only ever see two exceptions:
    - DuplicateKeyError: the write violated a unique index (MongoDB code 11000)
    - DatabaseError: anything else the driver or the model validation raised

Absence is not an error: lookups return None and `delete` returns False.

With a `projection` option, `find_one` / `find_all` return documents built without
validation; fields left out by the projection are missing or at their defaults.
"""

from typing import Any, Generic, Mapping, Protocol

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorCollection
from pydantic import BaseModel
from pymongo import ReturnDocument

from doclayer.exceptions.mapper import repository_error_handler
from doclayer.models.types import (
    DocumentT,
    Filter,
    QueryOptions,
    ensure_document_model,
    strip_managed_fields,
)


class RepositoryProtocol(Protocol[DocumentT]):
    """
    Public contract of a repository. Services depend on this, not on BaseRepository,
    so any object with these coroutines (a test double, a cached variant, ...) fits.
    """

    async def create(self, data: BaseModel | Mapping[str, Any]) -> DocumentT | None: ...

    async def find_by_id(self, id: str) -> DocumentT | None: ...

    async def find_one(self, filter: Filter, options: QueryOptions | None = None) -> DocumentT | None: ...

    async def find_all(self, filter: Filter | None = None, options: QueryOptions | None = None) -> list[DocumentT]: ...

    async def update(self, id: str, data: BaseModel | Mapping[str, Any]) -> DocumentT | None: ...

    async def delete(self, id: str) -> bool: ...


def to_object_id(id: Any) -> Any:
    """
    Convert a string identity into an ObjectId when it is one.

    Anything else is returned unchanged, so a malformed id simply matches nothing
    instead of failing the query.
    """
    if isinstance(id, str) and ObjectId.is_valid(id):
        return ObjectId(id)
    return id


def id_filter(id: Any) -> dict[str, Any]:
    """
    Query document selecting one document by identity.

    A 24-hex string matches both an ObjectId `_id` and the same string stored as `_id`,
    in a single round trip.
    """
    object_id = to_object_id(id)
    if object_id is id:
        return {"_id": id}
    return {"_id": {"$in": [object_id, id]}}


class BaseRepository(Generic[DocumentT]):
    """
    Generic base repository providing common CRUD operations.

    Type Parameters:
        DocumentT: The Pydantic document model this repository manages.
    """

    def __init__(self, model: type[DocumentT], collection: AsyncIOMotorCollection):
        """
        Initialize the repository.

        Args:
            model: The document model class (not an instance), e.g. User, not User().
            collection: The collection this repository reads and writes.
        """
        self.model = ensure_document_model(model)
        self.collection = collection

    @property
    def collection_name(self) -> str:
        return self.collection.name

    # =================================================================================================================
    # Conversions
    # =================================================================================================================

    def _to_model(self, raw: Mapping[str, Any] | None, *, partial: bool = False) -> DocumentT | None:
        if raw is None:
            return None
        doc = dict(raw)
        if "_id" in doc:
            doc["id"] = str(doc.pop("_id"))
        if partial:
            # Projected documents lack fields by request; build them without validation
            return self.model.model_construct(**doc)
        return self.model.model_validate(doc)

    @staticmethod
    def _is_projected(options: QueryOptions | None) -> bool:
        return bool(options and options.get("projection"))

    @staticmethod
    def _dump(data: BaseModel | Mapping[str, Any], *, exclude_unset: bool = False) -> dict[str, Any]:
        if isinstance(data, BaseModel):
            data = data.model_dump(exclude_unset=exclude_unset)
        return strip_managed_fields(data)

    @classmethod
    def _build_update(cls, data: BaseModel | Mapping[str, Any]) -> dict[str, Any] | None:
        """
        Turn a patch into an update document.

        - Operator documents ({"$inc": {...}}) are passed through as-is.
        - Plain field mappings are wrapped in $set, without managed fields.
        - An empty patch returns None (nothing to write).
        """
        if isinstance(data, Mapping) and any(str(k).startswith("$") for k in data):
            return dict(data)

        fields = cls._dump(data, exclude_unset=True)
        if not fields:
            return None
        return {"$set": fields}

    # =================================================================================================================
    # Create
    # =================================================================================================================

    async def create(self, data: BaseModel | Mapping[str, Any]) -> DocumentT | None:
        """
        Validate and insert a new document.

        Args:
            data: The creation payload (a CreateDTO instance or a plain mapping).
                  Database-managed fields (id/_id) are dropped if present.

        Returns:
            The stored document, with the identity assigned by the database.

        Raises:
            DuplicateKeyError: If the document violates a unique index.
            DatabaseError: On validation or any other driver failure.
        """
        async with repository_error_handler(self.collection_name, "create"):
            # Validation runs inside the handler so a rejected payload surfaces as DatabaseError
            document = self.model.model_validate(self._dump(data))
            payload = self._dump(document)

            result = await self.collection.insert_one(payload)
            return document.model_copy(update={"id": str(result.inserted_id)})

    # =================================================================================================================
    # Read
    # =================================================================================================================

    async def find_by_id(self, id: str) -> DocumentT | None:
        """
        Get a document by its identity, or None if it does not exist.
        """
        async with repository_error_handler(self.collection_name, "find_by_id"):
            raw = await self.collection.find_one(id_filter(id))
            return self._to_model(raw)

    async def find_one(self, filter: Filter, options: QueryOptions | None = None) -> DocumentT | None:
        """
        Get the first document matching `filter`, or None.

        Args:
            filter: Query document, passed to the driver unmodified.
            options: Extra keyword arguments for `find_one` (projection, sort, skip, ...).
        """
        async with repository_error_handler(self.collection_name, "find_one"):
            raw = await self.collection.find_one(filter, **(options or {}))
            return self._to_model(raw, partial=self._is_projected(options))

    async def find_all(self, filter: Filter | None = None, options: QueryOptions | None = None) -> list[DocumentT]:
        """
        Get every document matching `filter` (all documents by default).

        Returns:
            A list of documents, empty if nothing matches. Order is unspecified unless
            `options` contains a sort.
        """
        async with repository_error_handler(self.collection_name, "find_all"):
            cursor = self.collection.find(filter or {}, **(options or {}))
            raws = await cursor.to_list(length=None)
            partial = self._is_projected(options)
            return [self._to_model(raw, partial=partial) for raw in raws]

    # =================================================================================================================
    # Update
    # =================================================================================================================

    async def update(self, id: str, data: BaseModel | Mapping[str, Any]) -> DocumentT | None:
        """
        Apply a partial update and return the document as it is after the update.

        Returns:
            The updated document, or None if no document has this id.

        Raises:
            DuplicateKeyError: If the update violates a unique index.
            DatabaseError: On any other driver failure.
        """
        async with repository_error_handler(self.collection_name, "update"):
            query = id_filter(id)
            update = self._build_update(data)
            if update is None:
                raw = await self.collection.find_one(query)
            else:
                raw = await self.collection.find_one_and_update(
                    query, update, return_document=ReturnDocument.AFTER
                )
            return self._to_model(raw)

    # =================================================================================================================
    # Delete
    # =================================================================================================================

    async def delete(self, id: str) -> bool:
        """
        Delete a document by identity.

        Returns:
            True if a document existed and was removed, False otherwise.
        """
        async with repository_error_handler(self.collection_name, "delete"):
            raw = await self.collection.find_one_and_delete(id_filter(id))
            return raw is not None
