"""
Base service class.

Services sit between request handlers and repositories. `BaseService` mirrors the
repository contract one-to-one and only adds error translation:

    DuplicateKeyError   -> ConflictError (409)
    anything else       -> InternalServerError (500)

None and empty results pass through untouched; turning "not found" into a 404 is the
caller's job (see exceptions.NotFoundError).
"""

from typing import Any, Generic, Mapping

from pydantic import BaseModel

from doclayer.exceptions.mapper import service_error_handler
from doclayer.models.types import DocumentT, Filter, QueryOptions
from doclayer.repositories.base_repository import RepositoryProtocol


class BaseService(Generic[DocumentT]):

    def __init__(self, repository: RepositoryProtocol[DocumentT]):
        self.repository = repository

    @property
    def service_name(self) -> str:
        return type(self).__name__

    async def create(self, data: BaseModel | Mapping[str, Any]) -> DocumentT | None:
        async with service_error_handler(self.service_name, "create"):
            return await self.repository.create(data)

    async def find_one(self, filter: Filter, options: QueryOptions | None = None) -> DocumentT | None:
        async with service_error_handler(self.service_name, "find_one"):
            return await self.repository.find_one(filter, options)

    async def find_by_id(self, id: str) -> DocumentT | None:
        async with service_error_handler(self.service_name, "find_by_id"):
            return await self.repository.find_by_id(id)

    async def find_all(self, filter: Filter | None = None, options: QueryOptions | None = None) -> list[DocumentT]:
        async with service_error_handler(self.service_name, "find_all"):
            return await self.repository.find_all(filter, options)

    async def update(self, id: str, data: BaseModel | Mapping[str, Any]) -> DocumentT | None:
        async with service_error_handler(self.service_name, "update"):
            return await self.repository.update(id, data)

    async def delete(self, id: str) -> bool:
        async with service_error_handler(self.service_name, "delete"):
            return await self.repository.delete(id)
