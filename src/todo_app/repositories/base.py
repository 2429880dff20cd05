"""Base repository implementation for Beanie documents."""

from __future__ import annotations

from typing import Generic, TypeVar

from beanie import Document, PydanticObjectId

ModelType = TypeVar("ModelType", bound=Document)


class BaseRepository(Generic[ModelType]):
    """Provide shared persistence helpers for repositories."""

    def __init__(self, model_type: type[ModelType]) -> None:
        self._model_type = model_type

    async def get(self, entity_id: PydanticObjectId) -> ModelType | None:
        """Retrieve a document by its identifier."""
        return await self._model_type.get(entity_id)

    async def add(self, instance: ModelType) -> ModelType:
        """Insert a new document and return it with its generated id."""
        await instance.insert()
        return instance

    async def save(self, instance: ModelType) -> ModelType:
        """Persist the full state of an existing document."""
        await instance.save()
        return instance
