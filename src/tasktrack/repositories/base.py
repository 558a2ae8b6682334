"""Base repository implementation supporting asynchronous SQLModel sessions."""

from __future__ import annotations

from typing import Any, Generic, Mapping, TypeVar

from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from ..errors import NotFoundError

ModelType = TypeVar("ModelType", bound=SQLModel)


class BaseRepository(Generic[ModelType]):
    """Provide shared persistence helpers for repositories.

    Repositories only flush; committing is the caller's responsibility so that
    multi-step writes stay inside one transaction.
    """

    def __init__(self, session: AsyncSession, model_type: type[ModelType]) -> None:
        self._session = session
        self._model_type = model_type

    @property
    def session(self) -> AsyncSession:
        """Return the session associated with the repository."""
        return self._session

    @property
    def entity_name(self) -> str:
        return self._model_type.__name__

    async def get(self, entity_id: int) -> ModelType | None:
        """Retrieve a model instance by its primary key."""
        return await self._session.get(self._model_type, entity_id)

    async def add(self, instance: ModelType) -> ModelType:
        """Add and flush a new entity instance, assigning its primary key."""
        self._session.add(instance)
        await self._session.flush()
        return instance

    async def update(self, entity_id: int, changes: Mapping[str, Any]) -> ModelType:
        """Merge ``changes`` into the stored entity; absent fields are kept."""
        instance = await self.get(entity_id)
        if instance is None:
            raise NotFoundError(f"{self.entity_name} {entity_id} does not exist.")
        for field_name, value in changes.items():
            setattr(instance, field_name, value)
        self._session.add(instance)
        await self._session.flush()
        return instance

    async def delete(self, instance: ModelType) -> None:
        """Delete an entity instance and flush the change."""
        await self._session.delete(instance)
        await self._session.flush()

    async def delete_by_id(self, entity_id: int) -> bool:
        """Delete the entity with ``entity_id``, returning ``True`` iff it existed."""
        instance = await self.get(entity_id)
        if instance is None:
            return False
        await self.delete(instance)
        return True
