"""Entity store grouping the repositories that share one database session."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import TypeVar

from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from .projects import ProjectRepository
from .tasks import TaskRepository
from .users import UserRepository

ModelT = TypeVar("ModelT", bound=SQLModel)


class EntityStore:
    """Unit of work over users, projects and tasks.

    Writes performed inside :meth:`transaction` become visible together on
    commit, or not at all.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self.users = UserRepository(session)
        self.projects = ProjectRepository(session)
        self.tasks = TaskRepository(session)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator["EntityStore"]:
        """Commit the enclosed writes, rolling back if anything raises."""
        try:
            yield self
        except Exception:
            await self._session.rollback()
            raise
        await self._session.commit()

    async def refresh(self, instance: ModelT) -> ModelT:
        await self._session.refresh(instance)
        return instance


__all__ = ["EntityStore"]
