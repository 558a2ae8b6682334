"""Repository for interacting with project persistence models."""

from __future__ import annotations

from sqlalchemy import func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from ..models import Project
from .base import BaseRepository
from .tasks import TaskRepository


class ProjectRepository(BaseRepository[Project]):
    """Concrete repository encapsulating ``Project`` persistence operations."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Project)
        self._tasks = TaskRepository(session)

    async def list_for_owner(self, owner_id: int) -> list[Project]:
        """Return the projects owned by ``owner_id`` in creation order."""
        result = await self.session.execute(
            select(Project).where(Project.user_id == owner_id).order_by(Project.id)
        )
        return list(result.scalars().all())

    async def count_for_owner(self, owner_id: int) -> int:
        result = await self.session.execute(
            select(func.count()).select_from(Project).where(Project.user_id == owner_id)
        )
        return int(result.scalar_one())

    async def delete(self, instance: Project) -> None:
        """Delete a project after removing every task that references it.

        The foreign key also cascades, but SQLite does not enforce it unless
        asked to, so dependent tasks are removed explicitly first.
        """
        if instance.id is not None:
            await self._tasks.delete_for_project(instance.id)
        await super().delete(instance)
