"""Repository for interacting with task persistence models."""

from __future__ import annotations

from dataclasses import dataclass

import sqlalchemy as sa
from sqlalchemy import func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from ..models import STATUS_IN_PROGRESS, Task
from .base import BaseRepository


@dataclass(slots=True)
class TaskCounts:
    total: int
    completed: int
    in_progress: int


class TaskRepository(BaseRepository[Task]):
    """Concrete repository encapsulating ``Task`` persistence operations."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Task)

    async def list_for_owner(self, owner_id: int) -> list[Task]:
        """Return all tasks owned by the given user."""
        result = await self.session.execute(
            select(Task).where(Task.user_id == owner_id).order_by(Task.id)
        )
        return list(result.scalars().all())

    async def list_for_project(self, project_id: int) -> list[Task]:
        """Return all tasks belonging to the given project."""
        result = await self.session.execute(
            select(Task).where(Task.project_id == project_id).order_by(Task.id)
        )
        return list(result.scalars().all())

    async def delete_for_project(self, project_id: int) -> int:
        """Delete every task of ``project_id`` and return how many were removed."""
        result = await self.session.execute(
            sa.delete(Task).where(Task.project_id == project_id)  # type: ignore[arg-type]
        )
        await self.session.flush()
        return int(result.rowcount or 0)

    async def count_for_owner(self, owner_id: int) -> TaskCounts:
        """Return total, completed and in-progress counts for ``owner_id``.

        A task is in progress only when it is not completed and its status is
        exactly ``"in-progress"``.
        """
        completed = sa.case((Task.completed.is_(True), 1), else_=0)  # type: ignore[union-attr]
        in_progress = sa.case(
            (
                sa.and_(
                    Task.completed.is_(False),  # type: ignore[union-attr]
                    Task.status == STATUS_IN_PROGRESS,
                ),
                1,
            ),
            else_=0,
        )
        result = await self.session.execute(
            sa.select(
                func.count(),
                func.coalesce(func.sum(completed), 0),
                func.coalesce(func.sum(in_progress), 0),
            )
            .select_from(Task)
            .where(Task.user_id == owner_id)
        )
        total, completed_count, in_progress_count = result.one()
        return TaskCounts(
            total=int(total),
            completed=int(completed_count),
            in_progress=int(in_progress_count),
        )
