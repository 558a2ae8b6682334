"""Aggregate completion statistics for a user's projects and tasks."""

from __future__ import annotations

from dataclasses import dataclass

from ..repositories import EntityStore


@dataclass(slots=True)
class StatsResult:
    """Summary counts for one user.

    Tasks that are neither completed nor ``"in-progress"`` (for example
    ``"todo"``) fall into neither bucket, so ``completed_tasks +
    in_progress_tasks`` can be less than ``total_tasks``.
    """

    total_projects: int
    total_tasks: int
    completed_tasks: int
    in_progress_tasks: int


class StatsService:
    """Read-only aggregation over the current store state, recomputed per call."""

    def __init__(self, store: EntityStore) -> None:
        self._store = store

    async def compute_stats(self, user_id: int) -> StatsResult:
        total_projects = await self._store.projects.count_for_owner(user_id)
        counts = await self._store.tasks.count_for_owner(user_id)
        return StatsResult(
            total_projects=total_projects,
            total_tasks=counts.total,
            completed_tasks=counts.completed,
            in_progress_tasks=counts.in_progress,
        )


__all__ = ["StatsResult", "StatsService"]
