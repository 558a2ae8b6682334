"""Aggregate statistics endpoint."""

from __future__ import annotations

from fastapi import APIRouter

from ...deps import CurrentUserDependency, EntityStoreDependency
from ...schemas import StatsRead
from ...services import StatsService
from .common import require_user_id

router = APIRouter(prefix="/stats", tags=["stats"])


@router.get("", response_model=StatsRead, summary="Project and task counts for the caller")
async def read_stats(
    store: EntityStoreDependency,
    current_user: CurrentUserDependency,
) -> StatsRead:
    stats = await StatsService(store).compute_stats(require_user_id(current_user))
    return StatsRead.model_validate(stats)
