"""Statistics response schema."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class StatsRead(BaseModel):
    """Summary counts for the authenticated user."""

    model_config = ConfigDict(from_attributes=True)

    total_projects: int
    total_tasks: int
    completed_tasks: int
    in_progress_tasks: int


__all__ = ["StatsRead"]
