"""Task-related Pydantic schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from ..models import DEFAULT_TASK_STATUS
from .common import DueDate, NotNull, WritePayload

TASK_READ_EXAMPLE = {
    "id": 7,
    "title": "Draft landing page copy",
    "description": "Hero section and feature bullets.",
    "status": "in-progress",
    "user_id": 42,
    "project_id": 1,
    "completed": False,
    "created_at": "2024-01-02T09:00:00Z",
    "completed_at": None,
    "due_date": None,
}


class TaskCreate(WritePayload):
    """Payload for creating a task. The owner is taken from the project."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Draft landing page copy",
                "project_id": 1,
                "status": DEFAULT_TASK_STATUS,
            }
        }
    )

    title: str = Field(min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    status: str = Field(default=DEFAULT_TASK_STATUS, min_length=1, max_length=50)
    project_id: int = Field(ge=1)
    completed: bool = False
    due_date: DueDate = None


class TaskUpdate(WritePayload):
    """Partial task update; setting ``project_id`` moves the task."""

    model_config = ConfigDict(
        json_schema_extra={"example": {"status": "in-progress", "completed": False}},
    )

    title: Annotated[str | None, NotNull] = Field(default=None, min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    status: Annotated[str | None, NotNull] = Field(default=None, min_length=1, max_length=50)
    project_id: Annotated[int | None, NotNull] = Field(default=None, ge=1)
    completed: Annotated[bool | None, NotNull] = None
    due_date: DueDate = None


class TaskRead(BaseModel):
    """Public representation of a task."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={"example": TASK_READ_EXAMPLE},
    )

    id: int
    title: str
    description: str | None = None
    status: str
    user_id: int
    project_id: int
    completed: bool
    created_at: datetime
    completed_at: datetime | None = None
    due_date: datetime | None = None


__all__ = ["TaskCreate", "TaskRead", "TaskUpdate"]
