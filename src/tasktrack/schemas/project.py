"""Project-related Pydantic schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from ..models import DEFAULT_PROJECT_STATUS
from .common import DueDate, NotNull, WritePayload

PROJECT_READ_EXAMPLE = {
    "id": 1,
    "name": "Website relaunch",
    "description": "Ship the redesigned marketing site.",
    "status": DEFAULT_PROJECT_STATUS,
    "user_id": 42,
    "created_at": "2024-01-01T12:00:00Z",
    "due_date": "2024-03-01T00:00:00Z",
}


class ProjectCreate(WritePayload):
    """Payload for creating a project. Any ``user_id`` sent by clients is ignored."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Website relaunch",
                "description": "Ship the redesigned marketing site.",
                "due_date": "2024-03-01T00:00:00Z",
            }
        }
    )

    name: str = Field(min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    status: str = Field(default=DEFAULT_PROJECT_STATUS, min_length=1, max_length=50)
    due_date: DueDate = None


class ProjectUpdate(WritePayload):
    """Partial project update; only supplied fields are changed."""

    model_config = ConfigDict(
        json_schema_extra={"example": {"status": "active"}},
    )

    name: Annotated[str | None, NotNull] = Field(default=None, min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    status: Annotated[str | None, NotNull] = Field(default=None, min_length=1, max_length=50)
    due_date: DueDate = None


class ProjectRead(BaseModel):
    """Public representation of a project."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={"example": PROJECT_READ_EXAMPLE},
    )

    id: int
    name: str
    description: str | None = None
    status: str
    user_id: int
    created_at: datetime
    due_date: datetime | None = None


__all__ = ["ProjectCreate", "ProjectRead", "ProjectUpdate"]
