"""Task domain models built with SQLModel."""

from __future__ import annotations

from datetime import datetime

import sqlalchemy as sa
from sqlmodel import Field, SQLModel

from .common import CreatedAtMixin

DEFAULT_TASK_STATUS = "todo"
STATUS_IN_PROGRESS = "in-progress"
STATUS_COMPLETED = "completed"


class TaskBase(SQLModel, table=False):
    """Shared attributes for task models.

    ``status`` is a free-form label; only ``completed``/``completed_at`` carry
    lifecycle meaning.
    """

    title: str = Field(
        max_length=100,
        sa_column=sa.Column(sa.String(length=100), nullable=False),
    )
    description: str | None = Field(
        default=None,
        sa_column=sa.Column(sa.String(length=500), nullable=True),
    )
    status: str = Field(
        default=DEFAULT_TASK_STATUS,
        sa_column=sa.Column(
            sa.String(length=50),
            nullable=False,
            server_default=DEFAULT_TASK_STATUS,
        ),
    )
    completed: bool = Field(
        default=False,
        sa_column=sa.Column(sa.Boolean(), nullable=False, server_default=sa.false()),
    )
    completed_at: datetime | None = Field(
        default=None,
        sa_column=sa.Column(sa.DateTime(timezone=True), nullable=True),
    )
    due_date: datetime | None = Field(
        default=None,
        sa_column=sa.Column(sa.DateTime(timezone=True), nullable=True),
    )
    # Denormalised copy of the owning project's user_id, maintained on write.
    user_id: int = Field(
        sa_column=sa.Column(
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
    )
    project_id: int = Field(
        sa_column=sa.Column(
            sa.Integer(),
            sa.ForeignKey("projects.id", ondelete="CASCADE"),
            nullable=False,
        ),
    )


class Task(TaskBase, CreatedAtMixin, table=True):
    """Persistent task model."""

    __tablename__ = "tasks"
    __table_args__ = (
        sa.CheckConstraint("length(title) > 0", name="ck_tasks_title_length"),
        sa.Index("ix_tasks_user_id", "user_id"),
        sa.Index("ix_tasks_project_id", "project_id"),
    )

    id: int | None = Field(default=None, primary_key=True)


__all__ = [
    "DEFAULT_TASK_STATUS",
    "STATUS_COMPLETED",
    "STATUS_IN_PROGRESS",
    "Task",
    "TaskBase",
]
