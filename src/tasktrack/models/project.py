"""Project domain models built with SQLModel."""

from __future__ import annotations

from datetime import datetime

import sqlalchemy as sa
from sqlmodel import Field, SQLModel

from .common import CreatedAtMixin

DEFAULT_PROJECT_STATUS = "planning"


class ProjectBase(SQLModel, table=False):
    """Shared attributes for project models."""

    name: str = Field(
        max_length=100,
        sa_column=sa.Column(sa.String(length=100), nullable=False),
    )
    description: str | None = Field(
        default=None,
        sa_column=sa.Column(sa.String(length=500), nullable=True),
    )
    status: str = Field(
        default=DEFAULT_PROJECT_STATUS,
        sa_column=sa.Column(
            sa.String(length=50),
            nullable=False,
            server_default=DEFAULT_PROJECT_STATUS,
        ),
    )
    due_date: datetime | None = Field(
        default=None,
        sa_column=sa.Column(sa.DateTime(timezone=True), nullable=True),
    )
    user_id: int = Field(
        sa_column=sa.Column(
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
    )


class Project(ProjectBase, CreatedAtMixin, table=True):
    """Persistent project model."""

    __tablename__ = "projects"
    __table_args__ = (
        sa.CheckConstraint("length(name) > 0", name="ck_projects_name_length"),
        sa.Index("ix_projects_user_id", "user_id"),
    )

    id: int | None = Field(default=None, primary_key=True)


__all__ = ["DEFAULT_PROJECT_STATUS", "Project", "ProjectBase"]
