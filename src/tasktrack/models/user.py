"""User domain models built with SQLModel."""

from __future__ import annotations

import sqlalchemy as sa
from sqlmodel import Field, SQLModel

from .common import CreatedAtMixin


class UserBase(SQLModel, table=False):
    """Profile attributes and preferences shared by user models."""

    username: str = Field(
        max_length=50,
        sa_column=sa.Column(sa.String(length=50), nullable=False, unique=True),
    )
    first_name: str | None = Field(
        default=None,
        sa_column=sa.Column(sa.String(length=100), nullable=True),
    )
    last_name: str | None = Field(
        default=None,
        sa_column=sa.Column(sa.String(length=100), nullable=True),
    )
    email: str | None = Field(
        default=None,
        sa_column=sa.Column(sa.String(length=320), nullable=True),
    )
    email_notifications: bool = Field(
        default=True,
        sa_column=sa.Column(sa.Boolean(), nullable=False, server_default=sa.true()),
    )
    dark_mode: bool = Field(
        default=False,
        sa_column=sa.Column(sa.Boolean(), nullable=False, server_default=sa.false()),
    )


class User(UserBase, CreatedAtMixin, table=True):
    """Persistent user model."""

    __tablename__ = "users"
    __table_args__ = (sa.Index("ix_users_username", "username"),)

    id: int | None = Field(default=None, primary_key=True)
    hashed_password: str = Field(
        max_length=255,
        sa_column=sa.Column(sa.String(length=255), nullable=False),
    )


__all__ = ["User", "UserBase"]
