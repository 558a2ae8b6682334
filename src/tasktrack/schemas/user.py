"""User-facing Pydantic schemas."""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from .common import NotNull

MIN_PASSWORD_LENGTH = 6
# bcrypt ignores everything past 72 bytes.
MAX_PASSWORD_LENGTH = 72


class UserCreate(BaseModel):
    """Account registration fields."""

    model_config = ConfigDict(extra="forbid")

    username: str = Field(min_length=3, max_length=50)
    password: str = Field(min_length=MIN_PASSWORD_LENGTH, max_length=MAX_PASSWORD_LENGTH)
    first_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)
    email: EmailStr | None = None
    email_notifications: bool = True
    dark_mode: bool = False


class UserPublic(BaseModel):
    """Public representation of a user; never includes the password hash."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    email_notifications: bool
    dark_mode: bool


class UserUpdate(BaseModel):
    """Partial update of profile fields and preferences."""

    model_config = ConfigDict(
        extra="forbid",
        json_schema_extra={"example": {"first_name": "Ada", "dark_mode": True}},
    )

    first_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)
    email: EmailStr | None = None
    email_notifications: Annotated[bool | None, NotNull] = None
    dark_mode: Annotated[bool | None, NotNull] = None


class PasswordChangeRequest(BaseModel):
    current_password: str = Field(min_length=1)
    new_password: str = Field(min_length=MIN_PASSWORD_LENGTH, max_length=MAX_PASSWORD_LENGTH)


__all__ = [
    "MAX_PASSWORD_LENGTH",
    "MIN_PASSWORD_LENGTH",
    "PasswordChangeRequest",
    "UserCreate",
    "UserPublic",
    "UserUpdate",
]
