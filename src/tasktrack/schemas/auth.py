"""Schemas describing authentication payloads and token claims."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from .user import UserCreate, UserPublic


class TokenType(str, Enum):
    """The two kinds of JWT TaskTrack issues."""

    ACCESS = "access"
    REFRESH = "refresh"


class SignupRequest(UserCreate):
    """Incoming payload for registering a new user."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "username": "ada",
                "password": "correct-horse",
                "first_name": "Ada",
                "email": "ada@example.com",
            }
        }
    )


class RefreshRequest(BaseModel):
    refresh_token: str


class AuthTokens(BaseModel):
    """Access and refresh tokens returned to clients."""

    access_token: str
    refresh_token: str
    token_type: str = Field(default="bearer", frozen=True)
    expires_in: int
    refresh_expires_in: int


class AuthResponse(BaseModel):
    """Authentication response containing issued tokens and user metadata."""

    user: UserPublic
    tokens: AuthTokens


class TokenPayload(BaseModel):
    """Validated claims of a TaskTrack JWT; ``sub`` is the user id."""

    model_config = ConfigDict(extra="ignore")

    sub: int
    iss: str
    exp: datetime
    iat: datetime
    jti: str
    type: TokenType


__all__ = [
    "AuthResponse",
    "AuthTokens",
    "RefreshRequest",
    "SignupRequest",
    "TokenPayload",
    "TokenType",
]
