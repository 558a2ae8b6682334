"""Pydantic schemas for public interfaces."""

from __future__ import annotations

from .auth import AuthResponse, AuthTokens, RefreshRequest, SignupRequest, TokenPayload, TokenType
from .project import ProjectCreate, ProjectRead, ProjectUpdate
from .stats import StatsRead
from .system import ErrorResponse, HealthCheckResponse, RootResponse
from .task import TaskCreate, TaskRead, TaskUpdate
from .user import PasswordChangeRequest, UserCreate, UserPublic, UserUpdate

__all__ = [
    "AuthResponse",
    "AuthTokens",
    "ErrorResponse",
    "HealthCheckResponse",
    "PasswordChangeRequest",
    "ProjectCreate",
    "ProjectRead",
    "ProjectUpdate",
    "RefreshRequest",
    "RootResponse",
    "SignupRequest",
    "StatsRead",
    "TaskCreate",
    "TaskRead",
    "TaskUpdate",
    "TokenPayload",
    "TokenType",
    "UserCreate",
    "UserPublic",
    "UserUpdate",
]
