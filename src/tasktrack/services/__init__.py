"""Domain service layer package."""

from __future__ import annotations

from .auth import AuthService
from .guard import AccessDecision, AuthorizationGuard
from .projects import MAX_PROJECTS_PER_USER, ProjectService
from .stats import StatsResult, StatsService
from .tasks import TaskService
from .users import UserService

__all__ = [
    "AccessDecision",
    "AuthService",
    "AuthorizationGuard",
    "MAX_PROJECTS_PER_USER",
    "ProjectService",
    "StatsResult",
    "StatsService",
    "TaskService",
    "UserService",
]
