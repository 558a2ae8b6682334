"""Database repositories for encapsulating persistence logic."""

from __future__ import annotations

from .projects import ProjectRepository
from .store import EntityStore
from .tasks import TaskCounts, TaskRepository
from .users import UserRepository

__all__ = [
    "EntityStore",
    "ProjectRepository",
    "TaskCounts",
    "TaskRepository",
    "UserRepository",
]
