"""Domain models exposed by TaskTrack."""

from __future__ import annotations

from .common import CreatedAtMixin, utcnow
from .project import DEFAULT_PROJECT_STATUS, Project, ProjectBase
from .task import DEFAULT_TASK_STATUS, STATUS_COMPLETED, STATUS_IN_PROGRESS, Task, TaskBase
from .user import User, UserBase

__all__ = [
    "CreatedAtMixin",
    "DEFAULT_PROJECT_STATUS",
    "DEFAULT_TASK_STATUS",
    "Project",
    "ProjectBase",
    "STATUS_COMPLETED",
    "STATUS_IN_PROGRESS",
    "Task",
    "TaskBase",
    "User",
    "UserBase",
    "utcnow",
]
