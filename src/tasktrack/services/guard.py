"""Ownership checks applied before any entity-targeted operation."""

from __future__ import annotations

import logging
from enum import Enum
from typing import TypeVar

from ..errors import ForbiddenError, NotFoundError
from ..models import Project, Task
from ..repositories import EntityStore

logger = logging.getLogger(__name__)

OwnedT = TypeVar("OwnedT", Project, Task)


class AccessDecision(str, Enum):
    """Outcome of an ownership check."""

    ALLOWED = "allowed"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"


def decide(principal_id: int, entity: Project | Task | None) -> AccessDecision:
    """Decide whether ``principal_id`` may act on an already resolved entity."""
    if entity is None:
        return AccessDecision.NOT_FOUND
    if entity.user_id != principal_id:
        return AccessDecision.FORBIDDEN
    return AccessDecision.ALLOWED


class AuthorizationGuard:
    """Resolve entities by id and enforce that the principal owns them."""

    def __init__(self, store: EntityStore) -> None:
        self._store = store

    async def check_project(self, principal_id: int, project_id: int) -> AccessDecision:
        return decide(principal_id, await self._store.projects.get(project_id))

    async def check_task(self, principal_id: int, task_id: int) -> AccessDecision:
        return decide(principal_id, await self._store.tasks.get(task_id))

    async def require_project(self, principal_id: int, project_id: int) -> Project:
        """Return the project if ``principal_id`` owns it.

        Raises ``NotFoundError`` when the project does not exist and
        ``ForbiddenError`` when it belongs to someone else.
        """
        project = await self._store.projects.get(project_id)
        return self._enforce(principal_id, project, "Project", project_id)

    async def require_task(self, principal_id: int, task_id: int) -> Task:
        task = await self._store.tasks.get(task_id)
        return self._enforce(principal_id, task, "Task", task_id)

    @staticmethod
    def _enforce(
        principal_id: int,
        entity: OwnedT | None,
        kind: str,
        entity_id: int,
    ) -> OwnedT:
        if entity is None:
            raise NotFoundError(f"{kind} {entity_id} does not exist.")
        if decide(principal_id, entity) is AccessDecision.FORBIDDEN:
            logger.warning(
                "Ownership check failed",
                extra={"principal_id": principal_id, "entity": kind.lower(), "entity_id": entity_id},
            )
            raise ForbiddenError(f"You are not permitted to access this {kind.lower()}.")
        return entity


__all__ = ["AccessDecision", "AuthorizationGuard", "decide"]
