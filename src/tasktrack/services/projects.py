"""Service layer encapsulating project lifecycle operations."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from ..errors import NotFoundError, QuotaExceededError
from ..models import Project
from ..repositories import EntityStore
from ..schemas.project import ProjectCreate, ProjectUpdate
from .guard import AuthorizationGuard
from .payloads import parse_payload

logger = logging.getLogger(__name__)

MAX_PROJECTS_PER_USER = 4


class ProjectService:
    """Project lifecycle: quota-checked creation, updates and cascading deletion."""

    def __init__(self, store: EntityStore, *, guard: AuthorizationGuard | None = None) -> None:
        self._store = store
        self._guard = guard or AuthorizationGuard(store)

    async def create_project(self, owner_id: int, data: Mapping[str, Any]) -> Project:
        """Create a project for ``owner_id`` unless they already own the maximum.

        The quota is checked before ``data`` is validated, so a full account is
        told about the limit whatever it sent. The count-then-insert sequence is
        not atomic: two concurrent creates by the same user can both pass.
        """
        owner = await self._store.users.get(owner_id)
        if owner is None:
            raise NotFoundError(f"User {owner_id} does not exist.")
        existing = await self._store.projects.count_for_owner(owner_id)
        if existing >= MAX_PROJECTS_PER_USER:
            raise QuotaExceededError(
                f"Maximum of {MAX_PROJECTS_PER_USER} projects allowed.",
                details={"limit": MAX_PROJECTS_PER_USER},
            )
        payload = parse_payload(ProjectCreate, data)
        project = Project(user_id=owner_id, **payload.model_dump())
        async with self._store.transaction():
            await self._store.projects.add(project)
        await self._store.refresh(project)
        logger.info("Project created", extra={"project_id": project.id, "owner_id": owner_id})
        return project

    async def get_project_for_owner(self, project_id: int, owner_id: int) -> Project:
        return await self._guard.require_project(owner_id, project_id)

    async def list_projects_for_owner(self, owner_id: int) -> list[Project]:
        return await self._store.projects.list_for_owner(owner_id)

    async def update_project(self, project_id: int, data: Mapping[str, Any]) -> Project:
        """Merge the supplied fields into the project; the owner can never be changed."""
        fields = parse_payload(ProjectUpdate, data).model_dump(exclude_unset=True)
        if await self._store.projects.get(project_id) is None:
            raise NotFoundError(f"Project {project_id} does not exist.")
        async with self._store.transaction():
            project = await self._store.projects.update(project_id, fields)
        return await self._store.refresh(project)

    async def update_project_for_owner(
        self,
        project_id: int,
        owner_id: int,
        data: Mapping[str, Any],
    ) -> Project:
        """Update a project while ensuring it belongs to ``owner_id``."""
        await self._guard.require_project(owner_id, project_id)
        return await self.update_project(project_id, data)

    async def delete_project(self, project_id: int) -> bool:
        """Delete a project and all of its tasks, returning ``True`` iff it existed."""
        async with self._store.transaction():
            deleted = await self._store.projects.delete_by_id(project_id)
        if deleted:
            logger.info("Project deleted", extra={"project_id": project_id})
        return deleted

    async def delete_project_for_owner(self, project_id: int, owner_id: int) -> bool:
        await self._guard.require_project(owner_id, project_id)
        return await self.delete_project(project_id)


__all__ = ["MAX_PROJECTS_PER_USER", "ProjectService"]
