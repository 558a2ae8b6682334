"""Service layer encapsulating task lifecycle operations."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from ..errors import NotFoundError
from ..models import STATUS_COMPLETED, Task, utcnow
from ..repositories import EntityStore
from ..schemas.task import TaskCreate, TaskUpdate
from .guard import AuthorizationGuard
from .payloads import parse_payload

logger = logging.getLogger(__name__)


def completion_transition(stored_completed: bool | None, fields: Mapping[str, Any]) -> dict[str, Any]:
    """Return the ``completed_at`` change implied by an update, if any.

    Only a change of the ``completed`` flag touches the timestamp: false to true
    stamps it, true to false clears it. Omitted or unchanged flags leave it as is.
    """
    if "completed" not in fields:
        return {}
    was_completed = bool(stored_completed)
    if fields["completed"] and not was_completed:
        return {"completed_at": utcnow()}
    if not fields["completed"] and was_completed:
        return {"completed_at": None}
    return {}


class TaskService:
    """Task lifecycle: creation under a project, updates, completion and deletion.

    ``Task.user_id`` is always copied from the owning project and never taken
    from caller input.
    """

    def __init__(self, store: EntityStore, *, guard: AuthorizationGuard | None = None) -> None:
        self._store = store
        self._guard = guard or AuthorizationGuard(store)

    async def _resolve_project_owner(self, project_id: int, principal_id: int | None) -> int:
        if principal_id is not None:
            project = await self._guard.require_project(principal_id, project_id)
        else:
            project = await self._store.projects.get(project_id)
            if project is None:
                raise NotFoundError(f"Project {project_id} does not exist.")
        return project.user_id

    async def create_task(
        self,
        data: Mapping[str, Any],
        *,
        principal_id: int | None = None,
    ) -> Task:
        """Create a task inside the project named by ``data["project_id"]``.

        When ``principal_id`` is given the project must belong to them. The new
        task starts with ``completed_at`` unset regardless of ``completed``.
        """
        payload = parse_payload(TaskCreate, data)
        owner_id = await self._resolve_project_owner(payload.project_id, principal_id)
        task = Task(user_id=owner_id, completed_at=None, **payload.model_dump())
        async with self._store.transaction():
            await self._store.tasks.add(task)
        await self._store.refresh(task)
        logger.info(
            "Task created",
            extra={"task_id": task.id, "project_id": task.project_id, "owner_id": owner_id},
        )
        return task

    async def get_task_for_owner(self, task_id: int, owner_id: int) -> Task:
        return await self._guard.require_task(owner_id, task_id)

    async def list_tasks_for_owner(self, owner_id: int) -> list[Task]:
        return await self._store.tasks.list_for_owner(owner_id)

    async def list_tasks_for_project(self, project_id: int, owner_id: int) -> list[Task]:
        """Return the tasks of a project the caller owns."""
        await self._guard.require_project(owner_id, project_id)
        return await self._store.tasks.list_for_project(project_id)

    async def update_task(
        self,
        task_id: int,
        data: Mapping[str, Any],
        *,
        principal_id: int | None = None,
    ) -> Task:
        """Merge the supplied fields into the task, deriving ``completed_at`` from the flag.

        Moving the task to another project re-resolves its owner from that
        project; with ``principal_id`` set the target project must be theirs.
        """
        fields = parse_payload(TaskUpdate, data).model_dump(exclude_unset=True)
        task = await self._store.tasks.get(task_id)
        if task is None:
            raise NotFoundError(f"Task {task_id} does not exist.")
        if "project_id" in fields and fields["project_id"] != task.project_id:
            fields["user_id"] = await self._resolve_project_owner(fields["project_id"], principal_id)
        fields.update(completion_transition(task.completed, fields))
        async with self._store.transaction():
            task = await self._store.tasks.update(task_id, fields)
        return await self._store.refresh(task)

    async def update_task_for_owner(
        self,
        task_id: int,
        owner_id: int,
        data: Mapping[str, Any],
    ) -> Task:
        """Update a task while ensuring it (and any target project) belongs to ``owner_id``."""
        await self._guard.require_task(owner_id, task_id)
        return await self.update_task(task_id, data, principal_id=owner_id)

    async def complete_task(self, task_id: int) -> Task:
        """Mark a task completed and stamp ``completed_at`` with the current time.

        Completing an already completed task succeeds and refreshes the stamp.
        """
        if await self._store.tasks.get(task_id) is None:
            raise NotFoundError(f"Task {task_id} does not exist.")
        async with self._store.transaction():
            task = await self._store.tasks.update(
                task_id,
                {"completed": True, "status": STATUS_COMPLETED, "completed_at": utcnow()},
            )
        await self._store.refresh(task)
        logger.info("Task completed", extra={"task_id": task_id})
        return task

    async def complete_task_for_owner(self, task_id: int, owner_id: int) -> Task:
        await self._guard.require_task(owner_id, task_id)
        return await self.complete_task(task_id)

    async def delete_task(self, task_id: int) -> bool:
        """Delete a task by ID, returning ``True`` iff a record was removed."""
        async with self._store.transaction():
            deleted = await self._store.tasks.delete_by_id(task_id)
        if deleted:
            logger.info("Task deleted", extra={"task_id": task_id})
        return deleted

    async def delete_task_for_owner(self, task_id: int, owner_id: int) -> bool:
        await self._guard.require_task(owner_id, task_id)
        return await self.delete_task(task_id)


__all__ = ["TaskService", "completion_transition"]
