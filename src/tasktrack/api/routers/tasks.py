"""Routes handling task CRUD and completion for the authenticated owner."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Query, Response, status

from ...deps import CurrentUserDependency, EntityStoreDependency
from ...schemas import TaskCreate, TaskRead, TaskUpdate
from ...services import TaskService
from .common import JsonObject, documented_body, require_user_id

router = APIRouter(prefix="/tasks", tags=["tasks"])

ProjectQuery = Annotated[
    int | None,
    Query(ge=1, description="Restrict results to tasks of this project."),
]


@router.get("", response_model=list[TaskRead], summary="List tasks, optionally by project")
async def list_tasks(
    store: EntityStoreDependency,
    current_user: CurrentUserDependency,
    project_id: ProjectQuery = None,
) -> list[TaskRead]:
    service = TaskService(store)
    user_id = require_user_id(current_user)
    if project_id is not None:
        tasks = await service.list_tasks_for_project(project_id, user_id)
    else:
        tasks = await service.list_tasks_for_owner(user_id)
    return [TaskRead.model_validate(task) for task in tasks]


@router.get("/{task_id}", response_model=TaskRead, summary="Retrieve a task by id")
async def get_task(
    task_id: int,
    store: EntityStoreDependency,
    current_user: CurrentUserDependency,
) -> TaskRead:
    service = TaskService(store)
    task = await service.get_task_for_owner(task_id, require_user_id(current_user))
    return TaskRead.model_validate(task)


@router.post(
    "",
    response_model=TaskRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a task in one of the caller's projects",
    openapi_extra=documented_body(TaskCreate),
)
async def create_task(
    payload: JsonObject,
    store: EntityStoreDependency,
    current_user: CurrentUserDependency,
) -> TaskRead:
    service = TaskService(store)
    task = await service.create_task(payload, principal_id=require_user_id(current_user))
    return TaskRead.model_validate(task)


@router.patch(
    "/{task_id}",
    response_model=TaskRead,
    summary="Update a task",
    openapi_extra=documented_body(TaskUpdate),
)
@router.put("/{task_id}", response_model=TaskRead, include_in_schema=False)
async def update_task(
    task_id: int,
    payload: JsonObject,
    store: EntityStoreDependency,
    current_user: CurrentUserDependency,
) -> TaskRead:
    service = TaskService(store)
    task = await service.update_task_for_owner(
        task_id,
        require_user_id(current_user),
        payload,
    )
    return TaskRead.model_validate(task)


@router.post("/{task_id}/complete", response_model=TaskRead, summary="Mark a task completed")
async def complete_task(
    task_id: int,
    store: EntityStoreDependency,
    current_user: CurrentUserDependency,
) -> TaskRead:
    service = TaskService(store)
    task = await service.complete_task_for_owner(task_id, require_user_id(current_user))
    return TaskRead.model_validate(task)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a task")
async def delete_task(
    task_id: int,
    store: EntityStoreDependency,
    current_user: CurrentUserDependency,
) -> Response:
    service = TaskService(store)
    await service.delete_task_for_owner(task_id, require_user_id(current_user))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
