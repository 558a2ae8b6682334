"""Routes handling project CRUD for the authenticated owner."""

from __future__ import annotations

from fastapi import APIRouter, Response, status

from ...deps import CurrentUserDependency, EntityStoreDependency
from ...schemas import ProjectCreate, ProjectRead, ProjectUpdate
from ...services import ProjectService
from .common import JsonObject, documented_body, require_user_id

router = APIRouter(prefix="/projects", tags=["projects"])


@router.get("", response_model=list[ProjectRead], summary="List the caller's projects")
async def list_projects(
    store: EntityStoreDependency,
    current_user: CurrentUserDependency,
) -> list[ProjectRead]:
    service = ProjectService(store)
    projects = await service.list_projects_for_owner(require_user_id(current_user))
    return [ProjectRead.model_validate(project) for project in projects]


@router.get("/{project_id}", response_model=ProjectRead, summary="Retrieve a project by id")
async def get_project(
    project_id: int,
    store: EntityStoreDependency,
    current_user: CurrentUserDependency,
) -> ProjectRead:
    service = ProjectService(store)
    project = await service.get_project_for_owner(project_id, require_user_id(current_user))
    return ProjectRead.model_validate(project)


@router.post(
    "",
    response_model=ProjectRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a project (at most four per user)",
    openapi_extra=documented_body(ProjectCreate),
)
async def create_project(
    payload: JsonObject,
    store: EntityStoreDependency,
    current_user: CurrentUserDependency,
) -> ProjectRead:
    service = ProjectService(store)
    project = await service.create_project(require_user_id(current_user), payload)
    return ProjectRead.model_validate(project)


@router.patch(
    "/{project_id}",
    response_model=ProjectRead,
    summary="Update a project",
    openapi_extra=documented_body(ProjectUpdate),
)
@router.put("/{project_id}", response_model=ProjectRead, include_in_schema=False)
async def update_project(
    project_id: int,
    payload: JsonObject,
    store: EntityStoreDependency,
    current_user: CurrentUserDependency,
) -> ProjectRead:
    service = ProjectService(store)
    project = await service.update_project_for_owner(
        project_id,
        require_user_id(current_user),
        payload,
    )
    return ProjectRead.model_validate(project)


@router.delete(
    "/{project_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a project and all of its tasks",
)
async def delete_project(
    project_id: int,
    store: EntityStoreDependency,
    current_user: CurrentUserDependency,
) -> Response:
    service = ProjectService(store)
    await service.delete_project_for_owner(project_id, require_user_id(current_user))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
