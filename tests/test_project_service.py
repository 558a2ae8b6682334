from __future__ import annotations

import pytest

from tasktrack.errors import NotFoundError, QuotaExceededError, ValidationError
from tasktrack.models import DEFAULT_PROJECT_STATUS, User
from tasktrack.repositories import EntityStore
from tasktrack.services import MAX_PROJECTS_PER_USER, ProjectService, TaskService, UserService

pytestmark = pytest.mark.asyncio


async def _create_user(store: EntityStore, username: str) -> User:
    return await UserService(store).create_user({"username": username, "password": "secret123"})


async def test_create_project_assigns_owner_and_defaults(store: EntityStore) -> None:
    owner = await _create_user(store, "alice")
    service = ProjectService(store)

    project = await service.create_project(owner.id, {"name": "Roadmap"})

    assert project.id is not None
    assert project.user_id == owner.id
    assert project.status == DEFAULT_PROJECT_STATUS
    assert project.description is None
    assert project.due_date is None
    assert project.created_at is not None


async def test_create_project_ignores_client_supplied_owner(store: EntityStore) -> None:
    alice = await _create_user(store, "alice")
    bob = await _create_user(store, "bob")

    project = await ProjectService(store).create_project(
        alice.id,
        {"name": "Mine", "user_id": bob.id, "id": 999},
    )

    assert project.user_id == alice.id
    assert project.id != 999


async def test_quota_rejects_fifth_project_and_leaves_set_unchanged(store: EntityStore) -> None:
    owner = await _create_user(store, "alice")
    service = ProjectService(store)

    created = [
        await service.create_project(owner.id, {"name": f"Project {index}"})
        for index in range(MAX_PROJECTS_PER_USER)
    ]
    before = [project.id for project in await service.list_projects_for_owner(owner.id)]

    with pytest.raises(QuotaExceededError) as excinfo:
        await service.create_project(owner.id, {"name": "One too many"})

    assert excinfo.value.details == {"limit": MAX_PROJECTS_PER_USER}
    after = [project.id for project in await service.list_projects_for_owner(owner.id)]
    assert after == before == [project.id for project in created]
    assert await store.projects.count_for_owner(owner.id) == MAX_PROJECTS_PER_USER


async def test_quota_is_checked_before_the_payload(store: EntityStore) -> None:
    owner = await _create_user(store, "alice")
    service = ProjectService(store)
    for index in range(MAX_PROJECTS_PER_USER):
        await service.create_project(owner.id, {"name": f"Project {index}"})

    with pytest.raises(QuotaExceededError):
        await service.create_project(owner.id, {"name": "", "due_date": "whenever"})


async def test_quota_frees_up_after_delete(store: EntityStore) -> None:
    owner = await _create_user(store, "alice")
    service = ProjectService(store)
    projects = [
        await service.create_project(owner.id, {"name": f"Project {index}"})
        for index in range(MAX_PROJECTS_PER_USER)
    ]

    assert await service.delete_project(projects[0].id) is True

    replacement = await service.create_project(owner.id, {"name": "Replacement"})
    assert replacement.user_id == owner.id
    assert await store.projects.count_for_owner(owner.id) == MAX_PROJECTS_PER_USER


async def test_quota_is_counted_per_user(store: EntityStore) -> None:
    alice = await _create_user(store, "alice")
    bob = await _create_user(store, "bob")
    service = ProjectService(store)
    for index in range(MAX_PROJECTS_PER_USER):
        await service.create_project(alice.id, {"name": f"Alice {index}"})

    project = await service.create_project(bob.id, {"name": "Bob's first"})

    assert project.user_id == bob.id


async def test_create_project_for_unknown_user_is_not_found(store: EntityStore) -> None:
    with pytest.raises(NotFoundError):
        await ProjectService(store).create_project(999, {"name": "Orphan"})


async def test_create_project_validates_name(store: EntityStore) -> None:
    owner = await _create_user(store, "alice")

    with pytest.raises(ValidationError) as excinfo:
        await ProjectService(store).create_project(owner.id, {"name": ""})

    assert excinfo.value.field == "name"
    assert excinfo.value.details["field"] == "name"
    assert excinfo.value.details["errors"][0]["loc"] == ["name"]


async def test_create_project_rejects_bad_due_date(store: EntityStore) -> None:
    owner = await _create_user(store, "alice")

    with pytest.raises(ValidationError) as excinfo:
        await ProjectService(store).create_project(
            owner.id,
            {"name": "Launch", "due_date": "next tuesday"},
        )

    assert excinfo.value.field == "due_date"


async def test_empty_due_date_means_no_due_date(store: EntityStore) -> None:
    owner = await _create_user(store, "alice")

    project = await ProjectService(store).create_project(owner.id, {"name": "Open-ended", "due_date": ""})

    assert project.due_date is None


async def test_update_project_merges_fields_and_keeps_owner(store: EntityStore) -> None:
    alice = await _create_user(store, "alice")
    bob = await _create_user(store, "bob")
    service = ProjectService(store)
    project = await service.create_project(
        alice.id,
        {"name": "Roadmap", "description": "Q3 planning"},
    )

    updated = await service.update_project(project.id, {"status": "active", "user_id": bob.id})

    assert updated.status == "active"
    assert updated.name == "Roadmap"
    assert updated.description == "Q3 planning"
    assert updated.user_id == alice.id


async def test_update_project_clears_due_date_with_null(store: EntityStore) -> None:
    owner = await _create_user(store, "alice")
    service = ProjectService(store)
    project = await service.create_project(
        owner.id,
        {"name": "Roadmap", "due_date": "2030-06-01T00:00:00Z"},
    )
    assert project.due_date is not None

    updated = await service.update_project(project.id, {"due_date": None})

    assert updated.due_date is None
    assert updated.name == "Roadmap"


async def test_update_project_rejects_null_name(store: EntityStore) -> None:
    owner = await _create_user(store, "alice")
    service = ProjectService(store)
    project = await service.create_project(owner.id, {"name": "Roadmap"})

    with pytest.raises(ValidationError) as excinfo:
        await service.update_project(project.id, {"name": None})

    assert excinfo.value.field == "name"


async def test_update_project_rejects_unknown_fields(store: EntityStore) -> None:
    owner = await _create_user(store, "alice")
    service = ProjectService(store)
    project = await service.create_project(owner.id, {"name": "Roadmap"})

    with pytest.raises(ValidationError) as excinfo:
        await service.update_project(project.id, {"colour": "blue"})

    assert excinfo.value.field == "colour"


async def test_update_missing_project_is_not_found(store: EntityStore) -> None:
    with pytest.raises(NotFoundError):
        await ProjectService(store).update_project(404, {"name": "Ghost"})


async def test_delete_project_cascades_to_its_tasks_only(store: EntityStore) -> None:
    owner = await _create_user(store, "alice")
    projects = ProjectService(store)
    tasks = TaskService(store)
    doomed = await projects.create_project(owner.id, {"name": "Doomed"})
    survivor = await projects.create_project(owner.id, {"name": "Survivor"})
    doomed_tasks = [
        await tasks.create_task({"project_id": doomed.id, "title": f"Task {index}"})
        for index in range(3)
    ]
    kept = await tasks.create_task({"project_id": survivor.id, "title": "Keep me"})
    doomed_ids = [task.id for task in doomed_tasks]

    assert await projects.delete_project(doomed.id) is True

    assert await store.projects.get(doomed.id) is None
    for task_id in doomed_ids:
        assert await store.tasks.get(task_id) is None
        with pytest.raises(NotFoundError):
            await tasks.complete_task(task_id)
    assert await store.tasks.get(kept.id) is not None
    assert [task.id for task in await tasks.list_tasks_for_owner(owner.id)] == [kept.id]


async def test_delete_missing_project_returns_false(store: EntityStore) -> None:
    assert await ProjectService(store).delete_project(12345) is False
