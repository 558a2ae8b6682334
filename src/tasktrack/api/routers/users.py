"""Routes for the authenticated user's own profile."""

from __future__ import annotations

from fastapi import APIRouter

from ...deps import CurrentUserDependency, EntityStoreDependency
from ...schemas import PasswordChangeRequest, UserPublic, UserUpdate
from ...services import UserService
from .common import JsonObject, documented_body, require_user_id

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserPublic, summary="Return the authenticated user")
async def read_current_user(current_user: CurrentUserDependency) -> UserPublic:
    return UserPublic.model_validate(current_user)


@router.patch(
    "/me",
    response_model=UserPublic,
    summary="Update profile and preferences",
    openapi_extra=documented_body(UserUpdate),
)
async def update_current_user(
    payload: JsonObject,
    current_user: CurrentUserDependency,
    store: EntityStoreDependency,
) -> UserPublic:
    service = UserService(store)
    user = await service.update_user(require_user_id(current_user), payload)
    return UserPublic.model_validate(user)


@router.post(
    "/me/password",
    response_model=UserPublic,
    summary="Change password",
    openapi_extra=documented_body(PasswordChangeRequest),
)
async def change_password(
    payload: JsonObject,
    current_user: CurrentUserDependency,
    store: EntityStoreDependency,
) -> UserPublic:
    service = UserService(store)
    user = await service.change_password(require_user_id(current_user), payload)
    return UserPublic.model_validate(user)
