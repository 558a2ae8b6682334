"""Service layer orchestrating user accounts and profile preferences."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from ..core.security import hash_password, verify_password
from ..errors import NotFoundError, ValidationError
from ..models import User
from ..repositories import EntityStore
from ..schemas.user import PasswordChangeRequest, UserCreate, UserUpdate
from .payloads import parse_payload

logger = logging.getLogger(__name__)


class UserService:
    """High-level operations for ``User`` accounts."""

    def __init__(self, store: EntityStore) -> None:
        self._store = store

    async def create_user(self, data: Mapping[str, Any]) -> User:
        """Create and persist a new user; usernames are unique."""
        payload = parse_payload(UserCreate, data)
        if await self._store.users.get_by_username(payload.username) is not None:
            raise ValidationError("Username is already taken.", field="username")
        user = User(
            hashed_password=hash_password(payload.password),
            **payload.model_dump(exclude={"password"}),
        )
        async with self._store.transaction():
            await self._store.users.add(user)
        await self._store.refresh(user)
        logger.info("User registered", extra={"user_id": user.id})
        return user

    async def get_user_by_username(self, username: str) -> User | None:
        return await self._store.users.get_by_username(username)

    async def update_user(self, user_id: int, data: Mapping[str, Any]) -> User:
        """Apply a partial profile/preference update to a user."""
        fields = parse_payload(UserUpdate, data).model_dump(exclude_unset=True)
        if await self._store.users.get(user_id) is None:
            raise NotFoundError(f"User {user_id} does not exist.")
        async with self._store.transaction():
            user = await self._store.users.update(user_id, fields)
        return await self._store.refresh(user)

    async def change_password(self, user_id: int, data: Mapping[str, Any]) -> User:
        """Replace the password after verifying the current one."""
        payload = parse_payload(PasswordChangeRequest, data)
        user = await self._store.users.get(user_id)
        if user is None:
            raise NotFoundError(f"User {user_id} does not exist.")
        if not verify_password(payload.current_password, user.hashed_password):
            raise ValidationError("Current password is incorrect.", field="current_password")
        async with self._store.transaction():
            user = await self._store.users.update(
                user_id,
                {"hashed_password": hash_password(payload.new_password)},
            )
        logger.info("Password changed", extra={"user_id": user_id})
        return await self._store.refresh(user)


__all__ = ["UserService"]
