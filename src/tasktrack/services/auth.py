"""Authentication service encapsulating registration and token flows."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from fastapi import status

from ..core.config import Settings
from ..core.security import (
    InvalidTokenError,
    IssuedToken,
    issue_token,
    read_token,
    revoked_tokens,
    verify_password,
)
from ..errors import ApplicationError
from ..models import User
from ..repositories import EntityStore
from ..schemas.auth import TokenType
from .users import UserService


@dataclass(slots=True)
class TokenPair:
    """Container for access and refresh tokens."""

    access: IssuedToken
    refresh: IssuedToken


def _unauthorized(message: str) -> ApplicationError:
    return ApplicationError(
        message,
        code="unauthorized",
        status_code=status.HTTP_401_UNAUTHORIZED,
    )


class AuthService:
    """Registration, credential checks and JWT issuance."""

    def __init__(self, store: EntityStore, settings: Settings) -> None:
        self._store = store
        self._settings = settings
        self._user_service = UserService(store)

    async def register_user(self, data: Mapping[str, Any]) -> User:
        return await self._user_service.create_user(data)

    async def authenticate_user(self, username: str, password: str) -> User | None:
        """Return the user if the credentials match, otherwise ``None``."""
        user = await self._user_service.get_user_by_username(username)
        if user is None:
            return None
        if not verify_password(password, user.hashed_password):
            return None
        return user

    def build_token_pair(self, user: User) -> TokenPair:
        if user.id is None:
            raise ApplicationError("User must be persisted before issuing tokens.")
        return TokenPair(
            access=issue_token(user.id, TokenType.ACCESS, self._settings),
            refresh=issue_token(user.id, TokenType.REFRESH, self._settings),
        )

    async def refresh_from_token(self, refresh_token: str) -> tuple[User, TokenPair]:
        """Exchange a refresh token for a new pair, revoking the one used."""
        try:
            payload = read_token(refresh_token, TokenType.REFRESH, self._settings)
        except InvalidTokenError as exc:
            raise _unauthorized(str(exc)) from exc
        user = await self._store.users.get(payload.sub)
        if user is None:
            raise _unauthorized("User no longer exists.")

        revoked_tokens.revoke(payload)
        return user, self.build_token_pair(user)


__all__ = ["AuthService", "TokenPair"]
