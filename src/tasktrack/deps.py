"""Reusable FastAPI dependencies."""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlmodel.ext.asyncio.session import AsyncSession

from .core.config import Settings, get_settings
from .core.context import bind_principal_id
from .core.security import InvalidTokenError, read_token
from .db.session import get_session
from .models import User
from .repositories import EntityStore
from .schemas.auth import TokenPayload, TokenType

SettingsDependency = Annotated[Settings, Depends(get_settings)]

_oauth2_scheme = OAuth2PasswordBearer(tokenUrl="api/auth/login")


async def get_db_session() -> AsyncIterator[AsyncSession]:
    """FastAPI dependency that yields a database session."""

    async for session in get_session():
        yield session


DatabaseSessionDependency = Annotated[AsyncSession, Depends(get_db_session)]


async def get_entity_store(session: DatabaseSessionDependency) -> EntityStore:
    """Wrap the request's session in an ``EntityStore``."""

    return EntityStore(session)


EntityStoreDependency = Annotated[EntityStore, Depends(get_entity_store)]


def _unauthorized(detail: str = "Could not validate credentials.") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_access_token_payload(
    token: Annotated[str, Depends(_oauth2_scheme)],
    settings: SettingsDependency,
) -> TokenPayload:
    """Decode and validate the bearer access token of the current request."""

    try:
        return read_token(token, TokenType.ACCESS, settings)
    except InvalidTokenError as exc:
        raise _unauthorized(str(exc)) from exc


AccessTokenDependency = Annotated[TokenPayload, Depends(get_access_token_payload)]


async def get_current_user(
    token_payload: AccessTokenDependency,
    store: EntityStoreDependency,
) -> User:
    """Resolve the principal named by the access token.

    The user id is bound to the logging context for the rest of the request.
    """

    user = await store.users.get(token_payload.sub)
    if user is None:
        raise _unauthorized()
    bind_principal_id(token_payload.sub)
    return user


CurrentUserDependency = Annotated[User, Depends(get_current_user)]


__all__ = [
    "AccessTokenDependency",
    "CurrentUserDependency",
    "DatabaseSessionDependency",
    "EntityStoreDependency",
    "SettingsDependency",
    "get_access_token_payload",
    "get_current_user",
    "get_db_session",
    "get_entity_store",
]
