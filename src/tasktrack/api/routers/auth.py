"""Routes handling user registration and token flows."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, status
from fastapi.security import OAuth2PasswordRequestForm

from ...core.config import Settings
from ...core.security import revoked_tokens
from ...deps import AccessTokenDependency, EntityStoreDependency, SettingsDependency
from ...models import User
from ...schemas import AuthResponse, AuthTokens, RefreshRequest, SignupRequest, UserPublic
from ...services import AuthService
from ...services.auth import TokenPair
from .common import JsonObject, documented_body

router = APIRouter(prefix="/auth", tags=["auth"])


def _build_tokens(token_pair: TokenPair, settings: Settings) -> AuthTokens:
    return AuthTokens(
        access_token=token_pair.access.token,
        refresh_token=token_pair.refresh.token,
        expires_in=settings.access_token_expire_minutes * 60,
        refresh_expires_in=settings.refresh_token_expire_minutes * 60,
    )


def _auth_response(user: User, token_pair: TokenPair, settings: Settings) -> AuthResponse:
    return AuthResponse(
        user=UserPublic.model_validate(user),
        tokens=_build_tokens(token_pair, settings),
    )


@router.post(
    "/signup",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user account",
    openapi_extra=documented_body(SignupRequest),
)
async def signup(
    payload: JsonObject,
    store: EntityStoreDependency,
    settings: SettingsDependency,
) -> AuthResponse:
    service = AuthService(store, settings)
    user = await service.register_user(payload)
    return _auth_response(user, service.build_token_pair(user), settings)


@router.post(
    "/login",
    response_model=AuthResponse,
    summary="Authenticate using username and password",
)
async def login(
    store: EntityStoreDependency,
    settings: SettingsDependency,
    form_data: Annotated[OAuth2PasswordRequestForm, Depends()],
) -> AuthResponse:
    service = AuthService(store, settings)
    user = await service.authenticate_user(form_data.username, form_data.password)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect username or password.",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return _auth_response(user, service.build_token_pair(user), settings)


@router.post(
    "/refresh",
    response_model=AuthResponse,
    summary="Refresh access credentials using a refresh token",
)
async def refresh_tokens(
    payload: RefreshRequest,
    store: EntityStoreDependency,
    settings: SettingsDependency,
) -> AuthResponse:
    service = AuthService(store, settings)
    user, token_pair = await service.refresh_from_token(payload.refresh_token)
    return _auth_response(user, token_pair, settings)


@router.post(
    "/logout",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Revoke the presented access token",
)
async def logout(token_payload: AccessTokenDependency) -> Response:
    revoked_tokens.revoke(token_payload)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
