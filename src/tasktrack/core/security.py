"""Password hashing and the access/refresh JWT pair issued to TaskTrack users.

Access tokens authenticate API calls and are signed with ``jwt_secret_key``;
refresh tokens are signed with ``jwt_refresh_secret_key`` and can only be
exchanged once. Revocation is tracked per process by token id (``jti``).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from threading import Lock
from uuid import uuid4

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext
from pydantic import ValidationError as PydanticValidationError

from ..schemas.auth import TokenPayload, TokenType
from .config import Settings

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class InvalidTokenError(Exception):
    """A presented token was malformed, expired, of the wrong kind or revoked."""


@dataclass(slots=True)
class IssuedToken:
    token: str
    jti: str
    expires_at: datetime


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def _signing_key(token_type: TokenType, settings: Settings) -> str:
    if token_type is TokenType.ACCESS:
        return settings.jwt_secret_key
    return settings.jwt_refresh_secret_key


def _lifetime(token_type: TokenType, settings: Settings) -> timedelta:
    if token_type is TokenType.ACCESS:
        return timedelta(minutes=settings.access_token_expire_minutes)
    return timedelta(minutes=settings.refresh_token_expire_minutes)


def issue_token(user_id: int, token_type: TokenType, settings: Settings) -> IssuedToken:
    """Sign a token of ``token_type`` whose subject is ``user_id``."""
    now = datetime.now(timezone.utc)
    expires_at = now + _lifetime(token_type, settings)
    jti = uuid4().hex
    claims = {
        "sub": str(user_id),
        "iss": settings.project_name,
        "iat": now,
        "exp": expires_at,
        "type": token_type.value,
        "jti": jti,
    }
    token = jwt.encode(claims, _signing_key(token_type, settings), algorithm=settings.jwt_algorithm)
    return IssuedToken(token=token, jti=jti, expires_at=expires_at)


def read_token(token: str, token_type: TokenType, settings: Settings) -> TokenPayload:
    """Verify ``token`` as a live token of ``token_type`` and return its claims.

    Raises ``InvalidTokenError`` with a client-safe message otherwise.
    """
    label = token_type.value.capitalize()
    try:
        claims = jwt.decode(
            token,
            _signing_key(token_type, settings),
            algorithms=[settings.jwt_algorithm],
            issuer=settings.project_name,
        )
    except ExpiredSignatureError as exc:
        raise InvalidTokenError(f"{label} token has expired.") from exc
    except JWTError as exc:
        raise InvalidTokenError(f"Invalid {token_type.value} token.") from exc

    try:
        payload = TokenPayload.model_validate(claims)
    except PydanticValidationError as exc:
        raise InvalidTokenError(f"Invalid {token_type.value} token.") from exc
    if payload.type is not token_type:
        raise InvalidTokenError("Invalid token type.")
    if revoked_tokens.is_revoked(payload.jti):
        raise InvalidTokenError(f"{label} token has been revoked.")
    return payload


class RevokedTokens:
    """Token ids revoked by logout or refresh rotation, kept until they expire."""

    def __init__(self) -> None:
        self._expiry_by_jti: dict[str, datetime] = {}
        self._lock = Lock()

    def revoke(self, payload: TokenPayload) -> None:
        expires_at = payload.exp
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=timezone.utc)
        with self._lock:
            self._purge_locked()
            self._expiry_by_jti[payload.jti] = expires_at

    def is_revoked(self, jti: str) -> bool:
        with self._lock:
            self._purge_locked()
            return jti in self._expiry_by_jti

    def clear(self) -> None:
        with self._lock:
            self._expiry_by_jti.clear()

    def _purge_locked(self) -> None:
        now = datetime.now(timezone.utc)
        for jti in [jti for jti, expiry in self._expiry_by_jti.items() if expiry <= now]:
            del self._expiry_by_jti[jti]


revoked_tokens = RevokedTokens()


__all__ = [
    "InvalidTokenError",
    "IssuedToken",
    "RevokedTokens",
    "hash_password",
    "issue_token",
    "read_token",
    "revoked_tokens",
    "verify_password",
]
