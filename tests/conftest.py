from __future__ import annotations

import os

os.environ.setdefault("TASKTRACK_ENVIRONMENT", "test")
os.environ.setdefault("TASKTRACK_DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("TASKTRACK_CREATE_SCHEMA_ON_STARTUP", "false")

from collections.abc import AsyncIterator, Awaitable, Callable, Iterator
from dataclasses import dataclass
from itertools import count

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from tasktrack import models  # noqa: F401  register table metadata
from tasktrack.core.config import get_settings
from tasktrack.core.security import revoked_tokens
from tasktrack.deps import get_db_session
from tasktrack.main import create_app
from tasktrack.models import User
from tasktrack.repositories import EntityStore
from tasktrack.services import UserService


@dataclass(slots=True)
class AuthenticatedUser:
    user: User
    username: str
    password: str
    tokens: dict[str, str] | None

    @property
    def id(self) -> int:
        if self.user.id is None:  # pragma: no cover - persisted users always have an id
            raise RuntimeError("Persisted user is missing an id.")
        return self.user.id

    @property
    def headers(self) -> dict[str, str]:
        if not self.tokens:
            raise RuntimeError("User has not been authenticated.")
        return {"Authorization": f"Bearer {self.tokens['access_token']}"}

    @property
    def refresh_token(self) -> str:
        if not self.tokens:
            raise RuntimeError("User has not been authenticated.")
        return self.tokens["refresh_token"]


UserFactory = Callable[..., Awaitable[AuthenticatedUser]]


@pytest.fixture(autouse=True)
def _reset_revoked_tokens() -> Iterator[None]:
    revoked_tokens.clear()
    yield
    revoked_tokens.clear()


@pytest_asyncio.fixture
async def engine() -> AsyncIterator[AsyncEngine]:
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as connection:
        await connection.run_sync(SQLModel.metadata.create_all)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest_asyncio.fixture
async def session(engine: AsyncEngine) -> AsyncIterator[AsyncSession]:
    async_session_factory = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    async with async_session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def store(session: AsyncSession) -> EntityStore:
    return EntityStore(session)


@pytest_asyncio.fixture
async def app(session: AsyncSession) -> AsyncIterator[FastAPI]:
    get_settings.cache_clear()
    application = create_app()

    async def _override_db_session() -> AsyncIterator[AsyncSession]:
        yield session

    application.dependency_overrides[get_db_session] = _override_db_session
    try:
        yield application
    finally:
        application.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as http_client:
        yield http_client


@pytest_asyncio.fixture
async def authenticated_user(
    store: EntityStore,
    client: AsyncClient,
) -> AsyncIterator[UserFactory]:
    user_service = UserService(store)
    counter = count()

    async def _factory(
        *,
        username: str | None = None,
        password: str = "StrongPass123!",
        login: bool = True,
    ) -> AuthenticatedUser:
        actual_username = username or f"user{next(counter)}"
        user = await user_service.create_user(
            {"username": actual_username, "password": password}
        )
        tokens: dict[str, str] | None = None
        if login:
            response = await client.post(
                "/api/auth/login",
                data={"username": actual_username, "password": password},
            )
            assert response.status_code == 200, response.text
            tokens = response.json()["tokens"]
        return AuthenticatedUser(
            user=user,
            username=actual_username,
            password=password,
            tokens=tokens,
        )

    yield _factory
