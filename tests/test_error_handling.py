import logging

import pytest
from fastapi import FastAPI, status
from httpx import ASGITransport, AsyncClient
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError

from tasktrack.core.logging import RequestContextFilter
from tasktrack.errors import (
    ApplicationError,
    ForbiddenError,
    QuotaExceededError,
    ValidationError,
)
from tasktrack.main import create_app

pytestmark = pytest.mark.asyncio


@pytest.fixture()
def bare_app() -> FastAPI:
    return create_app()


def _client(app: FastAPI, *, raise_app_exceptions: bool = True) -> AsyncClient:
    transport = ASGITransport(app=app, raise_app_exceptions=raise_app_exceptions)
    return AsyncClient(transport=transport, base_url="http://test")


async def test_application_error_response_schema(bare_app: FastAPI) -> None:
    @bare_app.get("/error/application")
    async def trigger_application_error() -> None:  # pragma: no cover - defined in test
        raise ApplicationError(
            "Example failure",
            code="example_error",
            status_code=status.HTTP_418_IM_A_TEAPOT,
            details={"foo": "bar"},
        )

    async with _client(bare_app) as client:
        response = await client.get("/error/application")

    assert response.status_code == status.HTTP_418_IM_A_TEAPOT
    payload = response.json()
    request_id = response.headers["X-Request-ID"]
    assert payload == {
        "code": "example_error",
        "message": "Example failure",
        "details": {"foo": "bar", "request_id": request_id},
    }


@pytest.mark.parametrize(
    ("error", "expected_status", "expected_code"),
    [
        (ValidationError("Bad title.", field="title"), status.HTTP_422_UNPROCESSABLE_ENTITY, "validation_error"),
        (ForbiddenError(), status.HTTP_403_FORBIDDEN, "forbidden"),
        (QuotaExceededError(), status.HTTP_409_CONFLICT, "quota_exceeded"),
    ],
)
async def test_domain_errors_are_distinguishable(
    bare_app: FastAPI,
    error: ApplicationError,
    expected_status: int,
    expected_code: str,
) -> None:
    @bare_app.get("/error/domain")
    async def trigger_domain_error() -> None:  # pragma: no cover - defined in test
        raise error

    async with _client(bare_app) as client:
        response = await client.get("/error/domain")

    assert response.status_code == expected_status
    assert response.json()["code"] == expected_code


async def test_validation_error_exposes_field(bare_app: FastAPI) -> None:
    @bare_app.get("/error/field")
    async def trigger_field_error() -> None:  # pragma: no cover - defined in test
        raise ValidationError("title is required.", field="title")

    async with _client(bare_app) as client:
        response = await client.get("/error/field")

    payload = response.json()
    assert payload["message"] == "title is required."
    assert payload["details"]["field"] == "title"


async def test_request_validation_error_response_schema(bare_app: FastAPI) -> None:
    class ExamplePayload(BaseModel):
        name: str

    @bare_app.post("/error/validation")
    async def create_item(_: ExamplePayload) -> None:  # pragma: no cover - defined in test
        return None

    async with _client(bare_app) as client:
        response = await client.post("/error/validation", json={})

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    payload = response.json()
    request_id = response.headers["X-Request-ID"]
    assert payload["code"] == "validation_error"
    assert payload["details"]["field"] == "name"
    assert payload["message"].startswith("name: ")
    assert "errors" in payload["details"]
    assert payload["details"]["request_id"] == request_id


async def test_unknown_route_response_schema(bare_app: FastAPI) -> None:
    async with _client(bare_app) as client:
        response = await client.get("/error/not-found")

    assert response.status_code == status.HTTP_404_NOT_FOUND
    payload = response.json()
    assert payload["code"] == "not_found"
    assert payload["message"]
    assert payload["details"]["request_id"] == response.headers["X-Request-ID"]


async def test_incoming_request_id_is_echoed(bare_app: FastAPI) -> None:
    async with _client(bare_app) as client:
        response = await client.get("/api/metadata", headers={"X-Request-ID": "trace-123"})

    assert response.status_code == status.HTTP_200_OK
    assert response.headers["X-Request-ID"] == "trace-123"


async def test_store_failure_is_an_opaque_server_error(bare_app: FastAPI) -> None:
    @bare_app.get("/error/database")
    async def trigger_integrity_error() -> None:  # pragma: no cover - defined in test
        raise IntegrityError("INSERT INTO projects", {}, Exception("constraint projects_user_id_fkey"))

    async with _client(bare_app) as client:
        response = await client.get("/error/database")

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    payload = response.json()
    assert payload == {
        "code": "server_error",
        "message": "Internal server error.",
        "details": {"request_id": response.headers["X-Request-ID"]},
    }
    assert "projects" not in response.text
    assert "constraint" not in response.text


async def test_unhandled_error_hides_internal_details(bare_app: FastAPI) -> None:
    @bare_app.get("/error/unhandled")
    async def trigger_unhandled_error() -> None:  # pragma: no cover - defined in test
        raise RuntimeError("Sensitive detail")

    async with _client(bare_app, raise_app_exceptions=False) as client:
        response = await client.get("/error/unhandled")

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    payload = response.json()
    request_id = response.headers["X-Request-ID"]
    assert payload == {
        "code": "server_error",
        "message": "Internal server error.",
        "details": {"request_id": request_id},
    }
    assert "Sensitive" not in response.text


class _InMemoryHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__(level=logging.INFO)
        self.records: list[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)


async def test_request_id_attached_to_logs(bare_app: FastAPI) -> None:
    logger = logging.getLogger("tests.error_handling")
    handler = _InMemoryHandler()
    handler.addFilter(RequestContextFilter())
    logger.addHandler(handler)
    original_level = logger.level
    logger.setLevel(logging.INFO)

    @bare_app.get("/log")
    async def emit_log() -> dict[str, str]:  # pragma: no cover - defined in test
        logger.info("Log entry")
        return {"status": "ok"}

    try:
        async with _client(bare_app) as client:
            response = await client.get("/log")
    finally:
        logger.removeHandler(handler)
        logger.setLevel(original_level)
        handler.close()

    request_id = response.headers["X-Request-ID"]
    matching = [record for record in handler.records if record.getMessage() == "Log entry"]
    assert matching
    assert getattr(matching[0], "request_id", None) == request_id


async def test_validation_error_built_from_pydantic_names_first_field() -> None:
    class Sample(BaseModel):
        title: str = Field(min_length=1)
        priority: int

    with pytest.raises(PydanticValidationError) as excinfo:
        Sample.model_validate({"title": "", "priority": "high"})

    error = ValidationError.from_pydantic(excinfo.value)

    assert error.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    assert error.field == "title"
    assert error.details["field"] == "title"
    assert [entry["loc"] for entry in error.details["errors"]] == [["title"], ["priority"]]
    assert error.message.startswith("title: ")
