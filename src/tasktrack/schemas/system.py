"""Response models for the service-level endpoints and the error envelope."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field


class RootResponse(BaseModel):
    """Service metadata, including the limits clients should respect."""

    name: str = Field(description="Human-friendly service name")
    environment: str = Field(description="Deployment environment identifier")
    version: str = Field(description="Semantic version of the service")
    api_prefix: str = Field(description="Base path for API routes")
    max_projects_per_user: int = Field(description="Project quota enforced per account")


class HealthCheckResponse(BaseModel):
    """Liveness of the process and reachability of the entity store."""

    status: Literal["ok", "degraded"] = "ok"
    database: Literal["ok", "unavailable"] = "ok"


class ErrorResponse(BaseModel):
    """Body of every non-2xx response.

    ``details`` carries ``field`` for validation failures and the
    ``request_id`` of the call whenever one was assigned.
    """

    code: str = Field(description="Machine-readable error identifier")
    message: str = Field(description="Human-readable error message")
    details: Any | None = Field(
        default=None,
        description="Structured context such as the offending field and the request id.",
    )
