"""Helpers shared by the authenticated routers."""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import Body, HTTPException, status
from pydantic import BaseModel

from ...models import User

# Write bodies reach the services unvalidated; the services check them against
# the schema only after ownership and quota checks have passed.
JsonObject = Annotated[dict[str, Any], Body()]


def documented_body(schema: type[BaseModel]) -> dict[str, Any]:
    """``openapi_extra`` advertising ``schema`` as the JSON request body."""
    return {
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": schema.model_json_schema()}},
        }
    }


def require_user_id(user: User) -> int:
    if user.id is None:  # pragma: no cover - persisted users always have an id
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Authenticated user is missing an identifier.",
        )
    return user.id


__all__ = ["JsonObject", "documented_body", "require_user_id"]
