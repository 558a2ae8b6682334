"""Reusable field types and the base class for project/task write payloads."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, model_validator


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _assume_utc(value: datetime | None) -> datetime | None:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _reject_null(value: Any) -> Any:
    if value is None:
        raise ValueError("must not be null")
    return value


# An empty string clears the due date; naive datetimes are taken as UTC.
DueDate = Annotated[
    datetime | None,
    BeforeValidator(_blank_to_none),
    AfterValidator(_assume_utc),
]

# Optional in a partial update, but an explicit ``null`` is rejected.
NotNull = BeforeValidator(_reject_null)

SERVER_MANAGED_FIELDS = frozenset({"id", "user_id", "created_at", "completed_at"})


class WritePayload(BaseModel):
    """Client payload for a create or update.

    Server-maintained fields are dropped before validation so a client can
    send back a record it read; any other unknown field is an error.
    """

    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="before")
    @classmethod
    def _drop_server_managed(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if key not in SERVER_MANAGED_FIELDS}
        return data


__all__ = ["DueDate", "NotNull", "SERVER_MANAGED_FIELDS", "WritePayload"]
