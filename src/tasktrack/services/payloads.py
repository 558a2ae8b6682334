"""Validation of raw client payloads against the public schemas."""

from __future__ import annotations

from typing import Any, Mapping, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..errors import ValidationError

SchemaT = TypeVar("SchemaT", bound=BaseModel)


def parse_payload(schema: type[SchemaT], data: Mapping[str, Any] | BaseModel) -> SchemaT:
    """Validate ``data`` as ``schema``, raising the domain ``ValidationError`` on failure."""
    if isinstance(data, schema):
        return data
    if isinstance(data, BaseModel):
        data = data.model_dump(exclude_unset=True)
    try:
        return schema.model_validate(data)
    except PydanticValidationError as exc:
        raise ValidationError.from_pydantic(exc) from exc


__all__ = ["parse_payload"]
