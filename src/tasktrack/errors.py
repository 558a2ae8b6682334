"""Application-level exceptions and their HTTP rendering."""

from __future__ import annotations

import logging
from contextvars import Token
from http import HTTPStatus
from typing import Any, Mapping, Sequence

from fastapi import FastAPI, status
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.requests import Request

from .core.context import REQUEST_ID_HEADER, bind_request_id, reset_request_id
from .schemas.system import ErrorResponse

logger = logging.getLogger(__name__)


class ApplicationError(Exception):
    """Base class for domain-specific errors."""

    def __init__(
        self,
        message: str,
        *,
        code: str = "application_error",
        status_code: int = status.HTTP_400_BAD_REQUEST,
        details: Any | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details


class NotFoundError(ApplicationError):
    """The referenced entity does not exist."""

    def __init__(
        self,
        message: str = "Resource not found.",
        *,
        code: str = "not_found",
        details: Any | None = None,
    ) -> None:
        super().__init__(
            message,
            code=code,
            status_code=status.HTTP_404_NOT_FOUND,
            details=details,
        )


class ForbiddenError(ApplicationError):
    """The entity exists but belongs to another principal."""

    def __init__(
        self,
        message: str = "You are not permitted to access this resource.",
        *,
        code: str = "forbidden",
        details: Any | None = None,
    ) -> None:
        super().__init__(
            message,
            code=code,
            status_code=status.HTTP_403_FORBIDDEN,
            details=details,
        )


class ValidationError(ApplicationError):
    """Input was malformed or out of range.

    ``field`` names the offending input and is exposed in ``details``.
    """

    def __init__(
        self,
        message: str = "Validation failed.",
        *,
        field: str | None = None,
        code: str = "validation_error",
        details: Any | None = None,
    ) -> None:
        if field is not None:
            details = {**(details or {}), "field": field}
        super().__init__(
            message,
            code=code,
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            details=details,
        )
        self.field = field

    @classmethod
    def from_errors(cls, errors: Sequence[Mapping[str, Any]]) -> "ValidationError":
        """Build from pydantic-style error dicts, naming the first offending field."""
        first = errors[0] if errors else {}
        field = _field_from_loc(first.get("loc", ()))
        reason = first.get("msg", "Invalid value.")
        message = f"{field}: {reason}" if field else reason
        return cls(message, field=field, details={"errors": jsonable_encoder(list(errors))})

    @classmethod
    def from_pydantic(cls, exc: PydanticValidationError) -> "ValidationError":
        return cls.from_errors(
            exc.errors(include_url=False, include_context=False, include_input=False)
        )


_LOCATION_PREFIXES = frozenset({"body", "query", "path", "header", "cookie"})


def _field_from_loc(loc: Sequence[Any]) -> str | None:
    parts = list(loc)
    if parts and parts[0] in _LOCATION_PREFIXES:
        parts = parts[1:]
    for part in parts:
        if isinstance(part, str):
            return part
    return None


class QuotaExceededError(ApplicationError):
    """The principal already owns the maximum number of projects."""

    def __init__(
        self,
        message: str = "Project limit reached.",
        *,
        code: str = "quota_exceeded",
        details: Any | None = None,
    ) -> None:
        super().__init__(
            message,
            code=code,
            status_code=status.HTTP_409_CONFLICT,
            details=details,
        )


class ServerError(ApplicationError):
    """Opaque internal failure; carries no detail about its cause."""

    def __init__(
        self,
        message: str = "Internal server error.",
        *,
        code: str = "server_error",
        details: Any | None = None,
    ) -> None:
        super().__init__(
            message,
            code=code,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details=details,
        )


_HTTP_STATUS_CODE_MAP: dict[int, str] = {
    status.HTTP_400_BAD_REQUEST: "bad_request",
    status.HTTP_401_UNAUTHORIZED: "unauthorized",
    status.HTTP_403_FORBIDDEN: "forbidden",
    status.HTTP_404_NOT_FOUND: "not_found",
    status.HTTP_405_METHOD_NOT_ALLOWED: "method_not_allowed",
    status.HTTP_409_CONFLICT: "conflict",
}


def _bind_request_context(request: Request) -> Token[str] | None:
    request_id = getattr(request.state, "request_id", None)
    if not request_id:
        return None
    return bind_request_id(request_id)


def _reset_request_context(token: Token[str] | None) -> None:
    if token is not None:
        reset_request_id(token)


def _merge_details_with_request(request: Request, details: Any | None) -> Any | None:
    request_id = getattr(request.state, "request_id", None)
    if not request_id:
        return details
    if details is None:
        return {"request_id": request_id}
    if isinstance(details, dict):
        return {**details, "request_id": details.get("request_id", request_id)}
    return {"request_id": request_id, "detail": details}


def _error_response(
    request: Request,
    *,
    status_code: int,
    code: str,
    message: str,
    details: Any | None = None,
    headers: Mapping[str, str] | None = None,
) -> JSONResponse:
    payload = ErrorResponse(
        code=code,
        message=message,
        details=_merge_details_with_request(request, details),
    )
    response = JSONResponse(status_code=status_code, content=jsonable_encoder(payload))
    if headers:
        response.headers.update(headers)
    request_id = getattr(request.state, "request_id", None)
    if request_id:
        response.headers.setdefault(REQUEST_ID_HEADER, request_id)
    return response


def _http_exception_details(status_code: int, detail: Any) -> tuple[str, Any | None]:
    if isinstance(detail, str):
        return detail, None
    try:
        status_phrase = HTTPStatus(status_code).phrase
    except ValueError:
        status_phrase = "Error"
    if detail is None:
        return status_phrase, None
    if isinstance(detail, list):
        return status_phrase, {"errors": detail}
    return status_phrase, detail


def _render(
    request: Request,
    exc: ApplicationError,
    headers: Mapping[str, str] | None = None,
) -> JSONResponse:
    return _error_response(
        request,
        status_code=exc.status_code,
        code=exc.code,
        message=exc.message,
        details=exc.details,
        headers=headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Render every failure as the ``ErrorResponse`` envelope."""

    @app.exception_handler(ApplicationError)
    async def _handle_application_error(
        request: Request,
        exc: ApplicationError,
    ) -> JSONResponse:
        token = _bind_request_context(request)
        try:
            log = logger.error if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR else logger.warning
            log(
                "Application error encountered",
                extra={"code": exc.code, "status_code": exc.status_code},
            )
            return _render(request, exc)
        finally:
            _reset_request_context(token)

    @app.exception_handler(RequestValidationError)
    async def _handle_request_validation_error(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        token = _bind_request_context(request)
        try:
            error = ValidationError.from_errors(exc.errors())
            logger.warning("Request validation failed", extra={"field": error.field})
            return _render(request, error)
        finally:
            _reset_request_context(token)

    @app.exception_handler(SQLAlchemyError)
    async def _handle_store_error(
        request: Request,
        exc: SQLAlchemyError,
    ) -> JSONResponse:
        token = _bind_request_context(request)
        try:
            # Constraint names and SQL never reach the client.
            logger.error("Entity store operation failed.", exc_info=exc)
            return _render(request, ServerError())
        finally:
            _reset_request_context(token)

    @app.exception_handler(StarletteHTTPException)
    async def _handle_http_exception(
        request: Request,
        exc: StarletteHTTPException,
    ) -> JSONResponse:
        token = _bind_request_context(request)
        try:
            code = _HTTP_STATUS_CODE_MAP.get(exc.status_code, "http_error")
            message, extra_details = _http_exception_details(exc.status_code, exc.detail)
            log = logger.error if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR else logger.warning
            log(
                "HTTP exception raised",
                extra={"code": code, "status_code": exc.status_code, "path": str(request.url.path)},
            )
            return _error_response(
                request,
                status_code=exc.status_code,
                code=code,
                message=message,
                details=extra_details,
                headers=exc.headers or None,
            )
        finally:
            _reset_request_context(token)

    @app.exception_handler(Exception)
    async def _handle_unhandled_exception(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        token = _bind_request_context(request)
        try:
            logger.exception("Unhandled application error.")
            return _render(request, ServerError())
        finally:
            _reset_request_context(token)


__all__ = [
    "ApplicationError",
    "ForbiddenError",
    "NotFoundError",
    "QuotaExceededError",
    "ServerError",
    "ValidationError",
    "register_exception_handlers",
]
