"""Health endpoint reporting whether the entity store answers queries."""

from __future__ import annotations

import logging

import sqlalchemy as sa
from fastapi import APIRouter, Response, status
from sqlalchemy.exc import SQLAlchemyError

from ...deps import DatabaseSessionDependency
from ...schemas.system import HealthCheckResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["system"])


@router.get(
    "/healthz",
    response_model=HealthCheckResponse,
    status_code=status.HTTP_200_OK,
    summary="Health check",
    responses={status.HTTP_503_SERVICE_UNAVAILABLE: {"model": HealthCheckResponse}},
)
async def read_health(session: DatabaseSessionDependency, response: Response) -> HealthCheckResponse:
    """Run a trivial query; answer 503 when the database cannot be reached."""
    try:
        await session.execute(sa.text("SELECT 1"))
    except SQLAlchemyError:
        logger.warning("Health check could not reach the database.", exc_info=True)
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return HealthCheckResponse(status="degraded", database="unavailable")
    return HealthCheckResponse()
