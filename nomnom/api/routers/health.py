"""
Health check API endpoints.

Routes: GET /health, GET /health/vector-store

Dependencies: nomnom.application.service_context
System role: Health check HTTP API
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from nomnom.api.deps import get_service_context
from nomnom.application.service_context import ServiceContext
from nomnom.core.exceptions import UpstreamUnavailableError
from nomnom.models.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic health check."""
    return HealthResponse(status="healthy", message="Server Healthy")


@router.get("/vector-store", response_model=HealthResponse)
async def health_check_vector_store(
    context: ServiceContext = Depends(get_service_context),
):
    """Vector store health check."""
    try:
        await context.index.verify_connectivity()
    except UpstreamUnavailableError as e:
        logger.warning(f"{__name__}:health_check_vector_store - {e.message}")
        return JSONResponse(
            status_code=503,
            content=HealthResponse(status="unhealthy", message=e.message).model_dump(),
        )
    return HealthResponse(status="healthy", message="Vector store accessible")
