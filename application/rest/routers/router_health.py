from datetime import datetime, timezone

from application.rest.schemas.output.common_output import (
    ErrorResponse,
    HealthResponse,
    ServiceInfoResponse,
)
from fastapi import APIRouter, status
from utils.config import API_PREFIX

SERVICE_NAME = "Task Manager API"
SERVICE_VERSION = "1.0.0"

router = APIRouter()


@router.get(
    path="/",
    description="Service banner with the available endpoints.",
    response_model=ServiceInfoResponse,
    status_code=status.HTTP_200_OK,
)
async def service_info() -> ServiceInfoResponse:
    return ServiceInfoResponse(
        name=SERVICE_NAME,
        version=SERVICE_VERSION,
        status="running",
        endpoints={
            "health": "/health",
            "tasks": f"{API_PREFIX}/tasks",
            "tags": f"{API_PREFIX}/tags",
        },
    )


@router.get(
    path="/health",
    description="Health check endpoint for service monitoring and availability.",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_200_OK: {
            "model": HealthResponse,
            "description": "Service is healthy and operational.",
        },
        status.HTTP_500_INTERNAL_SERVER_ERROR: {
            "model": ErrorResponse,
            "description": "Internal server error - service unavailable.",
        },
    },
)
async def health_check() -> HealthResponse:
    """Health check endpoint for service monitoring.

    Returns:
        HealthResponse: Service status and the current server time.

    Example:
        >>> response = await health_check()
        >>> print(response.status)
        "ok"
    """
    return HealthResponse(status="ok", timestamp=datetime.now(timezone.utc))
