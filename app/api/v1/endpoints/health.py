"""Health check endpoints for monitoring and orchestration."""
from fastapi import APIRouter, status, Response
from app.schemas.health import (
    HealthCheckResponse,
    LivenessResponse,
    ReadinessResponse
)
from app.schemas.response import ApiResponse
from app.services.health import HealthCheckService

router = APIRouter()

health_service = HealthCheckService()


@router.get(
    "/health",
    response_model=HealthCheckResponse,
    status_code=status.HTTP_200_OK,
    summary="Comprehensive Health Check",
    description="Get detailed health status of all application components"
)
async def health_check():
    """
    Comprehensive health check endpoint.

    Reports database connectivity, system resources (CPU, memory, disk),
    configuration validity (LLM key, email provider) and uptime.
    """
    return await health_service.get_comprehensive_health()


@router.get(
    "/health/live",
    response_model=LivenessResponse,
    status_code=status.HTTP_200_OK,
    summary="Liveness Probe"
)
async def liveness_probe():
    """Returns 200 whenever the process is serving requests."""
    if health_service.check_liveness():
        return LivenessResponse(status="alive")


@router.get(
    "/health/ready",
    response_model=ReadinessResponse,
    summary="Readiness Probe",
    description="Check if the application is ready to serve traffic"
)
async def readiness_probe(response: Response):
    """Returns 200 when the database answers, 503 otherwise."""
    is_ready, checks = await health_service.check_readiness()

    if is_ready:
        return ReadinessResponse(status="ready", checks=checks)

    response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return ReadinessResponse(status="not_ready", checks=checks)


@router.get(
    "/health/status",
    response_model=ApiResponse,
    status_code=status.HTTP_200_OK,
    summary="Simple Health Status"
)
async def simple_health_status():
    """Overall status in the standard ApiResponse envelope."""
    health = await health_service.get_comprehensive_health()

    return ApiResponse(
        success=health.status == "healthy",
        message=f"System is {health.status}",
        data={
            "status": health.status,
            "uptime_seconds": health.uptime_seconds,
            "version": health.version,
            "timestamp": health.timestamp.isoformat()
        }
    )
