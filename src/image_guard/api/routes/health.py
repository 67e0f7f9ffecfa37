"""Health check endpoints."""

from fastapi import APIRouter

from image_guard.api.dependencies import AppSettings, Storage
from image_guard.api.schemas.health import HealthResponse, ReadinessResponse

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(settings: AppSettings) -> HealthResponse:
    """Basic health check endpoint."""
    return HealthResponse(
        status="healthy",
        version=settings.app_version,
    )


@router.get("/health/ready", response_model=ReadinessResponse)
async def readiness_check(storage: Storage) -> ReadinessResponse:
    """Readiness probe checking the storage bucket."""
    storage_status = "healthy"
    try:
        await storage.check_bucket()
    except Exception as e:
        storage_status = f"unhealthy: {str(e)[:100]}"

    return ReadinessResponse(
        status="ready" if storage_status == "healthy" else "degraded",
        storage=storage_status,
    )
