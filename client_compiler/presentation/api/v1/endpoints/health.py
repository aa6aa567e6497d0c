"""Health check endpoint, always available."""

from fastapi import APIRouter, Depends

from client_compiler.application.services import ClientRecordService
from client_compiler.config import Settings
from client_compiler.infrastructure.dependencies import (
    get_app_settings,
    get_client_record_service,
)

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check(
    settings: Settings = Depends(get_app_settings),
    service: ClientRecordService = Depends(get_client_record_service),
) -> dict:
    """Returns the current application health status."""
    return {
        "status": "healthy",
        "version": settings.app_version,
        "environment": settings.app_env,
        "clients_loaded": await service.count(),
    }
