"""Validation endpoints: revalidate the stored clients or check a single payload."""

from fastapi import APIRouter, Depends

from client_compiler.application.schemas import (
    ClientRecordCreate,
    ClientRecordResponse,
    ClientStatsResponse,
    ValidationResultResponse,
)
from client_compiler.application.services import ClientRecordService, ValidationService
from client_compiler.infrastructure.dependencies import get_client_record_service

router = APIRouter(prefix="/validate", tags=["Validation"])


@router.post("", response_model=ValidationResultResponse)
async def validate_all_clients(
    service: ClientRecordService = Depends(get_client_record_service),
) -> ValidationResultResponse:
    """Revalidate every stored client, including duplicate-key detection."""
    records = await service.validate_all()
    stats = ValidationService.get_validation_stats(records)
    return ValidationResultResponse(
        clients=[ClientRecordResponse.model_validate(r) for r in records],
        stats=ClientStatsResponse.model_validate(stats),
    )


@router.post("/single", response_model=ClientRecordResponse)
async def validate_single_client(
    data: ClientRecordCreate,
    service: ClientRecordService = Depends(get_client_record_service),
) -> ClientRecordResponse:
    """Validate one client without storing it."""
    record = await service.validate_single(data)
    return ClientRecordResponse.model_validate(record)
