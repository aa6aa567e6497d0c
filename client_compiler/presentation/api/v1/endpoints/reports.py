"""Export and statistics endpoints."""

from fastapi import APIRouter, Depends, Query, Request

from client_compiler.application.schemas import ClientStatsResponse, ExportResponse
from client_compiler.application.services import ClientRecordService
from client_compiler.domain.exceptions import SpreadsheetError
from client_compiler.infrastructure.dependencies import (
    get_client_record_service,
    get_file_storage,
)
from client_compiler.infrastructure.storage.local_file_storage import LocalFileStorage
from client_compiler.presentation.api.v1.errors import bad_spreadsheet

router = APIRouter(tags=["Reports"])


@router.get("/export", response_model=ExportResponse)
async def export_clients(
    request: Request,
    filename: str | None = Query(None, description="Export name; .xlsx is appended when missing"),
    service: ClientRecordService = Depends(get_client_record_service),
    storage: LocalFileStorage = Depends(get_file_storage),
) -> ExportResponse:
    """Write every stored client to a workbook in the upload directory."""
    export_path = storage.export_path(filename)
    try:
        await service.export_to_spreadsheet(str(export_path))
    except SpreadsheetError as e:
        raise bad_spreadsheet(e)

    return ExportResponse(
        filename=export_path.name,
        file_path=str(export_path),
        file_url=str(request.app.url_path_for("download_uploaded_file", filename=export_path.name)),
    )


@router.get("/stats", response_model=ClientStatsResponse)
async def client_stats(
    service: ClientRecordService = Depends(get_client_record_service),
) -> ClientStatsResponse:
    stats = await service.get_stats()
    return ClientStatsResponse.model_validate(stats)
