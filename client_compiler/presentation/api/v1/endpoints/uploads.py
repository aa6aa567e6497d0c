"""Spreadsheet upload endpoints.

Handles single and multi-file uploads of client workbooks, the downloadable
template and management of the stored upload files.
"""

from pathlib import Path

from fastapi import APIRouter, Depends, HTTPException, Request, UploadFile, status
from fastapi.responses import FileResponse

from client_compiler.application.schemas import (
    ClientRecordResponse,
    ClientStatsResponse,
    FileUploadResult,
    MultiUploadResponse,
    UploadedFileListResponse,
    UploadedFileResponse,
    UploadResultResponse,
)
from client_compiler.application.services import ClientRecordService
from client_compiler.config import Settings
from client_compiler.domain.entities import ClientStats
from client_compiler.domain.exceptions import SpreadsheetError
from client_compiler.infrastructure.dependencies import (
    get_app_settings,
    get_client_record_service,
    get_file_storage,
)
from client_compiler.infrastructure.logging.colored_logger import PipelineLogger, PipelineStage
from client_compiler.infrastructure.storage.local_file_storage import (
    SPREADSHEET_SUFFIX,
    LocalFileStorage,
)
from client_compiler.presentation.api.v1.errors import bad_spreadsheet

plog = PipelineLogger("ClientImportPipeline")

router = APIRouter(prefix="/uploads", tags=["Uploads"])

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
TEMPLATE_FILENAME = "plantilla_clientes.xlsx"


def _check_upload(filename: str, content: bytes, settings: Settings) -> str | None:
    """Return the reason an upload is rejected, or None when it is acceptable."""
    if not filename:
        return "No se proporcionó ningún archivo"
    if Path(filename).suffix.lower() != SPREADSHEET_SUFFIX:
        return "Solo se permiten archivos Excel (.xlsx)"
    if not content:
        return "El archivo está vacío"
    if len(content) > settings.max_upload_size_bytes:
        return f"El archivo excede el tamaño máximo de {settings.max_upload_size_mb} MB"
    return None


async def _import_upload(
    upload_file: UploadFile,
    *,
    append: bool,
    service: ClientRecordService,
    storage: LocalFileStorage,
    settings: Settings,
):
    """Store one uploaded workbook and load it into the record store.

    Returns ``(stored_filename, records)``. Rejected uploads raise
    ``HTTPException``; spreadsheet errors remove the stored copy and propagate.
    """
    filename = upload_file.filename or ""
    content = await upload_file.read()

    reason = _check_upload(filename, content, settings)
    if reason:
        plog.step_error(PipelineStage.UPLOAD, f"Upload rejected: {filename!r} ({reason})")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=reason)

    plog.step_start(PipelineStage.UPLOAD, "Upload received", filename=filename, size=len(content))
    stored = await storage.store_file(content, filename)
    plog.step_complete(PipelineStage.STORAGE, "Stored", path=stored.stored_path)

    try:
        records = await service.load_from_spreadsheet(stored.stored_path, append=append)
    except SpreadsheetError as e:
        plog.step_error(PipelineStage.ERROR, f"Import failed: {filename}", error=e)
        await storage.delete_path(stored.stored_path)
        raise

    return stored.filename, records


@router.post("", response_model=UploadResultResponse)
async def upload_spreadsheet(
    file: UploadFile,
    service: ClientRecordService = Depends(get_client_record_service),
    storage: LocalFileStorage = Depends(get_file_storage),
    settings: Settings = Depends(get_app_settings),
) -> UploadResultResponse:
    """Upload a client workbook, replacing the stored clients with its rows."""
    try:
        stored_name, records = await _import_upload(
            file, append=False, service=service, storage=storage, settings=settings
        )
    except SpreadsheetError as e:
        raise bad_spreadsheet(e)

    stats = ClientStats.from_records(records)
    return UploadResultResponse(
        filename=file.filename or stored_name,
        uploaded_file=stored_name,
        total_clients=stats.total,
        valid_clients=stats.valid,
        invalid_clients=stats.invalid,
        stats=ClientStatsResponse.model_validate(stats),
        preview=[
            ClientRecordResponse.model_validate(r)
            for r in records[: settings.preview_size]
        ],
    )


@router.post("/multiple", response_model=MultiUploadResponse)
async def upload_multiple_spreadsheets(
    files: list[UploadFile],
    service: ClientRecordService = Depends(get_client_record_service),
    storage: LocalFileStorage = Depends(get_file_storage),
    settings: Settings = Depends(get_app_settings),
) -> MultiUploadResponse:
    """Upload several workbooks at once.

    The first workbook that loads successfully replaces the stored clients;
    every later one is appended. A failing file is reported in its result
    entry and does not stop the others.
    """
    results: list[FileUploadResult] = []
    loaded_any = False

    for upload_file in files:
        filename = upload_file.filename or ""
        try:
            _, records = await _import_upload(
                upload_file,
                append=loaded_any,
                service=service,
                storage=storage,
                settings=settings,
            )
        except HTTPException as e:
            results.append(FileUploadResult(filename=filename, status="error", message=str(e.detail)))
            continue
        except SpreadsheetError as e:
            results.append(FileUploadResult(filename=filename, status="error", message=e.message))
            continue

        loaded_any = True
        stats = ClientStats.from_records(records)
        results.append(
            FileUploadResult(
                filename=filename,
                status="success",
                total_clients=stats.total,
                valid=stats.valid,
                invalid=stats.invalid,
            )
        )

    # Totals describe the store after every file, since appending revalidates
    # and can turn earlier rows invalid through duplicate keys.
    totals = await service.get_stats()
    return MultiUploadResponse(
        files_processed=len(files),
        results=results,
        total_clients=totals.total,
        total_valid=totals.valid,
        total_invalid=totals.invalid,
    )


@router.get("/template", response_class=FileResponse)
async def download_template(
    service: ClientRecordService = Depends(get_client_record_service),
    settings: Settings = Depends(get_app_settings),
) -> FileResponse:
    """Download an example workbook with the expected columns."""
    template_path = Path(settings.templates_dir) / TEMPLATE_FILENAME
    if not template_path.is_file():
        try:
            await service.create_template(str(template_path))
        except SpreadsheetError as e:
            raise bad_spreadsheet(e)

    return FileResponse(
        path=str(template_path),
        filename=TEMPLATE_FILENAME,
        media_type=XLSX_MEDIA_TYPE,
    )


@router.get("/files", response_model=UploadedFileListResponse)
async def list_uploaded_files(
    request: Request,
    storage: LocalFileStorage = Depends(get_file_storage),
) -> UploadedFileListResponse:
    """List the workbooks kept in the upload directory, newest first."""
    files = [
        UploadedFileResponse(
            name=f.filename,
            size=f.file_size,
            modified_date=f.modified_at,
            download_url=str(request.app.url_path_for("download_uploaded_file", filename=f.filename)),
        )
        for f in storage.list_files()
    ]
    return UploadedFileListResponse(files=files, total=len(files))


@router.get("/files/{filename}", response_class=FileResponse, name="download_uploaded_file")
async def download_uploaded_file(
    filename: str,
    storage: LocalFileStorage = Depends(get_file_storage),
) -> FileResponse:
    """Download a stored upload or export."""
    if not storage.file_exists(filename):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Archivo no encontrado")

    file_path = storage.get_file_path(filename)
    return FileResponse(
        path=str(file_path),
        filename=file_path.name,
        media_type=XLSX_MEDIA_TYPE,
    )


@router.delete("/files/{filename}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_uploaded_file(
    filename: str,
    storage: LocalFileStorage = Depends(get_file_storage),
) -> None:
    deleted = await storage.delete_file(filename)
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Archivo no encontrado")
