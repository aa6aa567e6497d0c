"""Pydantic schemas for spreadsheet upload, listing and export endpoints."""

from datetime import datetime

from pydantic import BaseModel

from .client_record import ClientRecordResponse, ClientStatsResponse


class UploadResultResponse(BaseModel):
    filename: str
    uploaded_file: str
    total_clients: int
    valid_clients: int
    invalid_clients: int
    stats: ClientStatsResponse
    preview: list[ClientRecordResponse]


class FileUploadResult(BaseModel):
    """Outcome for one file of a multi-file upload."""

    filename: str
    status: str  # "success" | "error"
    message: str | None = None
    total_clients: int = 0
    valid: int = 0
    invalid: int = 0


class MultiUploadResponse(BaseModel):
    files_processed: int
    results: list[FileUploadResult]
    total_clients: int
    total_valid: int
    total_invalid: int


class UploadedFileResponse(BaseModel):
    name: str
    size: int
    modified_date: datetime
    download_url: str


class UploadedFileListResponse(BaseModel):
    files: list[UploadedFileResponse]
    total: int


class ExportResponse(BaseModel):
    filename: str
    file_path: str
    file_url: str
