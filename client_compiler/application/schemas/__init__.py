from .client_record import (
    ClientListResponse,
    ClientRecordCreate,
    ClientRecordResponse,
    ClientRecordUpdate,
    ClientSearchResponse,
    ClientStatsResponse,
    ValidationResultResponse,
)
from .uploads import (
    ExportResponse,
    FileUploadResult,
    MultiUploadResponse,
    UploadedFileListResponse,
    UploadedFileResponse,
    UploadResultResponse,
)

__all__ = [
    "ClientRecordCreate",
    "ClientRecordUpdate",
    "ClientRecordResponse",
    "ClientListResponse",
    "ClientSearchResponse",
    "ClientStatsResponse",
    "ValidationResultResponse",
    "UploadResultResponse",
    "FileUploadResult",
    "MultiUploadResponse",
    "UploadedFileResponse",
    "UploadedFileListResponse",
    "ExportResponse",
]
