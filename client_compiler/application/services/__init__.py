from .client_record_service import ClientRecordService
from .validation_service import ValidationService

__all__ = [
    "ClientRecordService",
    "ValidationService",
]
