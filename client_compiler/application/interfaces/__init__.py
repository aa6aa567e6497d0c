from .client_record_repository import ClientRecordRepository
from .client_spreadsheet import EXPECTED_HEADERS, ClientSpreadsheet

__all__ = [
    "ClientRecordRepository",
    "ClientSpreadsheet",
    "EXPECTED_HEADERS",
]
