from .client_record_repository import InMemoryClientRecordRepository
from .rw_lock import ReadWriteLock

__all__ = [
    "InMemoryClientRecordRepository",
    "ReadWriteLock",
]
