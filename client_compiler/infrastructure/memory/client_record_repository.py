"""In-memory implementation of the ClientRecordRepository port.

Records live in a dict keyed by id for the lifetime of the instance. A single
reader/writer lock guards the dict and the id counter; no call holds it
longer than one full scan of the collection.
"""

from datetime import datetime, timezone

from client_compiler.application.interfaces import ClientRecordRepository
from client_compiler.domain.entities import ClientFilter, ClientRecord
from client_compiler.domain.exceptions import DuplicateEntityError, EntityNotFoundError
from client_compiler.infrastructure.memory.rw_lock import ReadWriteLock

_ENTITY = "ClientRecord"


class InMemoryClientRecordRepository(ClientRecordRepository):
    """Thread-safe process-local record store."""

    def __init__(self) -> None:
        self._records: dict[int, ClientRecord] = {}
        self._last_id = 0
        self._lock = ReadWriteLock()

    # ── Single-record operations ────────────────────────────────────

    def create(self, record: ClientRecord) -> ClientRecord:
        with self._lock.write_locked():
            if record.normalized_clave and self._holder_of(record.normalized_clave) is not None:
                raise DuplicateEntityError(_ENTITY, "clave", record.clave)
            self._insert(record)
            return record

    def get_by_id(self, record_id: int) -> ClientRecord:
        with self._lock.read_locked():
            record = self._records.get(record_id)
        if record is None:
            raise EntityNotFoundError(_ENTITY, record_id)
        return record

    def get_by_clave(self, clave: str) -> ClientRecord:
        with self._lock.read_locked():
            record = self._holder_of(clave.strip())
        if record is None:
            raise EntityNotFoundError(_ENTITY, clave)
        return record

    def get_all(self) -> list[ClientRecord]:
        with self._lock.read_locked():
            return list(self._records.values())

    def update(self, record_id: int, record: ClientRecord) -> ClientRecord:
        with self._lock.write_locked():
            existing = self._records.get(record_id)
            if existing is None:
                raise EntityNotFoundError(_ENTITY, record_id)

            if record.normalized_clave and self._holder_of(
                record.normalized_clave, exclude_id=record_id
            ):
                raise DuplicateEntityError(_ENTITY, "clave", record.clave)

            record.id = existing.id
            record.created_at = existing.created_at
            record.row_number = existing.row_number
            record.touch()
            self._records[record_id] = record
            return record

    def delete(self, record_id: int) -> None:
        with self._lock.write_locked():
            if record_id not in self._records:
                raise EntityNotFoundError(_ENTITY, record_id)
            del self._records[record_id]

    def clear(self) -> None:
        with self._lock.write_locked():
            self._records = {}
            self._last_id = 0

    def count(self) -> int:
        with self._lock.read_locked():
            return len(self._records)

    # ── Queries ─────────────────────────────────────────────────────

    def find_by_filter(self, record_filter: ClientFilter) -> list[ClientRecord]:
        with self._lock.read_locked():
            matches = [r for r in self._records.values() if record_filter.matches(r)]
        return record_filter.paginate(matches)

    def count_by_filter(self, record_filter: ClientFilter) -> int:
        with self._lock.read_locked():
            return sum(1 for r in self._records.values() if record_filter.matches(r))

    def get_duplicate_keys(self) -> dict[str, list[int]]:
        holders: dict[str, list[int]] = {}
        with self._lock.read_locked():
            for record in self._records.values():
                if record.normalized_clave:
                    holders.setdefault(record.normalized_clave, []).append(record.id)
        return {key: ids for key, ids in holders.items() if len(ids) > 1}

    # ── Batch operations ────────────────────────────────────────────

    def batch_create(self, records: list[ClientRecord]) -> list[ClientRecord]:
        with self._lock.write_locked():
            for record in records:
                self._insert(record)
        return list(records)

    def batch_update(self, records: list[ClientRecord]) -> list[ClientRecord]:
        updated: list[ClientRecord] = []
        with self._lock.write_locked():
            for record in records:
                if record.id in self._records:
                    record.touch()
                    self._records[record.id] = record
                    updated.append(record)
        return updated

    # ── Helpers (caller holds the lock) ─────────────────────────────

    def _insert(self, record: ClientRecord) -> None:
        self._last_id += 1
        now = datetime.now(timezone.utc)
        record.id = self._last_id
        record.created_at = now
        record.updated_at = now
        self._records[record.id] = record

    def _holder_of(self, clave: str, exclude_id: int | None = None) -> ClientRecord | None:
        for record in self._records.values():
            if record.normalized_clave == clave and record.id != exclude_id:
                return record
        return None
