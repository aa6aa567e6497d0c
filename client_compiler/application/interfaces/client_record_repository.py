"""Abstract repository interface (port) for ClientRecord storage."""

from abc import ABC, abstractmethod

from client_compiler.domain.entities import ClientFilter, ClientRecord


class ClientRecordRepository(ABC):
    """Port for client record storage, implemented in the infrastructure layer.

    Lookups by id or key raise ``EntityNotFoundError`` when nothing matches;
    writes that would give two records the same ``clave`` raise
    ``DuplicateEntityError``. Implementations must be safe to share between
    threads.
    """

    @abstractmethod
    def create(self, record: ClientRecord) -> ClientRecord:
        """Assign the next id and timestamps, then store the record."""
        ...

    @abstractmethod
    def get_by_id(self, record_id: int) -> ClientRecord:
        ...

    @abstractmethod
    def get_by_clave(self, clave: str) -> ClientRecord:
        ...

    @abstractmethod
    def get_all(self) -> list[ClientRecord]:
        """Return every stored record in insertion order."""
        ...

    @abstractmethod
    def update(self, record_id: int, record: ClientRecord) -> ClientRecord:
        """Replace a stored record, keeping its id, creation time and source row."""
        ...

    @abstractmethod
    def delete(self, record_id: int) -> None:
        ...

    @abstractmethod
    def clear(self) -> None:
        """Remove all records and restart id assignment."""
        ...

    @abstractmethod
    def count(self) -> int:
        ...

    @abstractmethod
    def find_by_filter(self, record_filter: ClientFilter) -> list[ClientRecord]:
        """Return the requested page of records matching the filter."""
        ...

    @abstractmethod
    def count_by_filter(self, record_filter: ClientFilter) -> int:
        """Count matching records, ignoring pagination."""
        ...

    @abstractmethod
    def batch_create(self, records: list[ClientRecord]) -> list[ClientRecord]:
        """Store many records at once without duplicate-key checks."""
        ...

    @abstractmethod
    def batch_update(self, records: list[ClientRecord]) -> list[ClientRecord]:
        """Replace the stored records whose ids exist; unknown ids are skipped."""
        ...

    @abstractmethod
    def get_duplicate_keys(self) -> dict[str, list[int]]:
        """Map each non-empty ``clave`` held by more than one record to their ids."""
        ...
