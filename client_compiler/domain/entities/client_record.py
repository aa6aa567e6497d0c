"""Domain entities for client contact records loaded from spreadsheets."""

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass
class ClientRecord:
    """Core domain entity for a single client contact row.

    ``is_valid`` is derived from ``errors`` and cannot be set on its own:
    a record is valid exactly when no field carries an error message.
    """

    clave: str = ""
    nombre: str = ""
    correo: str = ""
    telefono: str = ""
    id: int = 0
    errors: dict[str, str] = field(default_factory=dict)
    row_number: int = 0
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def normalized_clave(self) -> str:
        """Key used for uniqueness: surrounding whitespace is ignored."""
        return self.clave.strip()

    def add_error(self, field_name: str, message: str) -> None:
        self.errors[field_name] = message

    def clear_errors(self) -> None:
        self.errors = {}

    def has_error(self, field_name: str) -> bool:
        return field_name in self.errors

    def get_error(self, field_name: str) -> str:
        return self.errors.get(field_name, "")

    def touch(self) -> None:
        """Refresh the updated_at timestamp."""
        self.updated_at = datetime.now(timezone.utc)

    def __str__(self) -> str:
        return (
            f"ClientRecord(id={self.id}, clave={self.clave!r}, "
            f"nombre={self.nombre!r}, valid={self.is_valid})"
        )


@dataclass
class ClientFilter:
    """Conjunction of optional predicates used to query stored records.

    Text predicates are case-insensitive substring matches; empty strings
    are ignored. Pagination applies only when both ``page`` and ``limit``
    are positive.
    """

    clave: str = ""
    nombre: str = ""
    correo: str = ""
    telefono: str = ""
    has_errors: bool | None = None
    page: int = 0
    limit: int = 0

    def matches(self, record: ClientRecord) -> bool:
        for attr in ("clave", "nombre", "correo", "telefono"):
            needle = getattr(self, attr)
            if needle and needle.lower() not in getattr(record, attr).lower():
                return False
        if self.has_errors is not None and self.has_errors == record.is_valid:
            return False
        return True

    def paginate(self, records: list[ClientRecord]) -> list[ClientRecord]:
        if self.page <= 0 or self.limit <= 0:
            return records
        start = (self.page - 1) * self.limit
        if start >= len(records):
            return []
        return records[start : start + self.limit]


@dataclass
class ClientStats:
    """Aggregate counts over a set of records, computed on demand."""

    total: int = 0
    valid: int = 0
    invalid: int = 0
    errors_by_field: dict[str, int] = field(default_factory=dict)

    @classmethod
    def from_records(cls, records: list[ClientRecord]) -> "ClientStats":
        stats = cls(total=len(records))
        for record in records:
            if record.is_valid:
                stats.valid += 1
                continue
            stats.invalid += 1
            for field_name in record.errors:
                stats.errors_by_field[field_name] = (
                    stats.errors_by_field.get(field_name, 0) + 1
                )
        return stats
