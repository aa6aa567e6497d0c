"""Abstract interface (port) for reading and writing client spreadsheets."""

from abc import ABC, abstractmethod

from client_compiler.domain.entities import ClientRecord

EXPECTED_HEADERS: tuple[str, ...] = ("clave", "nombre", "correo", "telefono")


class ClientSpreadsheet(ABC):
    """Port for spreadsheet I/O, implemented in the infrastructure layer.

    All methods are blocking and raise ``SpreadsheetError`` subclasses on
    malformed input or I/O failure.
    """

    @abstractmethod
    def validate_structure(self, file_path: str) -> None:
        """Check extension, readability and header row without reading data."""
        ...

    @abstractmethod
    def read(self, file_path: str) -> list[ClientRecord]:
        """Read data rows into unvalidated records numbered 1..n."""
        ...

    @abstractmethod
    def write(self, records: list[ClientRecord], file_path: str) -> None:
        """Write records plus, when any is invalid, an error detail sheet."""
        ...
