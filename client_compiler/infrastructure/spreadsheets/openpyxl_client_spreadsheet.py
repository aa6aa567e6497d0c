"""Client spreadsheet adapter: reads and writes ``.xlsx`` workbooks with openpyxl.

Expected input layout (first sheet):

    | Clave | Nombre | Correo | Telefono |   <- header, row 1
    | 1001  | Juan   | j@...  | 961...   |   <- data from row 2

Export layout:
    ``Clientes`` sheet with the four columns, invalid rows shaded red.
    ``Errores`` sheet (only when some record is invalid), one row per field error.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Any

from openpyxl import Workbook, load_workbook
from openpyxl.styles import Font, PatternFill

from client_compiler.application.interfaces import EXPECTED_HEADERS, ClientSpreadsheet
from client_compiler.domain.entities import ClientRecord
from client_compiler.domain.exceptions import (
    FileEmptyError,
    FileProcessingError,
    InvalidFileFormatError,
    InvalidStructureError,
)

logger = logging.getLogger(__name__)

CLIENTS_SHEET = "Clientes"
ERRORS_SHEET = "Errores"

HEADERS_ONLY_DETAIL = "El archivo solo contiene encabezados, sin datos"

_CLIENT_HEADERS = ("Clave", "Nombre", "Correo", "Telefono")
_ERROR_HEADERS = ("Fila", "Clave", "Nombre", "Campo", "Error")

_HEADER_FILL = PatternFill(fill_type="solid", fgColor="E6E6FA")
_ERROR_FILL = PatternFill(fill_type="solid", fgColor="FFE6E6")
_BOLD = Font(bold=True)

_CLIENT_WIDTHS = {"A": 15, "B": 30, "C": 35, "D": 20}
_ERROR_WIDTHS = {"A": 8, "B": 15, "C": 25, "D": 15, "E": 50}


def _cell_text(value: Any) -> str:
    """Render a cell value as trimmed text; whole floats lose their ``.0``."""
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value).strip()


def _normalize_header(value: Any) -> str:
    return _cell_text(value).lower().replace(" ", "").replace("é", "e")


def _append_literal(ws, values: tuple[Any, ...]) -> tuple[Any, ...]:
    """Append a row, storing text as plain strings even when it looks like a formula."""
    ws.append(values)
    row = ws[ws.max_row]
    for cell in row:
        if isinstance(cell.value, str):
            cell.data_type = "s"
    return row


class OpenpyxlClientSpreadsheet(ClientSpreadsheet):
    """Infrastructure adapter implementing the ClientSpreadsheet port."""

    # ── Reading ─────────────────────────────────────────────────────

    def validate_structure(self, file_path: str) -> None:
        rows = self._load_rows(file_path)
        if not rows:
            raise FileEmptyError()
        self._validate_headers(rows[0])

    def read(self, file_path: str) -> list[ClientRecord]:
        rows = self._load_rows(file_path)
        if not rows:
            raise FileEmptyError()
        if len(rows) < 2:
            raise FileProcessingError(HEADERS_ONLY_DETAIL)
        self._validate_headers(rows[0])

        records: list[ClientRecord] = []
        for row_number, row in enumerate(rows[1:], start=2):
            values = [_cell_text(v) for v in row[:4]]
            values.extend([""] * (4 - len(values)))
            if not any(values):
                continue
            clave, nombre, correo, telefono = values
            records.append(
                ClientRecord(
                    id=len(records) + 1,
                    clave=clave,
                    nombre=nombre,
                    correo=correo,
                    telefono=telefono,
                    row_number=row_number,
                )
            )

        if not records:
            raise FileProcessingError(HEADERS_ONLY_DETAIL)

        logger.info("Read %d client rows from %s", len(records), file_path)
        return records

    def _load_rows(self, file_path: str) -> list[tuple[Any, ...]]:
        """Return every row of the first sheet as a tuple of raw values."""
        if not file_path.lower().endswith(".xlsx"):
            raise InvalidFileFormatError()

        try:
            wb = load_workbook(file_path, read_only=True, data_only=True)
        except Exception as exc:
            logger.warning("Could not open workbook %s: %s", file_path, exc)
            raise FileProcessingError(f"Error abriendo archivo: {exc}") from exc

        if not wb.sheetnames:
            wb.close()
            raise InvalidStructureError("No se encontraron hojas en el archivo")

        # read-only mode parses the sheet XML lazily, during iteration
        try:
            ws = wb[wb.sheetnames[0]]
            rows = [tuple(row) for row in ws.iter_rows(values_only=True)]
        except Exception as exc:
            logger.warning("Could not read worksheet in %s: %s", file_path, exc)
            raise FileProcessingError(f"Error leyendo hoja: {exc}") from exc
        finally:
            wb.close()

        # read-only worksheets can report trailing rows with no values
        while rows and all(v is None or _cell_text(v) == "" for v in rows[-1]):
            rows.pop()
        return rows

    @staticmethod
    def _validate_headers(header_row: tuple[Any, ...]) -> None:
        if len(header_row) < len(EXPECTED_HEADERS):
            raise InvalidStructureError(
                "El archivo debe tener al menos 4 columnas: Clave, Nombre, Correo, Telefono"
            )
        for position, (found, expected) in enumerate(
            zip(header_row, EXPECTED_HEADERS), start=1
        ):
            if _normalize_header(found) != expected:
                raise InvalidStructureError(
                    f"Encabezado incorrecto en columna {position}. "
                    f"Se esperaba '{expected}', se encontró '{_cell_text(found)}'"
                )

    # ── Writing ─────────────────────────────────────────────────────

    def write(self, records: list[ClientRecord], file_path: str) -> None:
        wb = Workbook()
        ws = wb.active
        ws.title = CLIENTS_SHEET

        ws.append(_CLIENT_HEADERS)
        for cell in ws[1]:
            cell.font = _BOLD
            cell.fill = _HEADER_FILL

        for record in records:
            row = _append_literal(ws, (record.clave, record.nombre, record.correo, record.telefono))
            if not record.is_valid:
                for cell in row:
                    cell.fill = _ERROR_FILL

        for column, width in _CLIENT_WIDTHS.items():
            ws.column_dimensions[column].width = width

        if any(not record.is_valid for record in records):
            self._write_error_sheet(wb, records)

        try:
            Path(file_path).parent.mkdir(parents=True, exist_ok=True)
            wb.save(file_path)
        except OSError as exc:
            logger.warning("Could not save workbook %s: %s", file_path, exc)
            raise FileProcessingError(f"Error guardando archivo: {exc}") from exc

        logger.info("Wrote %d clients to %s", len(records), file_path)

    @staticmethod
    def _write_error_sheet(wb: Workbook, records: list[ClientRecord]) -> None:
        ws = wb.create_sheet(ERRORS_SHEET)
        ws.append(_ERROR_HEADERS)
        for cell in ws[1]:
            cell.font = _BOLD
            cell.fill = _ERROR_FILL

        for record in records:
            for field_name, message in record.errors.items():
                _append_literal(
                    ws, (record.row_number, record.clave, record.nombre, field_name, message)
                )

        for column, width in _ERROR_WIDTHS.items():
            ws.column_dimensions[column].width = width
