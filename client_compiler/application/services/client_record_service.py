"""Application service (use case) for client records.

Orchestrates the record store, the validation service and the spreadsheet
adapter. Spreadsheet I/O and batch validation are blocking, so they run in a
worker thread via ``asyncio.to_thread`` to keep the event loop responsive.
"""

import asyncio
import dataclasses
import logging

from client_compiler.application.interfaces import ClientRecordRepository, ClientSpreadsheet
from client_compiler.application.schemas.client_record import (
    ClientRecordCreate,
    ClientRecordUpdate,
)
from client_compiler.application.services.validation_service import ValidationService
from client_compiler.domain.entities import ClientFilter, ClientRecord, ClientStats
from client_compiler.domain.exceptions import FileProcessingError
from client_compiler.infrastructure.logging.colored_logger import PipelineLogger, PipelineStage

logger = logging.getLogger(__name__)
plog = PipelineLogger("ClientImportPipeline")

TEMPLATE_CLIENTS: tuple[tuple[str, str, str, str], ...] = (
    ("1001", "Juan Pérez García", "juan.perez@gmail.com", "9611234567"),
    ("1002", "María López Hernández", "maria.lopez@hotmail.com", "9629876543"),
    ("1003", "Carlos Rodríguez Méndez", "carlos.rodriguez@yahoo.com", "9675551234"),
)


def _snapshot(record: ClientRecord) -> ClientRecord:
    """Detached copy, so validation never mutates a record other readers can see."""
    return dataclasses.replace(record, errors=dict(record.errors))


class ClientRecordService:
    """Orchestrates client record logic. Depends on ports injected at construction."""

    def __init__(
        self,
        repository: ClientRecordRepository,
        validation_service: ValidationService,
        spreadsheet: ClientSpreadsheet,
        write_lock: asyncio.Lock | None = None,
    ):
        self._repository = repository
        self._validator = validation_service
        self._spreadsheet = spreadsheet
        # Shared by every service bound to the same store; serializes
        # mutations with store-wide revalidation.
        self._write_lock = write_lock or asyncio.Lock()

    # ── Spreadsheet import / export ─────────────────────────────────

    async def load_from_spreadsheet(
        self, file_path: str, *, append: bool = False
    ) -> list[ClientRecord]:
        """Read, validate and store the clients of an uploaded workbook.

        Structural problems raise before anything is stored. By default the
        workbook replaces the current records (ids restart at 1); with
        ``append=True`` its records are added and the whole store is
        revalidated so keys duplicated across files are reported. The
        returned records are the stored versions after that revalidation.
        """
        plog.separator(f"Importing {file_path}")

        with plog.timed_step(PipelineStage.READ, "Reading workbook"):
            records = await asyncio.to_thread(self._read_workbook, file_path)
        plog.detail("Rows read", count=len(records))

        with plog.timed_step(PipelineStage.VALIDATION, f"Validating {len(records)} clients"):
            await asyncio.to_thread(self._validator.validate_all, records)

        async with self._write_lock:
            if append:
                self._repository.batch_create(records)
                await self._revalidate_store()
                # revalidation replaced the stored objects
                records = [self._repository.get_by_id(r.id) for r in records]
            else:
                self._repository.clear()
                self._repository.batch_create(records)
            duplicates = self._repository.get_duplicate_keys()

        if duplicates:
            plog.step_complete(
                PipelineStage.DUPLICATES,
                "Duplicate keys flagged",
                keys=len(duplicates),
                records=sum(len(ids) for ids in duplicates.values()),
            )

        stats = ClientStats.from_records(records)
        plog.stats(total=stats.total, valid=stats.valid, invalid=stats.invalid)
        plog.step_complete(PipelineStage.COMPLETE, "Clients stored", append=append)
        return records

    def _read_workbook(self, file_path: str) -> list[ClientRecord]:
        self._spreadsheet.validate_structure(file_path)
        return self._spreadsheet.read(file_path)

    async def export_to_spreadsheet(self, file_path: str) -> str:
        """Write every stored record to ``file_path`` and return the path."""
        records = self._repository.get_all()
        if not records:
            raise FileProcessingError("No hay clientes para exportar")

        with plog.timed_step(PipelineStage.EXPORT, f"Exporting {len(records)} clients"):
            await asyncio.to_thread(self._spreadsheet.write, records, file_path)
        return file_path

    async def create_template(self, file_path: str) -> str:
        """Write a sample workbook with the expected columns and valid rows."""
        samples = [
            ClientRecord(id=i, clave=c, nombre=n, correo=e, telefono=t, row_number=i + 1)
            for i, (c, n, e, t) in enumerate(TEMPLATE_CLIENTS, start=1)
        ]
        await asyncio.to_thread(self._spreadsheet.write, samples, file_path)
        logger.info("Template workbook written to %s", file_path)
        return file_path

    # ── Queries ─────────────────────────────────────────────────────

    async def list_records(self, record_filter: ClientFilter) -> tuple[list[ClientRecord], int]:
        """Return the requested page and the number of matching records."""
        page = self._repository.find_by_filter(record_filter)
        total = self._repository.count_by_filter(record_filter)
        return page, total

    async def search(self, term: str) -> list[ClientRecord]:
        """Free-text search across key, name, email and phone."""
        needle = term.lower()
        return [
            record
            for record in self._repository.get_all()
            if any(
                needle in value.lower()
                for value in (record.clave, record.nombre, record.correo, record.telefono)
            )
        ]

    async def get_record(self, record_id: int) -> ClientRecord:
        return self._repository.get_by_id(record_id)

    async def get_stats(self) -> ClientStats:
        return ClientStats.from_records(self._repository.get_all())

    async def get_duplicate_keys(self) -> dict[str, list[int]]:
        return self._repository.get_duplicate_keys()

    async def count(self) -> int:
        return self._repository.count()

    # ── Commands ────────────────────────────────────────────────────

    async def create_record(self, data: ClientRecordCreate) -> ClientRecord:
        record = self._validator.validate_client(ClientRecord(**data.model_dump()))
        async with self._write_lock:
            return self._repository.create(record)

    async def update_record(self, record_id: int, data: ClientRecordUpdate) -> ClientRecord:
        async with self._write_lock:
            existing = self._repository.get_by_id(record_id)
            changes = data.model_dump(exclude_none=True)
            candidate = ClientRecord(
                clave=changes.get("clave", existing.clave),
                nombre=changes.get("nombre", existing.nombre),
                correo=changes.get("correo", existing.correo),
                telefono=changes.get("telefono", existing.telefono),
            )
            self._validator.validate_client(candidate)
            return self._repository.update(record_id, candidate)

    async def delete_record(self, record_id: int) -> None:
        async with self._write_lock:
            self._repository.delete(record_id)

    async def clear_records(self) -> None:
        async with self._write_lock:
            self._repository.clear()
        logger.info("All client records cleared")

    async def validate_all(self) -> list[ClientRecord]:
        """Revalidate every stored record, including duplicate-key reconciliation.

        Holds the write lock from snapshot to write-back, so edits made
        meanwhile wait instead of being overwritten by stale snapshots.
        """
        async with self._write_lock:
            return await self._revalidate_store()

    async def _revalidate_store(self) -> list[ClientRecord]:
        """Caller holds the write lock."""
        records = [_snapshot(r) for r in self._repository.get_all()]
        with plog.timed_step(PipelineStage.VALIDATION, f"Revalidating {len(records)} clients"):
            await asyncio.to_thread(self._validator.validate_all, records)
        self._repository.batch_update(records)
        return records

    async def validate_single(self, data: ClientRecordCreate) -> ClientRecord:
        """Validate a record without storing it."""
        return self._validator.validate_client(ClientRecord(**data.model_dump()))
