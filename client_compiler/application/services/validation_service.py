"""Validation of client records: single record, batch and duplicate keys.

Small batches are validated in order on the calling thread. Batches at or
above ``batch_threshold`` fan out to a fixed pool of worker threads that
drain a shared queue of indices; each index is taken by exactly one worker,
which writes its result back into the same slot. The caller blocks until
every worker has finished.
"""

import concurrent.futures
import queue

from client_compiler.domain.entities import ClientRecord, ClientStats
from client_compiler.domain.validation_rules import (
    clean_string,
    validate_client_key,
    validate_client_name,
    validate_email,
    validate_phone,
)

DEFAULT_BATCH_THRESHOLD = 100
DEFAULT_MAX_WORKERS = 10

DUPLICATE_KEY_FIELD = "clave"


class ValidationService:
    """Applies the field rules to records and reconciles duplicate keys."""

    def __init__(
        self,
        batch_threshold: int = DEFAULT_BATCH_THRESHOLD,
        max_workers: int = DEFAULT_MAX_WORKERS,
    ):
        self._batch_threshold = batch_threshold
        self._max_workers = max(1, max_workers)

    def validate_client(self, record: ClientRecord) -> ClientRecord:
        """Re-run every rule on ``record``, replacing its previous errors.

        ``nombre``, ``correo`` and ``telefono`` are whitespace-normalized
        whether or not they pass.
        """
        record.clear_errors()
        record.nombre = clean_string(record.nombre)
        record.correo = clean_string(record.correo)
        record.telefono = clean_string(record.telefono)

        checks = (
            ("clave", validate_client_key(record.clave)),
            ("nombre", validate_client_name(record.nombre)),
            ("correo", validate_email(record.correo)),
            ("telefono", validate_phone(record.telefono)),
        )
        for field_name, message in checks:
            if message:
                record.add_error(field_name, message)

        return record

    def validate_clients(self, records: list[ClientRecord]) -> list[ClientRecord]:
        """Validate sequentially, in input order."""
        for index, record in enumerate(records):
            records[index] = self.validate_client(record)
        return records

    def validate_clients_concurrent(self, records: list[ClientRecord]) -> list[ClientRecord]:
        """Validate with a worker pool once the batch reaches the threshold."""
        if len(records) < self._batch_threshold:
            return self.validate_clients(records)

        indices: queue.SimpleQueue[int] = queue.SimpleQueue()
        for index in range(len(records)):
            indices.put(index)

        def drain() -> None:
            while True:
                try:
                    index = indices.get_nowait()
                except queue.Empty:
                    return
                records[index] = self.validate_client(records[index])

        workers = min(self._max_workers, len(records))
        with concurrent.futures.ThreadPoolExecutor(
            max_workers=workers, thread_name_prefix="validation"
        ) as executor:
            futures = [executor.submit(drain) for _ in range(workers)]
            concurrent.futures.wait(futures)

        for future in futures:
            future.result()
        return records

    def reconcile_duplicate_keys(self, records: list[ClientRecord]) -> list[ClientRecord]:
        """Flag every record whose key is shared with another record in the batch."""
        holders: dict[str, list[int]] = {}
        for index, record in enumerate(records):
            key = record.normalized_clave
            if key:
                holders.setdefault(key, []).append(index)

        for key, indexes in holders.items():
            if len(indexes) < 2:
                continue
            message = f"Clave duplicada: {key}"
            for index in indexes:
                record = records[index]
                previous = record.get_error(DUPLICATE_KEY_FIELD)
                record.add_error(
                    DUPLICATE_KEY_FIELD,
                    f"{previous}; {message}" if previous else message,
                )
        return records

    def validate_all(self, records: list[ClientRecord]) -> list[ClientRecord]:
        """Validate a batch, then reconcile duplicate keys across it."""
        self.validate_clients_concurrent(records)
        return self.reconcile_duplicate_keys(records)

    @staticmethod
    def get_validation_stats(records: list[ClientRecord]) -> ClientStats:
        return ClientStats.from_records(records)
