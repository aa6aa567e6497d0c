"""Local filesystem storage for uploaded and exported spreadsheets.

Storage layout:
    <upload_dir>/<stem>_<YYYYMMDD_HHmmss>.xlsx   uploaded workbooks
    <upload_dir>/<export name>.xlsx              exported workbooks
"""

import logging
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

logger = logging.getLogger(__name__)

SPREADSHEET_SUFFIX = ".xlsx"


@dataclass
class StoredFile:
    """A spreadsheet sitting in the upload directory."""

    stored_path: str
    filename: str
    file_size: int
    modified_at: datetime


def _datetime_stamp() -> str:
    """Return a UTC datetime stamp suitable for filenames: YYYYMMDD_HHmmss."""
    return datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")


def _sanitise(name: str, max_len: int = 80) -> str:
    """Replace non-word characters with underscores and truncate."""
    return re.sub(r"[^\w\-]", "_", name)[:max_len].strip("_") or "unnamed"


def safe_filename(filename: str) -> str:
    """Strip any directory part and unsafe characters, keeping the suffix."""
    path = Path(Path(filename).name)
    return f"{_sanitise(path.stem)}{path.suffix.lower()}"


class LocalFileStorage:
    """Infrastructure adapter for spreadsheet files on local disk."""

    def __init__(self, upload_dir: str):
        self._upload_dir = Path(upload_dir)
        self._upload_dir.mkdir(parents=True, exist_ok=True)

    @property
    def upload_dir(self) -> Path:
        return self._upload_dir

    async def store_file(self, content: bytes, filename: str) -> StoredFile:
        """Store an uploaded file as ``<stem>_<YYYYMMDD_HHmmss><suffix>``."""
        stem = Path(filename).stem
        suffix = Path(filename).suffix.lower()
        stamped_name = f"{_sanitise(stem)}_{_datetime_stamp()}{suffix}"

        dest_path = self._upload_dir / stamped_name
        dest_path.write_bytes(content)

        logger.info("Stored file: %s (%d bytes)", dest_path, len(content))
        return self._describe(dest_path)

    def list_files(self) -> list[StoredFile]:
        """Return stored spreadsheets, newest first."""
        files = [
            self._describe(path)
            for path in self._upload_dir.iterdir()
            if path.is_file() and path.suffix.lower() == SPREADSHEET_SUFFIX
        ]
        return sorted(files, key=lambda f: f.modified_at, reverse=True)

    def get_file_path(self, filename: str) -> Path:
        """Resolve a bare filename inside the upload directory."""
        return self._upload_dir / safe_filename(filename)

    def file_exists(self, filename: str) -> bool:
        return self.get_file_path(filename).is_file()

    def export_path(self, filename: str | None = None) -> Path:
        """Destination for an export, defaulting to a timestamped name."""
        if not filename:
            filename = f"clientes_exportados_{_datetime_stamp()}{SPREADSHEET_SUFFIX}"
        if not filename.lower().endswith(SPREADSHEET_SUFFIX):
            filename += SPREADSHEET_SUFFIX
        return self.get_file_path(filename)

    async def delete_file(self, filename: str) -> bool:
        """Delete a stored file. Returns False if it does not exist."""
        file_path = self.get_file_path(filename)
        if not file_path.is_file():
            return False

        file_path.unlink(missing_ok=True)
        logger.info("Deleted file from disk: %s", file_path)
        return True

    async def delete_path(self, stored_path: str) -> None:
        """Remove a file by the path returned from ``store_file``."""
        Path(stored_path).unlink(missing_ok=True)
        logger.info("Removed stored file: %s", stored_path)

    @staticmethod
    def _describe(path: Path) -> StoredFile:
        stat = path.stat()
        return StoredFile(
            stored_path=str(path),
            filename=path.name,
            file_size=stat.st_size,
            modified_at=datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc),
        )
