"""Unit tests for local spreadsheet storage."""

import re
from pathlib import Path

import pytest

from client_compiler.infrastructure.storage.local_file_storage import (
    LocalFileStorage,
    safe_filename,
)


@pytest.fixture
def storage(tmp_path):
    return LocalFileStorage(upload_dir=str(tmp_path / "uploads"))


def test_upload_dir_is_created(tmp_path):
    LocalFileStorage(upload_dir=str(tmp_path / "nested" / "uploads"))

    assert (tmp_path / "nested" / "uploads").is_dir()


@pytest.mark.asyncio
async def test_store_file_uses_timestamped_sanitized_name(storage):
    stored = await storage.store_file(b"data", "../Mis clientes (2024).XLSX")

    assert re.fullmatch(r"Mis_clientes__2024_\d{8}_\d{6}\.xlsx", stored.filename)
    assert Path(stored.stored_path).parent == storage.upload_dir
    assert Path(stored.stored_path).read_bytes() == b"data"
    assert stored.file_size == 4


@pytest.mark.asyncio
async def test_list_files_only_returns_spreadsheets(storage):
    await storage.store_file(b"a", "uno.xlsx")
    (storage.upload_dir / "notas.txt").write_text("ignored")

    files = storage.list_files()

    assert len(files) == 1
    assert files[0].filename.startswith("uno_")


@pytest.mark.asyncio
async def test_delete_file(storage):
    stored = await storage.store_file(b"a", "uno.xlsx")

    assert await storage.delete_file(stored.filename) is True
    assert not storage.file_exists(stored.filename)
    assert await storage.delete_file(stored.filename) is False


def test_get_file_path_stays_inside_upload_dir(storage):
    path = storage.get_file_path("../../etc/passwd.xlsx")

    assert path.parent == storage.upload_dir
    assert path.name == "passwd.xlsx"


def test_export_path_defaults_and_suffix(storage):
    default = storage.export_path()
    named = storage.export_path("reporte final")

    assert re.fullmatch(r"clientes_exportados_\d{8}_\d{6}\.xlsx", default.name)
    assert named.name == "reporte_final.xlsx"


def test_safe_filename_keeps_lowercased_suffix():
    assert safe_filename("Datos.XLSX") == "Datos.xlsx"
