"""API tests for spreadsheet uploads, the template and stored file management."""

import zipfile
from io import BytesIO

import pytest
from httpx import ASGITransport, AsyncClient
from openpyxl import Workbook, load_workbook

XLSX = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _client(app) -> AsyncClient:
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


def _workbook_bytes(rows, header=("Clave", "Nombre", "Correo", "Telefono")) -> bytes:
    wb = Workbook()
    ws = wb.active
    ws.append(header)
    for row in rows:
        ws.append(row)
    buffer = BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


SAMPLE_ROWS = [
    (f"{1000 + i}", "Cliente Ejemplo", f"cliente{i}@gmail.com", "9611234567")
    for i in range(7)
] + [("1000", "Repetido", "repetido@hotmail.com", "9629876543")]


@pytest.mark.asyncio
async def test_upload_loads_and_previews_clients(app, settings):
    content = _workbook_bytes(SAMPLE_ROWS)

    async with _client(app) as client:
        response = await client.post(
            "/api/v1/uploads", files={"file": ("clientes.xlsx", content, XLSX)}
        )
        duplicates = await client.get("/api/v1/clients/duplicates")
        files = await client.get("/api/v1/uploads/files")

    assert response.status_code == 200
    body = response.json()
    assert body["filename"] == "clientes.xlsx"
    assert body["uploaded_file"].startswith("clientes_")
    assert body["total_clients"] == 8
    assert body["invalid_clients"] == 2
    assert body["stats"]["errors_by_field"] == {"clave": 2}
    assert len(body["preview"]) == settings.preview_size
    assert body["preview"][0]["row_number"] == 2

    assert duplicates.json() == {"1000": [1, 8]}
    assert files.json()["total"] == 1
    assert files.json()["files"][0]["name"] == body["uploaded_file"]


@pytest.mark.asyncio
async def test_upload_replaces_previous_clients(app):
    async with _client(app) as client:
        await client.post(
            "/api/v1/clients",
            json={"clave": "1", "nombre": "Ana", "correo": "ana@gmail.com", "telefono": "9611234567"},
        )
        await client.post(
            "/api/v1/uploads",
            files={"file": ("c.xlsx", _workbook_bytes(SAMPLE_ROWS[:2]), XLSX)},
        )
        listing = await client.get("/api/v1/clients")

    assert listing.json()["total"] == 2
    assert [c["id"] for c in listing.json()["clients"]] == [1, 2]


@pytest.mark.asyncio
async def test_upload_rejects_non_xlsx(app):
    async with _client(app) as client:
        response = await client.post(
            "/api/v1/uploads", files={"file": ("clientes.csv", b"a,b,c", "text/csv")}
        )

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_upload_rejects_empty_and_oversized_files(app):
    oversized = b"0" * (1024 * 1024 + 1)

    async with _client(app) as client:
        empty = await client.post("/api/v1/uploads", files={"file": ("c.xlsx", b"", XLSX)})
        too_big = await client.post("/api/v1/uploads", files={"file": ("c.xlsx", oversized, XLSX)})

    assert empty.status_code == 400
    assert too_big.status_code == 400


@pytest.mark.asyncio
async def test_bad_structure_is_reported_and_stored_file_removed(app):
    content = _workbook_bytes([("1", "Ana", "ana@gmail.com", "9611234567")], header=("id", "a", "b", "c"))

    async with _client(app) as client:
        response = await client.post("/api/v1/uploads", files={"file": ("c.xlsx", content, XLSX)})
        files = await client.get("/api/v1/uploads/files")

    assert response.status_code == 400
    assert response.json()["detail"]["code"] == "INVALID_EXCEL_STRUCTURE"
    assert files.json()["total"] == 0


@pytest.mark.asyncio
async def test_header_only_upload_is_a_processing_error(app):
    async with _client(app) as client:
        response = await client.post(
            "/api/v1/uploads", files={"file": ("c.xlsx", _workbook_bytes([]), XLSX)}
        )

    assert response.status_code == 400
    assert response.json()["detail"]["code"] == "FILE_PROCESSING_ERROR"


@pytest.mark.asyncio
async def test_truncated_sheet_upload_is_reported_and_stored_file_removed(app):
    source = BytesIO(_workbook_bytes(SAMPLE_ROWS))
    truncated = BytesIO()
    with zipfile.ZipFile(source) as src, zipfile.ZipFile(truncated, "w") as dst:
        for item in src.infolist():
            data = src.read(item.filename)
            if item.filename == "xl/worksheets/sheet1.xml":
                data = data[: len(data) // 2]
            dst.writestr(item, data)

    async with _client(app) as client:
        response = await client.post(
            "/api/v1/uploads", files={"file": ("c.xlsx", truncated.getvalue(), XLSX)}
        )
        files = await client.get("/api/v1/uploads/files")

    assert response.status_code == 400
    assert response.json()["detail"]["code"] == "FILE_PROCESSING_ERROR"
    assert files.json()["total"] == 0


@pytest.mark.asyncio
async def test_multiple_upload_appends_after_first_success(app):
    first = _workbook_bytes([("1", "Ana Ruiz", "ana@gmail.com", "9611234567")])
    second = _workbook_bytes([("1", "Luis Mora", "luis@gmail.com", "9611234568")])

    async with _client(app) as client:
        response = await client.post(
            "/api/v1/uploads/multiple",
            files=[
                ("files", ("roto.csv", b"x", "text/csv")),
                ("files", ("a.xlsx", first, XLSX)),
                ("files", ("b.xlsx", second, XLSX)),
            ],
        )

    assert response.status_code == 200
    body = response.json()
    assert body["files_processed"] == 3
    assert [r["status"] for r in body["results"]] == ["error", "success", "success"]
    assert body["results"][2]["invalid"] == 1
    assert body["total_clients"] == 2
    assert body["total_invalid"] == 2


@pytest.mark.asyncio
async def test_template_download(app):
    async with _client(app) as client:
        response = await client.get("/api/v1/uploads/template")

    assert response.status_code == 200
    wb = load_workbook(BytesIO(response.content))
    rows = list(wb.active.iter_rows(values_only=True))
    assert rows[0] == ("Clave", "Nombre", "Correo", "Telefono")
    assert len(rows) == 4


@pytest.mark.asyncio
async def test_download_and_delete_stored_file(app):
    async with _client(app) as client:
        upload = await client.post(
            "/api/v1/uploads",
            files={"file": ("c.xlsx", _workbook_bytes(SAMPLE_ROWS[:1]), XLSX)},
        )
        name = upload.json()["uploaded_file"]

        download = await client.get(f"/api/v1/uploads/files/{name}")
        deleted = await client.delete(f"/api/v1/uploads/files/{name}")
        missing = await client.delete(f"/api/v1/uploads/files/{name}")

    assert download.status_code == 200
    assert deleted.status_code == 204
    assert missing.status_code == 404
