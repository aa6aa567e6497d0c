"""API tests for client CRUD, validation, statistics and export."""

import pytest
from httpx import ASGITransport, AsyncClient

VALID_CLIENT = {
    "clave": "1001",
    "nombre": "Juan Pérez",
    "correo": "juan@gmail.com",
    "telefono": "961-123-4567",
}


def _client(app) -> AsyncClient:
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


@pytest.mark.asyncio
async def test_create_get_update_delete_client(app):
    async with _client(app) as client:
        created = await client.post("/api/v1/clients", json=VALID_CLIENT)
        assert created.status_code == 201
        body = created.json()
        assert body["id"] == 1
        assert body["is_valid"] is True

        fetched = await client.get("/api/v1/clients/1")
        assert fetched.json()["clave"] == "1001"

        updated = await client.put("/api/v1/clients/1", json={"correo": "juan@empresa.com"})
        assert updated.status_code == 200
        assert updated.json()["is_valid"] is False
        assert "correo" in updated.json()["errors"]
        assert updated.json()["nombre"] == "Juan Pérez"

        deleted = await client.delete("/api/v1/clients/1")
        assert deleted.status_code == 204

        missing = await client.get("/api/v1/clients/1")
        assert missing.status_code == 404
        assert missing.json()["detail"]["code"] == "CLIENT_NOT_FOUND"


@pytest.mark.asyncio
async def test_duplicate_key_returns_409(app):
    async with _client(app) as client:
        await client.post("/api/v1/clients", json=VALID_CLIENT)
        response = await client.post("/api/v1/clients", json=VALID_CLIENT)
        listing = await client.get("/api/v1/clients")

    assert response.status_code == 409
    assert response.json()["detail"]["code"] == "DUPLICATE_CLIENT_KEY"
    assert listing.json()["total"] == 1


@pytest.mark.asyncio
async def test_update_unknown_client_returns_404(app):
    async with _client(app) as client:
        response = await client.put("/api/v1/clients/42", json={"nombre": "Nadie"})

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_list_filters_and_paginates(app):
    async with _client(app) as client:
        for i in range(5):
            await client.post(
                "/api/v1/clients",
                json={**VALID_CLIENT, "clave": str(i), "nombre": f"Cliente {chr(65 + i)}"},
            )
        await client.post("/api/v1/clients", json={**VALID_CLIENT, "clave": "abc"})

        page = await client.get("/api/v1/clients", params={"nombre": "cliente", "page": 2, "limit": 3})
        invalid = await client.get("/api/v1/clients", params={"has_errors": "true"})
        search = await client.get("/api/v1/clients/search", params={"q": "Cliente C"})

    assert page.json()["total"] == 5
    assert [c["id"] for c in page.json()["clients"]] == [4, 5]
    assert [c["clave"] for c in invalid.json()["clients"]] == ["abc"]
    assert search.json()["total"] == 1
    assert search.json()["search_term"] == "Cliente C"


@pytest.mark.asyncio
async def test_validate_single_does_not_store(app):
    async with _client(app) as client:
        response = await client.post("/api/v1/validate/single", json={**VALID_CLIENT, "telefono": "123"})
        listing = await client.get("/api/v1/clients")

    assert response.status_code == 200
    assert response.json()["errors"]["telefono"] == "El teléfono debe tener al menos 10 dígitos"
    assert listing.json()["total"] == 0


@pytest.mark.asyncio
async def test_validate_all_returns_clients_and_stats(app):
    async with _client(app) as client:
        await client.post("/api/v1/clients", json=VALID_CLIENT)
        await client.post("/api/v1/clients", json={**VALID_CLIENT, "clave": "2", "correo": ""})

        response = await client.post("/api/v1/validate")
        stats = await client.get("/api/v1/stats")

    assert response.status_code == 200
    assert response.json()["stats"] == {
        "total": 2,
        "valid": 1,
        "invalid": 1,
        "errors_by_field": {"correo": 1},
    }
    assert stats.json() == response.json()["stats"]


@pytest.mark.asyncio
async def test_export_empty_store_returns_400(app):
    async with _client(app) as client:
        response = await client.get("/api/v1/export")

    assert response.status_code == 400
    assert response.json()["detail"]["code"] == "FILE_PROCESSING_ERROR"


@pytest.mark.asyncio
async def test_export_then_download(app):
    async with _client(app) as client:
        await client.post("/api/v1/clients", json=VALID_CLIENT)

        export = await client.get("/api/v1/export", params={"filename": "reporte"})
        assert export.status_code == 200
        body = export.json()
        assert body["filename"] == "reporte.xlsx"

        download = await client.get(body["file_url"])

    assert body["file_url"] == "/api/v1/uploads/files/reporte.xlsx"
    assert download.status_code == 200
    assert download.content[:2] == b"PK"


@pytest.mark.asyncio
async def test_clear_all_clients(app):
    async with _client(app) as client:
        await client.post("/api/v1/clients", json=VALID_CLIENT)
        cleared = await client.delete("/api/v1/clients")
        listing = await client.get("/api/v1/clients")

    assert cleared.status_code == 204
    assert listing.json()["total"] == 0
