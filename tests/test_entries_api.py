"""
Personal Logger — Entry API Tests
==================================

What:  HTTP tests for /api/entries and /api/templates through the full app
       (middleware, exception handlers, routes) on a real temporary store.

What we test:
    ✅ Save returns 201 with the stored entry
    ✅ Blank content / unknown type → 400 validation_error, nothing stored
    ✅ Recent list newest first, limit fallback
    ✅ Storage not initialized → 503 storage_unavailable
    ✅ Write failure → 500 write_error
    ✅ Templates for all three types
"""

from unittest.mock import AsyncMock, patch

import pytest
from httpx import ASGITransport, AsyncClient

from personal_logger.exceptions import WriteError
from personal_logger.main import create_app
from personal_logger.services.storage_engine import StorageEngine


class TestCreateEntry:

    @pytest.mark.asyncio
    async def test_save_returns_stored_entry(self, test_client):
        response = await test_client.post(
            "/api/entries", json={"type": "issue", "content": "  Spill in aisle 3  "}
        )

        assert response.status_code == 201
        assert response.json() == {
            "id": 1,
            "type": "issue",
            "content": "Spill in aisle 3",
            "timestamp": "2026-10-18T09:00:00.000Z",
            "synced": False,
        }

    @pytest.mark.asyncio
    async def test_blank_content_is_rejected(self, test_client, storage):
        response = await test_client.post("/api/entries", json={"type": "note", "content": "   "})

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "validation_error"
        assert body["details"] == {"field": "content"}
        assert body["request_id"]
        assert await storage.count() == 0

    @pytest.mark.asyncio
    async def test_unknown_type_is_rejected(self, test_client, storage):
        response = await test_client.post("/api/entries", json={"type": "memo", "content": "Hello"})

        assert response.status_code == 400
        assert response.json()["details"]["field"] == "type"
        assert await storage.count() == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload, field",
        [
            ({"content": "Spill"}, "type"),
            ({"type": "note", "content": None}, "content"),
            ({"type": ["note"], "content": "x"}, "type"),
        ],
    )
    async def test_unparseable_body_uses_error_shape(self, test_client, storage, payload, field):
        response = await test_client.post(
            "/api/entries", json=payload, headers={"X-Request-ID": "bad-body"}
        )

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "validation_error"
        assert body["details"] == {"field": field}
        assert body["request_id"] == "bad-body"
        assert "detail" not in body
        assert await storage.count() == 0

    @pytest.mark.asyncio
    async def test_client_timestamp_and_id_ignored(self, test_client):
        response = await test_client.post(
            "/api/entries",
            json={
                "type": "task",
                "content": "Update schedule",
                "id": 500,
                "timestamp": "2000-01-01T00:00:00.000Z",
                "synced": True,
            },
        )

        body = response.json()
        assert body["id"] == 1
        assert body["timestamp"] == "2026-10-18T09:00:00.000Z"
        assert body["synced"] is False

    @pytest.mark.asyncio
    async def test_write_failure_returns_500(self, test_client, storage):
        failure = WriteError(context={"error_type": "OperationalError", "database": "/srv/data.db"})
        with patch.object(storage, "append", AsyncMock(side_effect=failure)):
            response = await test_client.post("/api/entries", json={"type": "note", "content": "x"})

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "write_error"
        assert body["message"] == "Failed to save entry"
        assert "details" not in body
        assert "/srv/data.db" not in response.text

    @pytest.mark.asyncio
    async def test_validation_context_returned_as_details(self, test_client):
        response = await test_client.post("/api/entries", json={"type": "memo", "content": "x"})

        assert response.json()["details"] == {
            "field": "type",
            "allowed_types": ["issue", "task", "note"],
        }


class TestListEntries:

    @pytest.mark.asyncio
    async def test_save_then_reload(self, test_client):
        for entry_type in ("issue", "task", "note"):
            await test_client.post("/api/entries", json={"type": entry_type, "content": entry_type})

        response = await test_client.get("/api/entries", params={"limit": 2})

        assert response.status_code == 200
        body = response.json()
        assert body["count"] == 2
        assert [e["type"] for e in body["entries"]] == ["note", "task"]
        assert response.headers["cache-control"] == "no-store"

    @pytest.mark.asyncio
    async def test_empty_store(self, test_client):
        response = await test_client.get("/api/entries")

        assert response.status_code == 200
        assert response.json() == {"entries": [], "count": 0}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("limit", ["0", "-4"])
    async def test_non_positive_limit_uses_default(self, test_client, limit):
        for i in range(11):
            await test_client.post("/api/entries", json={"type": "note", "content": f"n{i}"})

        response = await test_client.get("/api/entries", params={"limit": limit})

        assert response.json()["count"] == 10

    @pytest.mark.asyncio
    async def test_non_numeric_limit_is_rejected(self, test_client):
        response = await test_client.get("/api/entries", params={"limit": "abc"})

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"
        assert response.json()["details"] == {"field": "limit"}


class TestStorageUnavailable:

    @pytest.mark.asyncio
    async def test_uninitialized_storage_returns_503(self, database_url):
        app = create_app(storage=StorageEngine(database_url), force_https=False)
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            saved = await client.post("/api/entries", json={"type": "note", "content": "hi"})
            listed = await client.get("/api/entries")

        assert saved.status_code == 503
        assert saved.json()["error"] == "storage_unavailable"
        assert listed.status_code == 503

    @pytest.mark.asyncio
    async def test_validation_still_answers_400_without_storage(self, database_url):
        app = create_app(storage=StorageEngine(database_url), force_https=False)
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            response = await client.post("/api/entries", json={"type": "note", "content": ""})

        assert response.status_code == 400


class TestTemplates:

    @pytest.mark.asyncio
    async def test_templates_for_each_type(self, test_client):
        response = await test_client.get("/api/templates")

        assert response.status_code == 200
        templates = response.json()["templates"]
        assert set(templates) == {"issue", "task", "note"}
        assert "Safety concern" in templates["issue"]
        assert "Restock supplies" in templates["task"]
        assert "Shift handover" in templates["note"]
        assert all(len(phrases) == 5 for phrases in templates.values())
