"""Tests for the API layer — routes, status codes and error envelopes.

Uses httpx.AsyncClient over ASGITransport. The service is mocked to
isolate the HTTP layer from the database.
"""

from __future__ import annotations

from datetime import datetime
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from pydantic import TypeAdapter

from wigs.api import deps
from wigs.api.errors import register_error_handlers
from wigs.api.routers import wigs
from wigs.services import NotFoundError, ServiceResult, UnexpectedError, ValidationError
from wigs.services.mapping import WigInput, WigView

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_svc():
    return MagicMock()


@pytest.fixture
def app(mock_svc):
    mock_session = AsyncMock()

    application = FastAPI()
    register_error_handlers(application)
    application.include_router(wigs.router, prefix="/api/wigs")

    async def _mock_session():
        yield mock_session

    application.dependency_overrides[deps.get_session] = _mock_session
    application.dependency_overrides[deps.get_wig_service] = lambda: mock_svc
    return application


@pytest.fixture
async def client(app):
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


def _ok(value):
    return AsyncMock(return_value=ServiceResult.success(value))


def _fail(error):
    return AsyncMock(return_value=ServiceResult.failure(error))


# ---------------------------------------------------------------------------
# Success paths
# ---------------------------------------------------------------------------


class TestWigsRouter:
    async def test_create(self, mock_svc, client):
        mock_svc.create = _ok(WigView(id=1, goal="Run 5k", description="daily"))

        resp = await client.post("/api/wigs", json={"goal": "Run 5k", "description": "daily"})

        assert resp.status_code == 201
        assert resp.json() == {"id": 1, "goal": "Run 5k", "description": "daily"}
        _session, data = mock_svc.create.call_args.args
        assert data == WigInput(goal="Run 5k", description="daily")

    async def test_create_trailing_slash(self, mock_svc, client):
        mock_svc.create = _ok(WigView(id=2, goal="x", description=None))
        resp = await client.post("/api/wigs/", json={"goal": "x"})
        assert resp.status_code == 201

    async def test_list(self, mock_svc, client):
        mock_svc.list_all = _ok(
            [WigView(1, "a", None), WigView(2, "b", "bee")]
        )

        resp = await client.get("/api/wigs")

        assert resp.status_code == 200
        assert resp.json() == [
            {"id": 1, "goal": "a", "description": None},
            {"id": 2, "goal": "b", "description": "bee"},
        ]

    async def test_list_empty(self, mock_svc, client):
        mock_svc.list_all = _ok([])
        resp = await client.get("/api/wigs/")
        assert resp.status_code == 200
        assert resp.json() == []

    async def test_get(self, mock_svc, client):
        mock_svc.get = _ok(WigView(7, "Read", None))
        resp = await client.get("/api/wigs/7")
        assert resp.status_code == 200
        assert resp.json()["id"] == 7
        assert mock_svc.get.call_args.args[1] == 7

    async def test_update(self, mock_svc, client):
        mock_svc.update = _ok(WigView(1, "Run 10k", None))

        resp = await client.put("/api/wigs/1", json={"goal": "Run 10k"})

        assert resp.status_code == 200
        assert resp.json() == {"id": 1, "goal": "Run 10k", "description": None}
        _session, wig_id, data = mock_svc.update.call_args.args
        assert wig_id == 1
        assert data == WigInput(goal="Run 10k", description=None)

    async def test_delete(self, mock_svc, client):
        mock_svc.delete = _ok(None)
        resp = await client.delete("/api/wigs/1")
        assert resp.status_code == 204
        assert resp.content == b""


# ---------------------------------------------------------------------------
# Error envelopes
# ---------------------------------------------------------------------------


class TestErrorEnvelopes:
    async def test_validation_error(self, mock_svc, client):
        mock_svc.create = _fail(ValidationError({"goal": "goal is required"}))

        resp = await client.post("/api/wigs", json={"goal": ""})

        assert resp.status_code == 400
        assert resp.json() == {
            "status": 400,
            "message": "input validation failed",
            "errors": {"goal": "goal is required"},
        }

    async def test_not_found(self, mock_svc, client):
        mock_svc.get = _fail(NotFoundError(999))

        resp = await client.get("/api/wigs/999")

        assert resp.status_code == 404
        body = resp.json()
        assert body["status"] == 404
        assert body["message"] == "wig not found. id: 999"
        assert isinstance(TypeAdapter(datetime).validate_python(body["timestamp"]), datetime)

    async def test_delete_not_found(self, mock_svc, client):
        mock_svc.delete = _fail(NotFoundError(3))
        resp = await client.delete("/api/wigs/3")
        assert resp.status_code == 404
        assert resp.json()["message"] == "wig not found. id: 3"

    async def test_update_not_found(self, mock_svc, client):
        mock_svc.update = _fail(NotFoundError(3))
        resp = await client.put("/api/wigs/3", json={"goal": "x"})
        assert resp.status_code == 404

    async def test_unexpected_service_error(self, mock_svc, client):
        mock_svc.list_all = _fail(UnexpectedError("OperationalError"))

        resp = await client.get("/api/wigs")

        assert resp.status_code == 500
        assert resp.json()["message"] == "internal error: OperationalError"
        assert "timestamp" in resp.json()

    async def test_unhandled_exception_is_500(self, mock_svc, client):
        mock_svc.get = AsyncMock(side_effect=RuntimeError("boom"))

        resp = await client.get("/api/wigs/1")

        assert resp.status_code == 500
        body = resp.json()
        assert body["status"] == 500
        assert body["message"] == "internal error: RuntimeError"
        assert "Traceback" not in resp.text

    async def test_wrong_body_type_uses_validation_envelope(self, mock_svc, client):
        mock_svc.create = AsyncMock()

        resp = await client.post("/api/wigs", json={"goal": 5})

        assert resp.status_code == 400
        body = resp.json()
        assert body["message"] == "input validation failed"
        assert "goal" in body["errors"]
        mock_svc.create.assert_not_awaited()

    async def test_malformed_json(self, client):
        resp = await client.post(
            "/api/wigs", content=b"{not json", headers={"content-type": "application/json"}
        )
        assert resp.status_code == 400
        assert resp.json()["message"] == "input validation failed"

    async def test_non_integer_id(self, client):
        resp = await client.get("/api/wigs/abc")
        assert resp.status_code == 400
        assert "wig_id" in resp.json()["errors"]

    async def test_unknown_route_uses_error_envelope(self, client):
        resp = await client.get("/api/nope")
        assert resp.status_code == 404
        assert resp.json()["status"] == 404
        assert "timestamp" in resp.json()
