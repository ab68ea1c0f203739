# tests/api/test_routes.py
from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI, Request
from fastapi.testclient import TestClient

from api.deps import get_template_repository
from api.routes import api_router
from domain.catalog.errors import PersistenceError
from infrastructure.config import AppConfig
from main import init_runtime


@pytest.fixture
def client(template_store, row_factory):
    app = FastAPI()
    init_runtime(app, AppConfig())

    @app.middleware("http")
    async def fake_session(request: Request, call_next):
        user = request.headers.get("x-test-user")
        request.state.identity = {"id": user, "is_pro": True} if user else None
        return await call_next(request)

    app.include_router(api_router, prefix="/api")
    app.dependency_overrides[get_template_repository] = lambda: template_store

    template_store.rows = [
        row_factory("tub-to-shower", id=1, usage_count=5),
        row_factory("shower-replacement", id=2, usage_count=1),
        row_factory("roofing", id=3, trade_id="roofing", trade_name="Roofing"),
        row_factory("walk-in-tub", id=4, is_default=False, created_by="user_1"),
        row_factory("fence", id=5, trade_id="fence", trade_name="Fence", is_active=False),
    ]
    return TestClient(app)


# ----- catalog -----
def test_list_trades(client):
    r = client.get("/api/catalog/trades")
    assert r.status_code == 200
    trades = r.json()["trades"]
    assert [t["id"] for t in trades] == ["bathroom", "kitchen", "roofing", "hvac"]
    assert "tub-to-shower" in trades[0]["job_type_ids"]
    assert r.json()["languages"] == ["en", "es"]


def test_get_trade_localized(client):
    r = client.get("/api/catalog/trades/bathroom", params={"language": "es"})
    assert r.status_code == 200
    body = r.json()
    assert body["language"] == "es"
    assert body["job_types"][0]["name"] == "Conversión de Tina a Regadera"


def test_get_job_type_and_404(client):
    r = client.get("/api/catalog/trades/bathroom/job-types/tub-to-shower")
    assert r.status_code == 200
    assert r.json()["options_section_title"] == "Options"
    assert r.json()["job_type"]["base_price_range"] == {"low": 8500, "high": 12000}

    assert client.get("/api/catalog/trades/pools").status_code == 404
    assert client.get("/api/catalog/trades/bathroom/job-types/sauna").status_code == 404


# ----- estimates -----
def test_create_estimate(client):
    r = client.post(
        "/api/estimates",
        json={"trade_id": "bathroom", "job_type_id": "tub-to-shower", "selection": {"niche": True, "glass-door": "framed"}},
    )
    assert r.status_code == 200
    est = r.json()["estimate"]
    assert (est["price_range_low"], est["price_range_high"]) == (9750, 13250)
    assert est["scope_sections"][-1] == {
        "title": "Options",
        "items": ["Install recessed shower niche with waterproofed interior.", "Install framed glass shower door."],
    }
    assert r.json()["language"] == "en"


def test_estimate_unknown_job_type(client):
    r = client.post("/api/estimates", json={"trade_id": "bathroom", "job_type_id": "sauna"})
    assert r.status_code == 404


def test_estimate_invalid_selection(client):
    r = client.post(
        "/api/estimates",
        json={"trade_id": "bathroom", "job_type_id": "tub-to-shower", "selection": {"glass-door": "stained"}},
    )
    assert r.status_code == 422
    assert r.json()["detail"]["option_id"] == "glass-door"


# ----- templates -----
def test_list_templates_anonymous(client):
    r = client.get("/api/templates")
    assert r.status_code == 200
    body = r.json()
    assert body["total"] == 3
    assert [g["trade_id"] for g in body["templates"]] == ["bathroom", "roofing"]
    assert [t["job_type_id"] for t in body["templates"][0]["job_types"]] == ["tub-to-shower", "shower-replacement"]


def test_list_templates_includes_own_rows(client):
    r = client.get("/api/templates", headers={"x-test-user": "user_1"})
    assert r.json()["total"] == 4

    r = client.get("/api/templates", headers={"x-test-user": "user_2"})
    assert r.json()["total"] == 3


def test_list_templates_by_trade(client):
    r = client.get("/api/templates", params={"trade_id": "roofing"})
    assert [g["trade_id"] for g in r.json()["templates"]] == ["roofing"]


def test_get_and_use_template(client, template_store):
    assert client.get("/api/templates/1").json()["job_type_id"] == "tub-to-shower"
    assert client.get("/api/templates/99").status_code == 404

    assert client.post("/api/templates/2/use").status_code == 200
    assert template_store.by_job_type("shower-replacement").usage_count == 2
    assert client.post("/api/templates/99/use").status_code == 404


def test_default_job_types(client):
    ids = client.get("/api/templates/defaults").json()["job_type_ids"]
    assert ids[:3] == ["bathroom-remodel", "shower-replacement", "tub-to-shower"]


def test_reconcile_endpoint(client, template_store):
    r = client.post("/api/templates/reconcile")
    assert r.status_code == 200
    first = r.json()
    # fence was inactive; tub-to-shower/shower-replacement/roofing exist
    assert first["activated"] == 1
    assert first["inserted"] == len(client.get("/api/templates/defaults").json()["job_type_ids"]) - 4

    assert client.post("/api/templates/reconcile").json() == {"inserted": 0, "activated": 0}
    assert client.post("/api/templates/reconcile", params={"force": True}).json() == {"inserted": 0, "activated": 0}
    assert template_store.by_job_type("fence").is_active is True


def test_template_store_outage_is_503(client, template_store):
    template_store.list_visible = AsyncMock(side_effect=PersistenceError("connection refused"))
    template_store.get_by_id = AsyncMock(side_effect=PersistenceError("connection refused"))
    template_store.increment_usage = AsyncMock(side_effect=PersistenceError("connection refused"))

    assert client.get("/api/templates").status_code == 503
    assert client.get("/api/templates/1").status_code == 503
    assert client.post("/api/templates/1/use").status_code == 503
