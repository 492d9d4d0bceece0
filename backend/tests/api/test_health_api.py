"""Tests for health/readiness endpoints and startup validation."""

import pytest
from fastapi.testclient import TestClient

from app.db import redis as redis_module
from app.main import app, validate_price_map

pytestmark = pytest.mark.integration


def test_health_ok():
    client = TestClient(app)
    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "service": "profit-pulse"}


def test_health_503_while_shutting_down():
    client = TestClient(app)
    app.state.shutting_down = True
    try:
        response = client.get("/api/health")
    finally:
        app.state.shutting_down = False

    assert response.status_code == 503
    assert response.json()["status"] == "shutting_down"


async def test_ready_with_redis(api_client, fake_redis, monkeypatch):
    monkeypatch.setattr(redis_module, "_client", fake_redis)
    response = await api_client.get("/api/ready")

    assert response.status_code == 200
    assert response.json() == {"status": "ready", "checks": {"redis": True}}


async def test_ready_without_redis(api_client, monkeypatch):
    monkeypatch.setattr(redis_module, "_client", None)
    response = await api_client.get("/api/ready")

    assert response.status_code == 503
    assert response.json() == {"status": "degraded", "checks": {"redis": False}}


class TestValidatePriceMap:
    def test_missing_prices_do_not_block_startup(self, monkeypatch):
        monkeypatch.setenv("STRIPE_PRICE_STARTER", "price_starter")
        monkeypatch.setenv("STRIPE_PRICE_EXPLORER", "")

        assert validate_price_map() == ["stripe_price_explorer"]

    def test_all_prices_configured(self, monkeypatch):
        monkeypatch.setenv("STRIPE_PRICE_STARTER", "price_starter")
        monkeypatch.setenv("STRIPE_PRICE_EXPLORER", "price_explorer")

        assert validate_price_map() == []

    def test_debug_mode_reports_missing_prices(self, monkeypatch):
        monkeypatch.setenv("DEBUG", "true")
        monkeypatch.setenv("STRIPE_PRICE_STARTER", "")
        monkeypatch.setenv("STRIPE_PRICE_EXPLORER", "")

        assert validate_price_map() == ["stripe_price_starter", "stripe_price_explorer"]
