"""API-specific test fixtures."""

import fakeredis.aioredis
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.db.redis import get_redis
from app.main import app
from app.services.evaluation_service import build_envelope


@pytest_asyncio.fixture
async def fake_redis():
    """In-process fake Redis bound to the test's event loop."""
    r = fakeredis.aioredis.FakeRedis(decode_responses=True)
    yield r
    await r.aclose()


@pytest_asyncio.fixture
async def api_client(fake_redis):
    """In-process HTTP client with Redis replaced by fakeredis.

    The lifespan is not run, so no real Redis connection or Stripe price
    validation happens. Unhandled errors come back as 500 responses.
    """
    app.dependency_overrides[get_redis] = lambda: fake_redis
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def full_payload() -> dict:
    """camelCase body for POST /evaluate/full (all-8s SaaS tool)."""
    return {
        "ideaName": "Invoice Bot",
        "description": "Automates invoices for freelancers",
        "category": "saas-tool",
        "founderReadiness": {"skillMatch": 8, "timeAvailability": 8, "financialBuffer": 8},
        "ideaCharacteristics": {"quickness": 8, "profitability": 8, "validationEase": 8, "marketDemand": 8},
        "contextualViability": {"lifeStageFit": 8, "marketTiming": 8},
        "energyFilter": {"response": "yes"},
    }


@pytest.fixture
def envelope_payload(strong_input, weak_input, fixed_now):
    """Factory: wire-format evaluation envelope for export requests."""

    def _make(weak: bool = False) -> dict:
        input = weak_input if weak else strong_input
        return build_envelope(input, now=fixed_now).model_dump(mode="json", by_alias=True)

    return _make
