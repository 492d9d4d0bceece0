"""Tests for the category catalogue route."""

import pytest

pytestmark = pytest.mark.integration


async def test_lists_every_category(api_client):
    response = await api_client.get("/api/categories")

    assert response.status_code == 200
    categories = response.json()
    assert len(categories) == 17
    assert categories[0] == {
        "id": "ai-wrapper",
        "name": "AI Wrapper/Tool",
        "abandonmentRate": 78,
        "sustainabilityRate": 22,
    }
    assert categories[-1]["id"] == "other"
    assert categories[-1]["abandonmentRate"] == 68
    assert len({c["id"] for c in categories}) == 17
