"""Shared test fixtures for all test groups."""

from datetime import UTC, datetime

import pytest

from app.core.config import get_settings
from app.schemas.evaluation import FullEvaluationInput

FIXED_NOW = datetime(2026, 3, 7, 14, 30, 0, 123000, tzinfo=UTC)


def make_full_input(
    *,
    idea_name: str = "Test",
    description: str = "",
    category: str = "saas-tool",
    skill_match: float = 8,
    time_availability: float = 8,
    financial_buffer: float = 8,
    quickness: float = 8,
    profitability: float = 8,
    validation_ease: float = 8,
    market_demand: float = 8,
    life_stage_fit: float = 8,
    market_timing: float = 8,
    energy: str = "yes",
    reasoning: str | None = None,
) -> FullEvaluationInput:
    """Build a FullEvaluationInput from the camelCase wire shape."""
    return FullEvaluationInput.model_validate({
        "ideaName": idea_name,
        "description": description,
        "category": category,
        "founderReadiness": {
            "skillMatch": skill_match,
            "timeAvailability": time_availability,
            "financialBuffer": financial_buffer,
        },
        "ideaCharacteristics": {
            "quickness": quickness,
            "profitability": profitability,
            "validationEase": validation_ease,
            "marketDemand": market_demand,
        },
        "contextualViability": {
            "lifeStageFit": life_stage_fit,
            "marketTiming": market_timing,
        },
        "energyFilter": {"response": energy, "reasoning": reasoning},
    })


@pytest.fixture
def make_input():
    """Factory fixture: make_input(quickness=3, category="newsletter", ...)."""
    return make_full_input


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def strong_input() -> FullEvaluationInput:
    """All-8s SaaS tool: overall 7.1, strong."""
    return make_full_input()


@pytest.fixture
def weak_input() -> FullEvaluationInput:
    """Low scores everywhere in a high-failure category."""
    return make_full_input(
        idea_name="Creator Hub",
        category="content-creator",
        skill_match=2,
        time_availability=2,
        financial_buffer=2,
        quickness=2,
        profitability=2,
        validation_ease=2,
        market_demand=2,
        life_stage_fit=2,
        market_timing=2,
        energy="maybe",
    )


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    """Settings are lru_cached; drop the cache so env patches apply per test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
