"""Tests for AI feedback: graceful degradation and response parsing."""

import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from app.ai import feedback
from app.domain.categories import IdeaCategory
from app.schemas.ai import AIIdeaAnalysis, FreeIdeaAnalysis

pytestmark = pytest.mark.unit


def _client_returning(text: str) -> MagicMock:
    response = MagicMock()
    response.content = [MagicMock(text=text)]
    client = MagicMock()
    client.messages.create = AsyncMock(return_value=response)
    return client


def _client_raising(exc: Exception) -> MagicMock:
    client = MagicMock()
    client.messages.create = AsyncMock(side_effect=exc)
    return client


@pytest.fixture(autouse=True)
def _reset_client(monkeypatch):
    monkeypatch.setattr(feedback, "_client", None)


class TestGetClient:
    def test_none_without_api_key(self, monkeypatch):
        monkeypatch.setenv("ANTHROPIC_API_KEY", "")
        assert feedback.get_client() is None

    def test_none_when_disabled(self, monkeypatch):
        monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-ant-test")
        monkeypatch.setenv("AI_ENABLED", "false")
        assert feedback.get_client() is None

    def test_client_is_shared(self, monkeypatch):
        monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-ant-test")
        monkeypatch.setenv("AI_ENABLED", "true")
        first = feedback.get_client()
        assert first is not None
        assert feedback.get_client() is first


class TestAnalyzeFreeIdea:
    async def test_parses_fenced_json(self):
        payload = {
            "summary": "Solid niche tool.",
            "strengths": ["Clear buyer"],
            "concerns": ["Crowded market"],
            "nextStep": "Interview 5 freelancers",
        }
        client = _client_returning(f"```json\n{json.dumps(payload)}\n```")

        with patch("app.ai.feedback.get_client", return_value=client):
            result = await feedback.analyze_free_idea("Invoice Bot", "Automates invoices for freelancers", 7.0)

        assert result == FreeIdeaAnalysis(
            summary="Solid niche tool.",
            strengths=["Clear buyer"],
            concerns=["Crowded market"],
            next_step="Interview 5 freelancers",
        )
        prompt = client.messages.create.call_args.kwargs["messages"][0]["content"]
        assert "QPV Score: 7.0/10" in prompt

    async def test_none_when_unconfigured(self):
        with patch("app.ai.feedback.get_client", return_value=None):
            assert await feedback.analyze_free_idea("Idea", "Some description", 5.0) is None

    async def test_none_on_provider_error(self):
        client = _client_raising(RuntimeError("connection reset"))
        with patch("app.ai.feedback.get_client", return_value=client):
            assert await feedback.analyze_free_idea("Idea", "Some description", 5.0) is None

    async def test_none_on_invalid_json(self):
        with patch("app.ai.feedback.get_client", return_value=_client_returning("Sure! Here you go")):
            assert await feedback.analyze_free_idea("Idea", "Some description", 5.0) is None

    async def test_none_on_wrong_shape(self):
        with patch("app.ai.feedback.get_client", return_value=_client_returning('{"strengths": []}')):
            assert await feedback.analyze_free_idea("Idea", "Some description", 5.0) is None


class TestAnalyzeIdea:
    async def test_unknown_category_falls_back(self):
        payload = {
            "suggestedCategory": "space-tourism",
            "targetAudience": "Freelancers",
            "competitors": ["FreshBooks"],
            "uniqueValueProposition": "Zero setup",
            "potentialRisks": ["Churn"],
            "marketValidation": "Landing page",
            "quickWins": ["Post on Reddit"],
        }
        with patch("app.ai.feedback.get_client", return_value=_client_returning(json.dumps(payload))):
            result = await feedback.analyze_idea("Invoice Bot", "Automates invoices")

        assert isinstance(result, AIIdeaAnalysis)
        assert result.suggested_category == IdeaCategory.OTHER
        assert result.competitors == ["FreshBooks"]

    async def test_prompt_lists_every_category(self):
        client = _client_returning("{}")
        with patch("app.ai.feedback.get_client", return_value=client):
            assert await feedback.analyze_idea("Idea", "Desc") is None

        system = client.messages.create.call_args.kwargs["system"]
        for category in IdeaCategory:
            assert f"- {category.value}:" in system


class TestRecommendations:
    async def test_returns_list(self):
        reply = '{"recommendations": ["Cut scope", "Pre-sell", "Find a niche"]}'
        client = _client_returning(reply)
        with patch("app.ai.feedback.get_client", return_value=client):
            result = await feedback.generate_ai_recommendations(
                "Idea", "Desc", IdeaCategory.SAAS_TOOL, 6.7, "Historical Patterns", 35.0
            )

        assert result == ["Cut scope", "Pre-sell", "Find a niche"]
        prompt = client.messages.create.call_args.kwargs["messages"][0]["content"]
        assert "Weakest Area: Historical Patterns (35.0%)" in prompt
        assert "Category: saas-tool" in prompt

    async def test_accepts_bare_list(self):
        with patch("app.ai.feedback.get_client", return_value=_client_returning('["One", "Two"]')):
            result = await feedback.generate_ai_recommendations(
                "Idea", "Desc", IdeaCategory.OTHER, 4.0, "Founder Readiness", 20.0
            )
        assert result == ["One", "Two"]

    async def test_none_when_unconfigured(self):
        with patch("app.ai.feedback.get_client", return_value=None):
            result = await feedback.generate_ai_recommendations(
                "Idea", "Desc", IdeaCategory.OTHER, 4.0, "Founder Readiness", 20.0
            )
        assert result is None


class TestPivotSuggestion:
    async def test_skipped_at_five_or_above(self):
        client = _client_returning("Pivot!")
        with patch("app.ai.feedback.get_client", return_value=client):
            assert await feedback.generate_ai_pivot_suggestion("Idea", "Desc", IdeaCategory.OTHER, 5.0) is None
        client.messages.create.assert_not_called()

    async def test_uses_quality_model(self, monkeypatch):
        monkeypatch.setenv("AI_QUALITY_MODEL", "claude-quality-test")
        client = _client_returning("Sell it as a done-for-you service.")
        with patch("app.ai.feedback.get_client", return_value=client):
            result = await feedback.generate_ai_pivot_suggestion("Idea", "Desc", IdeaCategory.NEWSLETTER, 3.2)

        assert result == "Sell it as a done-for-you service."
        assert client.messages.create.call_args.kwargs["model"] == "claude-quality-test"

    async def test_none_on_provider_error(self):
        client = _client_raising(RuntimeError("boom"))
        with patch("app.ai.feedback.get_client", return_value=client):
            assert await feedback.generate_ai_pivot_suggestion("Idea", "Desc", IdeaCategory.OTHER, 2.0) is None
