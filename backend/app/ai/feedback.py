"""AI-generated qualitative feedback on ideas.

Every public function degrades to None: a disabled or unconfigured
provider, an API failure or an unparseable reply never fails the
evaluation request that asked for feedback.
"""

from anthropic import AsyncAnthropic
import structlog
from pydantic import ValidationError

from app.ai.llm_helpers import invoke_with_retry, parse_json_response
from app.core.config import get_settings
from app.core.exceptions import AIProviderError
from app.domain.categories import CATEGORY_DISPLAY_NAMES, IdeaCategory
from app.schemas.ai import AIIdeaAnalysis, FreeIdeaAnalysis

logger = structlog.get_logger(__name__)

_client: AsyncAnthropic | None = None

CATEGORY_DESCRIPTIONS: dict[IdeaCategory, str] = {
    IdeaCategory.AI_WRAPPER: "AI tools built on top of APIs like OpenAI",
    IdeaCategory.SAAS_TOOL: "Software as a Service products",
    IdeaCategory.MICRO_SAAS: "Small, focused SaaS products",
    IdeaCategory.NOTION_TEMPLATE: "Notion templates and systems",
    IdeaCategory.DIGITAL_PRODUCT: "Digital downloads, tools, assets",
    IdeaCategory.NEWSLETTER: "Email newsletters",
    IdeaCategory.CONTENT_CREATOR: "YouTube, TikTok, podcasts",
    IdeaCategory.COMMUNITY: "Paid communities, memberships",
    IdeaCategory.MARKETPLACE: "Two-sided marketplaces",
    IdeaCategory.INFO_PRODUCT: "Courses, ebooks, guides",
    IdeaCategory.AGENCY_SERVICE: "Service agencies",
    IdeaCategory.CONSULTING: "Consulting services",
    IdeaCategory.PRODUCTIZED_SERVICE: "Packaged services with fixed scope",
    IdeaCategory.ECOMMERCE: "Physical or digital product stores",
    IdeaCategory.MOBILE_APP: "Mobile applications",
    IdeaCategory.CHROME_EXTENSION: "Browser extensions",
    IdeaCategory.OTHER: "Doesn't fit other categories",
}

JSON_ONLY = "\n\nRespond in valid JSON format only."


def get_client() -> AsyncAnthropic | None:
    """Return the shared Anthropic client, or None when AI feedback is off."""
    global _client

    settings = get_settings()
    if not settings.ai_enabled or not settings.anthropic_api_key:
        return None
    if _client is None:
        _client = AsyncAnthropic(api_key=settings.anthropic_api_key)
    return _client


async def _complete(system: str, user: str, *, json: bool = False, quality: bool = False) -> str:
    """Single-turn completion.

    Raises:
        AIProviderError: If AI is unavailable or the provider call fails
    """
    client = get_client()
    if client is None:
        raise AIProviderError("AI feedback is disabled or ANTHROPIC_API_KEY is not set")

    settings = get_settings()
    model = settings.ai_quality_model if quality else settings.ai_fast_model
    try:
        return await invoke_with_retry(
            client,
            model=model,
            system=system + (JSON_ONLY if json else ""),
            messages=[{"role": "user", "content": user}],
            max_tokens=settings.ai_max_tokens,
        )
    except Exception as e:
        raise AIProviderError(f"{type(e).__name__}: {e}") from e


async def _complete_json(system: str, user: str, action: str) -> dict | list | None:
    try:
        content = await _complete(system, user, json=True)
        return parse_json_response(content)
    except (AIProviderError, ValueError) as e:
        logger.warning("ai_feedback_failed", action=action, error=str(e), error_type=type(e).__name__)
        return None


async def analyze_free_idea(idea_name: str, description: str, score: float) -> FreeIdeaAnalysis | None:
    """Quick qualitative read on a free-tier idea."""
    system = (
        "You are a pragmatic business idea analyst for solo founders. "
        "Give short, actionable feedback without deep strategy."
    )
    user = f"""Analyze this business idea:

Name: {idea_name}
Description: {description}
QPV Score: {score}/10

Provide analysis in this exact JSON format:
{{
  "summary": "two sentences on the idea's viability",
  "strengths": ["strength1", "strength2"],
  "concerns": ["concern1", "concern2"],
  "nextStep": "the single most useful thing to do this week"
}}"""

    data = await _complete_json(system, user, action="analyze_free_idea")
    if not isinstance(data, dict):
        return None
    try:
        return FreeIdeaAnalysis.model_validate(data)
    except ValidationError as e:
        logger.warning("ai_feedback_invalid", action="analyze_free_idea", error=str(e))
        return None


async def analyze_idea(idea_name: str, description: str) -> AIIdeaAnalysis | None:
    """Structured analysis including a suggested category."""
    category_lines = "\n".join(
        f"- {category.value}: {CATEGORY_DESCRIPTIONS[category]}" for category in CATEGORY_DISPLAY_NAMES
    )
    system = (
        "You are a business idea analyst. Analyze the given business idea and provide structured feedback.\n\n"
        f"Categories to choose from:\n{category_lines}"
    )
    user = f"""Analyze this business idea:

Name: {idea_name}
Description: {description}

Provide analysis in this exact JSON format:
{{
  "suggestedCategory": "one of the categories listed",
  "targetAudience": "specific description of ideal customer",
  "competitors": ["competitor1", "competitor2", "competitor3"],
  "uniqueValueProposition": "what makes this different",
  "potentialRisks": ["risk1", "risk2", "risk3"],
  "marketValidation": "how to quickly validate demand",
  "quickWins": ["quick win 1", "quick win 2"]
}}"""

    data = await _complete_json(system, user, action="analyze_idea")
    if not isinstance(data, dict):
        return None
    try:
        return AIIdeaAnalysis.model_validate(data)
    except ValidationError as e:
        logger.warning("ai_feedback_invalid", action="analyze_idea", error=str(e))
        return None


async def generate_ai_recommendations(
    idea_name: str,
    description: str,
    category: IdeaCategory,
    overall_score: float,
    weakest_layer: str,
    weakest_layer_score: float,
) -> list[str] | None:
    """Three personalised recommendations focused on the weakest layer."""
    system = (
        "You are a startup advisor helping founders improve their business ideas.\n"
        "Provide specific, actionable recommendations. Be concise and practical."
    )
    user = f"""Help improve this business idea:

Name: {idea_name}
Description: {description}
Category: {IdeaCategory(category).value}
Current Score: {overall_score}/10
Weakest Area: {weakest_layer} ({weakest_layer_score}%)

Provide 3 specific, actionable recommendations to improve the score.
Each recommendation should be 1-2 sentences max.
Focus on the weakest area.
Return as JSON: {{"recommendations": ["rec1", "rec2", "rec3"]}}"""

    data = await _complete_json(system, user, action="generate_ai_recommendations")
    if isinstance(data, dict):
        data = data.get("recommendations")
    if not isinstance(data, list):
        return None
    return [str(item) for item in data]


async def generate_ai_pivot_suggestion(
    idea_name: str,
    description: str,
    category: IdeaCategory,
    overall_score: float,
) -> str | None:
    """One concrete pivot for ideas scoring below 5; None otherwise."""
    if overall_score >= 5:
        return None

    system = (
        "You are a startup advisor. The user has a low-scoring business idea.\n"
        "Suggest ONE specific pivot that could dramatically improve their chances of success.\n"
        "Be direct and specific. One paragraph max."
    )
    user = f"""This idea scored {overall_score}/10:

Name: {idea_name}
Description: {description}
Category: {IdeaCategory(category).value}

Suggest one specific pivot or modification that could significantly improve this idea's viability."""

    try:
        return await _complete(system, user, quality=True)
    except AIProviderError as e:
        logger.warning("ai_feedback_failed", action="generate_ai_pivot_suggestion", error=str(e))
        return None
