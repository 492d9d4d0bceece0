"""Pydantic schemas for evaluation inputs and results.

Wire format is camelCase (``ideaName``, ``founderReadiness``...) to stay
compatible with the existing UI; Python code uses snake_case attributes.
Self-rated scores are clamped into [0, 10] and unknown categories fall
back to ``other`` at this boundary, so the scoring functions never see
out-of-domain values.
"""

from datetime import datetime
from enum import Enum
from typing import Annotated

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.domain.categories import IdeaCategory, coerce_category
from app.domain.numbers import clamp_score

Score = Annotated[float, Field(allow_inf_nan=False), AfterValidator(clamp_score)]
Category = Annotated[IdeaCategory, BeforeValidator(coerce_category)]


class CamelModel(BaseModel):
    """Base model: camelCase aliases on the wire, snake_case in Python, immutable."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class Interpretation(str, Enum):
    """Score bucket shared by the basic and layered scorers."""

    EXCEPTIONAL = "exceptional"
    STRONG = "strong"
    MODERATE = "moderate"
    WEAK = "weak"


class EnergyResponse(str, Enum):
    YES = "yes"
    NO = "no"
    MAYBE = "maybe"


class EnergyFilterStatus(str, Enum):
    PASS = "pass"
    FAIL = "fail"
    REVISE = "revise"


class GapType(str, Enum):
    """Gap severity. Declaration order is sort order (critical first)."""

    CRITICAL = "critical"
    WARNING = "warning"
    MINOR = "minor"


class Priority(str, Enum):
    """Suggestion priority. Declaration order is sort order (high first)."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


# ── Tier 1: basic QPV ───────────────────────────────────────────────


class BasicQPVInput(CamelModel):
    idea_name: str = ""
    description: str = ""
    quickness: Score
    profitability: Score
    validation_ease: Score


class BasicQPVRequest(BasicQPVInput):
    """Free-tier request body: name and description are required here."""

    idea_name: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=10, max_length=1000)


class BasicQPVResult(CamelModel):
    score: float = Field(..., description="Weighted score 0-10, two decimals")
    interpretation: Interpretation
    failure_teaser: str


# ── Tier 2/3: full multi-layer evaluation ───────────────────────────


class FounderReadiness(CamelModel):
    skill_match: Score
    time_availability: Score
    financial_buffer: Score


class IdeaCharacteristics(CamelModel):
    quickness: Score
    profitability: Score
    validation_ease: Score
    market_demand: Score


class ContextualViability(CamelModel):
    life_stage_fit: Score
    market_timing: Score


class EnergyFilter(CamelModel):
    response: EnergyResponse
    reasoning: str | None = Field(None, max_length=500)


class FullEvaluationInput(CamelModel):
    idea_name: str = Field(..., min_length=1, max_length=200)
    description: str = Field("", max_length=2000)
    category: Category = IdeaCategory.OTHER
    founder_readiness: FounderReadiness
    idea_characteristics: IdeaCharacteristics
    contextual_viability: ContextualViability
    energy_filter: EnergyFilter


class LayerScore(CamelModel):
    raw: float = Field(..., description="Layer score on the 0-10 scale, two decimals")
    weighted: float = Field(..., description="raw x layer weight, two decimals")
    percentage: float = Field(..., description="raw / 10 x 100, one decimal")


class Layers(CamelModel):
    founder_readiness: LayerScore
    idea_characteristics: LayerScore
    historical_patterns: LayerScore
    contextual_viability: LayerScore

    def items(self) -> list[tuple[str, LayerScore]]:
        """(layer key, score) pairs in fixed layer order."""
        return [
            ("founder_readiness", self.founder_readiness),
            ("idea_characteristics", self.idea_characteristics),
            ("historical_patterns", self.historical_patterns),
            ("contextual_viability", self.contextual_viability),
        ]


class Gap(CamelModel):
    type: GapType
    description: str
    mitigation: str
    action: str


class Obstacle(CamelModel):
    name: str
    failure_rate: int
    description: str
    mitigation: str
    action: str


class FullEvaluationResult(CamelModel):
    overall_score: float
    interpretation: Interpretation
    layers: Layers
    strengths: list[str] = Field(default_factory=list)
    gaps: list[Gap] = Field(default_factory=list)
    obstacles: list[Obstacle] = Field(default_factory=list)
    energy_filter_status: EnergyFilterStatus
    energy_filter_reasoning: str
    evaluated_at: datetime
    idea_id: str


class ImprovementSuggestion(CamelModel):
    priority: Priority
    category: str
    title: str
    description: str
    impact: str
    action: str
    potential_score_gain: float


# ── Envelopes & comparisons ─────────────────────────────────────────

EVALUATION_SCHEMA_VERSION = "2.0"


class EvaluationEnvelope(CamelModel):
    """Versioned container for one evaluation: input, result and derived advice.

    Used as the full-evaluation API response and as the JSON export format.
    """

    version: str = EVALUATION_SCHEMA_VERSION
    exported_at: datetime | None = None
    input: FullEvaluationInput
    result: FullEvaluationResult
    suggestions: list[ImprovementSuggestion] = Field(default_factory=list)
    pivot_suggestion: str | None = None
    potential_score: float | None = None


class EvaluationComparison(CamelModel):
    """Side-by-side comparison of 2-5 evaluations."""

    results: list[FullEvaluationResult] = Field(default_factory=list)
    winner_index: int
    winner_idea_id: str
    layer_leaders: dict[str, int] = Field(
        default_factory=dict,
        description="Layer key (camelCase) -> index of the idea with the highest percentage",
    )


class FullEvaluationResponse(EvaluationEnvelope):
    """Full-evaluation API response: the envelope plus optional AI advice."""

    ai_recommendations: list[str] | None = None
    ai_pivot_suggestion: str | None = None


class ComparisonRequest(CamelModel):
    ideas: list[FullEvaluationInput] = Field(..., min_length=2, max_length=5)


class BatchExportRequest(CamelModel):
    evaluations: list[EvaluationEnvelope] = Field(..., min_length=1)
