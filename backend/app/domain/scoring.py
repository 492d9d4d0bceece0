"""Profit Pulse scoring engines.

Tier 1 (free): weighted QPV score over three self-ratings.
Tier 2/3: four-layer evaluation (founder readiness, idea characteristics,
historical patterns, contextual viability) plus rule-based insights.

Pure functions -- no I/O, deterministic apart from the injectable clock
used for ``evaluated_at`` and the idea id.
"""

import re
from datetime import datetime, timezone

from app.domain.failure_modes import get_failure_mode_data
from app.domain.insights import generate_gaps, generate_obstacles, generate_strengths
from app.domain.numbers import round_half_up
from app.schemas.evaluation import (
    BasicQPVInput,
    BasicQPVResult,
    EnergyFilterStatus,
    EnergyResponse,
    FullEvaluationInput,
    FullEvaluationResult,
    Interpretation,
    Layers,
    LayerScore,
)

# Tier 1 weights: Q x 40% + P x 30% + V x 30%
QPV_WEIGHTS: dict[str, float] = {
    "quickness": 0.4,
    "profitability": 0.3,
    "validation_ease": 0.3,
}

LAYER_WEIGHTS: dict[str, float] = {
    "founder_readiness": 0.30,
    "idea_characteristics": 0.40,
    "historical_patterns": 0.20,
    "contextual_viability": 0.10,
}

# Share of the TOTAL score each idea characteristic carries; sums to the layer's 0.40
IDEA_CHAR_WEIGHTS: dict[str, float] = {
    "quickness": 0.15,
    "profitability": 0.10,
    "validation_ease": 0.10,
    "market_demand": 0.05,
}

# Within the historical layer completion counts 3x sustainability
HISTORICAL_COMPLETION_WEIGHT = 0.75
HISTORICAL_SUSTAINABILITY_WEIGHT = 0.25

INTERPRETATION_TEXT: dict[Interpretation, str] = {
    Interpretation.EXCEPTIONAL: "Exceptional — launch this now",
    Interpretation.STRONG: "Strong — prioritize within 1-2 weeks",
    Interpretation.MODERATE: "Moderate — validate further before committing",
    Interpretation.WEAK: "Weak — reconsider or pivot significantly",
}

ENERGY_STATUS: dict[EnergyResponse, EnergyFilterStatus] = {
    EnergyResponse.YES: EnergyFilterStatus.PASS,
    EnergyResponse.NO: EnergyFilterStatus.FAIL,
    EnergyResponse.MAYBE: EnergyFilterStatus.REVISE,
}

DEFAULT_ENERGY_REASONING: dict[EnergyFilterStatus, str] = {
    EnergyFilterStatus.PASS: "You would be proud to maintain this at $500/month",
    EnergyFilterStatus.FAIL: "This idea is misaligned with your values — not worth maintaining even if profitable",
    EnergyFilterStatus.REVISE: "The scope, audience, or business model needs adjustment before committing",
}

IDEA_ID_SLUG_LENGTH = 20

_BASE36_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"
_NON_ALNUM = re.compile(r"[^a-z0-9]")


# ── Tier 1 ──────────────────────────────────────────────────────────


def get_interpretation(score: float) -> Interpretation:
    """Bucket a 0-10 score. Lower bound inclusive: 8.0 is exceptional, 7.99 strong."""
    if score >= 8.0:
        return Interpretation.EXCEPTIONAL
    if score >= 6.0:
        return Interpretation.STRONG
    if score >= 4.0:
        return Interpretation.MODERATE
    return Interpretation.WEAK


def interpretation_text(interpretation: Interpretation) -> str:
    return INTERPRETATION_TEXT[interpretation]


def score_basic(input: BasicQPVInput) -> BasicQPVResult:
    """Calculate the free-tier QPV score.

    Formula: (Q x 0.4) + (P x 0.3) + (V x 0.3), rounded to 2 decimals.
    The interpretation buckets the rounded score, as score_full does.
    The failure teaser always quotes the generic ``other`` category: the
    free tier collects no category.
    """
    raw = (
        input.quickness * QPV_WEIGHTS["quickness"]
        + input.profitability * QPV_WEIGHTS["profitability"]
        + input.validation_ease * QPV_WEIGHTS["validation_ease"]
    )

    score = round_half_up(raw, 2)

    failure_data = get_failure_mode_data("other")
    failure_teaser = f"But {failure_data.abandonment_rate}% of similar ideas fail. Want to see why?"

    return BasicQPVResult(
        score=score,
        interpretation=get_interpretation(score),
        failure_teaser=failure_teaser,
    )


# ── Tier 2/3 layers ─────────────────────────────────────────────────


def _layer_score(raw: float, layer: str) -> LayerScore:
    weighted = raw * LAYER_WEIGHTS[layer]
    percentage = (raw / 10) * 100
    return LayerScore(
        raw=round_half_up(raw, 2),
        weighted=round_half_up(weighted, 2),
        percentage=round_half_up(percentage, 1),
    )


def calculate_founder_readiness(input: FullEvaluationInput) -> LayerScore:
    """Layer 1 (30%): unweighted mean of skill match, time and financial buffer."""
    fr = input.founder_readiness
    raw = (fr.skill_match + fr.time_availability + fr.financial_buffer) / 3
    return _layer_score(raw, "founder_readiness")


def calculate_idea_characteristics(input: FullEvaluationInput) -> LayerScore:
    """Layer 2 (40%): enhanced QPV with market demand.

    The sub-weights are shares of the total score, so the weighted sum is
    divided by the layer weight to bring it back onto the 0-10 scale.
    """
    ic = input.idea_characteristics
    raw = (
        ic.quickness * IDEA_CHAR_WEIGHTS["quickness"]
        + ic.profitability * IDEA_CHAR_WEIGHTS["profitability"]
        + ic.validation_ease * IDEA_CHAR_WEIGHTS["validation_ease"]
        + ic.market_demand * IDEA_CHAR_WEIGHTS["market_demand"]
    ) / LAYER_WEIGHTS["idea_characteristics"]
    return _layer_score(raw, "idea_characteristics")


def calculate_historical_patterns(input: FullEvaluationInput) -> LayerScore:
    """Layer 3 (20%): derived from category failure data, not from user input."""
    failure_data = get_failure_mode_data(input.category)

    completion_score = 10 - (failure_data.abandonment_rate / 10)
    sustainability_score = failure_data.sustainability_rate / 10

    raw = (
        completion_score * HISTORICAL_COMPLETION_WEIGHT
        + sustainability_score * HISTORICAL_SUSTAINABILITY_WEIGHT
    )
    return _layer_score(raw, "historical_patterns")


def calculate_contextual_viability(input: FullEvaluationInput) -> LayerScore:
    """Layer 4 (10%): mean of life stage fit and market timing."""
    cv = input.contextual_viability
    raw = (cv.life_stage_fit + cv.market_timing) / 2
    return _layer_score(raw, "contextual_viability")


def calculate_layers(input: FullEvaluationInput) -> Layers:
    return Layers(
        founder_readiness=calculate_founder_readiness(input),
        idea_characteristics=calculate_idea_characteristics(input),
        historical_patterns=calculate_historical_patterns(input),
        contextual_viability=calculate_contextual_viability(input),
    )


def get_energy_filter_status(response: EnergyResponse) -> EnergyFilterStatus:
    return ENERGY_STATUS[EnergyResponse(response)]


def _to_base36(number: int) -> str:
    if number == 0:
        return "0"
    digits = []
    while number:
        number, remainder = divmod(number, 36)
        digits.append(_BASE36_DIGITS[remainder])
    return "".join(reversed(digits))


def generate_idea_id(idea_name: str, now: datetime | None = None) -> str:
    """Slug of the idea name plus a base-36 millisecond timestamp.

    Non-alphanumeric characters become hyphens; the slug is cut to 20
    characters. Collision avoidance only -- not a security identifier.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    slug = _NON_ALNUM.sub("-", idea_name.lower())[:IDEA_ID_SLUG_LENGTH]
    timestamp = _to_base36(int(now.timestamp() * 1000))
    return f"{slug}-{timestamp}"


def score_full(input: FullEvaluationInput, now: datetime | None = None) -> FullEvaluationResult:
    """Calculate the full four-layer evaluation.

    Args:
        input: Validated evaluation input (scores already clamped to [0, 10])
        now: Evaluation time (injectable for testing, defaults to datetime.now(timezone.utc))

    Returns:
        FullEvaluationResult; overall_score is the 2-decimal sum of the four
        rounded ``weighted`` layer values.
    """
    if now is None:
        now = datetime.now(timezone.utc)

    layers = calculate_layers(input)
    overall_score = round_half_up(sum(layer.weighted for _, layer in layers.items()), 2)

    energy_status = get_energy_filter_status(input.energy_filter.response)
    energy_reasoning = input.energy_filter.reasoning or DEFAULT_ENERGY_REASONING[energy_status]

    return FullEvaluationResult(
        overall_score=overall_score,
        interpretation=get_interpretation(overall_score),
        layers=layers,
        strengths=generate_strengths(input, layers),
        gaps=generate_gaps(input, layers),
        obstacles=generate_obstacles(input.category),
        energy_filter_status=energy_status,
        energy_filter_reasoning=energy_reasoning,
        evaluated_at=now,
        idea_id=generate_idea_id(input.idea_name, now),
    )
