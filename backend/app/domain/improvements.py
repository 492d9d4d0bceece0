"""Improvement suggestions, pivot hints and idea comparison.

Pure domain functions operating on an evaluation input and its result.
No I/O, no side effects, fully deterministic.
"""

from pydantic.alias_generators import to_camel

from app.domain.categories import SERVICE_CATEGORIES, category_display_name
from app.domain.numbers import format_number
from app.schemas.evaluation import (
    EnergyFilterStatus,
    EvaluationComparison,
    FullEvaluationInput,
    FullEvaluationResult,
    ImprovementSuggestion,
    Priority,
)

MAX_SUGGESTIONS = 5

# Diminishing returns when stacking every suggestion's estimated gain
POTENTIAL_GAIN_FACTOR = 0.7

LAYER_DISPLAY_NAMES: dict[str, str] = {
    "founder_readiness": "Founder Readiness",
    "idea_characteristics": "Idea Characteristics",
    "historical_patterns": "Historical Patterns",
    "contextual_viability": "Contextual Viability",
}

_PRIORITY_ORDER: dict[Priority, int] = {priority: i for i, priority in enumerate(Priority)}


def format_layer_name(layer_key: str) -> str:
    return LAYER_DISPLAY_NAMES.get(layer_key, layer_key)


def generate_improvement_suggestions(
    input: FullEvaluationInput,
    result: FullEvaluationResult,
) -> list[ImprovementSuggestion]:
    """Generate up to five targeted suggestions to raise the overall score.

    Per-layer checks only fire while the layer is below its threshold
    (founder 70%, idea 70%, historical 50%, contextual 60%). A "quick win"
    pointing at the weakest layer is put first when 5 <= overall < 7.

    Ordering: priority (high, medium, low), then potential_score_gain
    descending; ties keep insertion order.
    """
    fr = input.founder_readiness
    ic = input.idea_characteristics
    cv = input.contextual_viability
    layers = result.layers

    suggestions: list[ImprovementSuggestion] = []

    # Layer 1: Founder Readiness
    if layers.founder_readiness.percentage < 70:
        if fr.skill_match < 6:
            suggestions.append(ImprovementSuggestion(
                priority=Priority.HIGH,
                category="Founder Readiness",
                title="Address Skill Gap",
                description=f"Your skill match score of {format_number(fr.skill_match)}/10 is limiting your readiness.",
                impact="Could improve overall score by 0.5-1.0 points",
                action=(
                    "Consider: (1) Take a focused 2-week crash course, (2) Find a technical co-founder, "
                    "or (3) Use no-code tools to bridge the gap"
                ),
                potential_score_gain=0.8,
            ))

        if fr.time_availability < 5:
            suggestions.append(ImprovementSuggestion(
                priority=Priority.HIGH,
                category="Founder Readiness",
                title="Increase Time Commitment",
                description=(
                    f"Only {format_number(fr.time_availability * 2)} hours/week may not be enough "
                    "for consistent progress."
                ),
                impact="Could improve overall score by 0.3-0.6 points",
                action="Block 2-hour daily slots, delegate other responsibilities, or consider a simpler MVP scope",
                potential_score_gain=0.5,
            ))

        if fr.financial_buffer < 5:
            suggestions.append(ImprovementSuggestion(
                priority=Priority.MEDIUM,
                category="Founder Readiness",
                title="Build Financial Runway",
                description="Limited financial buffer increases pressure and risk of premature abandonment.",
                impact="Could improve overall score by 0.2-0.4 points",
                action=(
                    "Set a validation milestone (e.g., $100 MRR in 30 days) before going all-in, "
                    "or keep day job while validating"
                ),
                potential_score_gain=0.3,
            ))

    # Layer 2: Idea Characteristics
    if layers.idea_characteristics.percentage < 70:
        if ic.quickness < 6:
            suggestions.append(ImprovementSuggestion(
                priority=Priority.HIGH,
                category="Idea Characteristics",
                title="Simplify Your MVP",
                description=f"Quickness score of {format_number(ic.quickness)}/10 suggests scope is too large.",
                impact="Could improve overall score by 0.6-1.0 points (highest weight layer)",
                action="Cut features to ship in 48 hours: What's the ONE thing that proves demand? Build only that.",
                potential_score_gain=0.9,
            ))

        if ic.validation_ease < 6:
            suggestions.append(ImprovementSuggestion(
                priority=Priority.HIGH,
                category="Idea Characteristics",
                title="Design for Faster Validation",
                description="Slow validation means longer time to learn if the idea works.",
                impact="Could improve overall score by 0.4-0.6 points",
                action=(
                    'Pre-sell before building: Create a landing page with "Buy Now" button, '
                    "run $50 in ads, measure clicks"
                ),
                potential_score_gain=0.5,
            ))

        if ic.market_demand < 5:
            suggestions.append(ImprovementSuggestion(
                priority=Priority.MEDIUM,
                category="Idea Characteristics",
                title="Validate Market Demand",
                description="Unproven market demand is a major risk factor.",
                impact="Could improve overall score by 0.2-0.3 points",
                action=(
                    "Find 3 competitors or adjacent products. "
                    "If none exist, you may be inventing a category (high risk)."
                ),
                potential_score_gain=0.25,
            ))

        if ic.profitability < 6:
            suggestions.append(ImprovementSuggestion(
                priority=Priority.MEDIUM,
                category="Idea Characteristics",
                title="Improve Revenue Model",
                description=(
                    f"Profitability score of {format_number(ic.profitability)}/10 "
                    "suggests monetization challenges."
                ),
                impact="Could improve overall score by 0.3-0.5 points",
                action=(
                    "Consider: (1) Higher price point with more value, (2) Recurring revenue model, "
                    "(3) Upsell path to enterprise"
                ),
                potential_score_gain=0.4,
            ))

    # Layer 3: Historical Patterns
    if layers.historical_patterns.percentage < 50:
        display_name = category_display_name(input.category)
        suggestions.append(ImprovementSuggestion(
            priority=Priority.MEDIUM,
            category="Historical Patterns",
            title=f"Study {display_name} Failures",
            description=f"{display_name} ideas have high historical failure rates.",
            impact="Understanding failure modes can prevent common mistakes",
            action="Review the top 3 failure modes for your category and implement mitigations BEFORE building",
            potential_score_gain=0.3,
        ))

    # Layer 4: Contextual Viability
    if layers.contextual_viability.percentage < 60:
        if cv.life_stage_fit < 5:
            suggestions.append(ImprovementSuggestion(
                priority=Priority.LOW,
                category="Contextual Viability",
                title="Address Life Stage Conflicts",
                description="Major life events competing for attention increase failure risk.",
                impact="Could improve overall score by 0.1-0.2 points",
                action='Consider delaying launch by 3-6 months, or reduce scope to "maintenance mode" level of effort',
                potential_score_gain=0.15,
            ))

        if cv.market_timing < 5:
            suggestions.append(ImprovementSuggestion(
                priority=Priority.LOW,
                category="Contextual Viability",
                title="Reconsider Market Timing",
                description="Poor market timing can doom even great ideas.",
                impact="Could improve overall score by 0.1-0.2 points",
                action=(
                    "Research: Is the market growing? Are there recent funding rounds in this space? "
                    "Any regulatory tailwinds?"
                ),
                potential_score_gain=0.15,
            ))

    # Energy filter
    if result.energy_filter_status == EnergyFilterStatus.REVISE:
        suggestions.append(ImprovementSuggestion(
            priority=Priority.HIGH,
            category="Energy Filter",
            title="Refine Your Idea Scope",
            description="You're uncertain about maintaining this at $500/month - that's a red flag.",
            impact="Critical for long-term sustainability",
            action=(
                "Ask: What would need to change for you to be proud of this? "
                "Adjust scope, audience, or business model accordingly."
            ),
            potential_score_gain=0,
        ))

    # "Close but missing" feedback for the moderate band
    if 5 <= result.overall_score < 7:
        # min() keeps the first layer on ties
        lowest_key, lowest = min(layers.items(), key=lambda item: item[1].percentage)
        layer_name = format_layer_name(lowest_key)
        lowest_pct = format_number(lowest.percentage)
        suggestions.insert(0, ImprovementSuggestion(
            priority=Priority.HIGH,
            category="Quick Win",
            title=f"Your idea is close! Focus on {layer_name}",
            description=(
                f"At {format_number(result.overall_score)}/10, you're in the \"moderate\" zone. "
                'A few targeted improvements could push you to "strong" (7+).'
            ),
            impact=f"Improving {layer_name} from {lowest_pct}% could add 0.5-1.0 points",
            action=f"Your lowest-scoring layer is {layer_name} at {lowest_pct}%. Focus your energy here first.",
            potential_score_gain=1.0,
        ))

    ordered = sorted(
        suggestions,
        key=lambda s: (_PRIORITY_ORDER[s.priority], -s.potential_score_gain),
    )
    return ordered[:MAX_SUGGESTIONS]


def calculate_potential_score(current_score: float, suggestions: list[ImprovementSuggestion]) -> float:
    """Estimated score if every suggestion is acted on, capped at 10."""
    total_gain = sum(s.potential_score_gain for s in suggestions)
    adjusted_gain = min(total_gain * POTENTIAL_GAIN_FACTOR, 10 - current_score)
    return min(10.0, current_score + adjusted_gain)


def generate_pivot_suggestion(input: FullEvaluationInput, result: FullEvaluationResult) -> str | None:
    """Return the first matching pivot hint for ideas scoring below 5, else None.

    Heuristics in order:
        1. Historical patterns < 30% and not already a service category
        2. Quickness < 4 (scope too large)
        3. Validation ease < 4 (audience too hard to reach)
    """
    if result.overall_score >= 5:
        return None

    pivots: list[str] = []

    if result.layers.historical_patterns.percentage < 30 and input.category not in SERVICE_CATEGORIES:
        pivots.append(
            "Consider repositioning as a service first (consulting/agency) "
            "to validate demand before building product."
        )

    if input.idea_characteristics.quickness < 4:
        pivots.append("Your idea may be too complex. What's the simplest version that still solves the core problem?")

    if input.idea_characteristics.validation_ease < 4:
        pivots.append("Consider targeting a more accessible audience. Who would be easiest to reach and sell to?")

    return pivots[0] if pivots else None


def compare_evaluations(results: list[FullEvaluationResult]) -> EvaluationComparison:
    """Pick the highest-scoring idea and the leader of every layer.

    Ties go to the earliest idea in the list.

    Raises:
        ValueError: If fewer than 2 or more than 5 results are given
    """
    if not 2 <= len(results) <= 5:
        raise ValueError(f"Can compare 2-5 ideas, got {len(results)}")

    winner_index = 0
    for i, result in enumerate(results):
        if result.overall_score > results[winner_index].overall_score:
            winner_index = i

    layer_leaders: dict[str, int] = {}
    for layer_key in LAYER_DISPLAY_NAMES:
        leader = 0
        for i, result in enumerate(results):
            if getattr(result.layers, layer_key).percentage > getattr(results[leader].layers, layer_key).percentage:
                leader = i
        layer_leaders[to_camel(layer_key)] = leader

    return EvaluationComparison(
        results=results,
        winner_index=winner_index,
        winner_idea_id=results[winner_index].idea_id,
        layer_leaders=layer_leaders,
    )
