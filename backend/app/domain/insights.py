"""Rule-based strengths, gaps and obstacles for a layered evaluation.

Pure functions -- no side effects. Rule order matters: lists are truncated
after ordering, so the checked order decides which findings survive.
"""

from app.domain.categories import IdeaCategory, category_display_name
from app.domain.failure_modes import get_failure_mode_data
from app.domain.numbers import format_number
from app.schemas.evaluation import FullEvaluationInput, Gap, GapType, Layers, Obstacle

MAX_STRENGTHS = 5
MAX_GAPS = 5

_GAP_SEVERITY_ORDER: dict[GapType, int] = {gap_type: i for i, gap_type in enumerate(GapType)}


def generate_strengths(input: FullEvaluationInput, layers: Layers) -> list[str]:
    """Collect canned strength statements, first five matches in rule order.

    Rules (checked in this order):
        - skill_match >= 8
        - time_availability >= 8 (quotes hours/week as score x 2)
        - financial_buffer >= 7
        - quickness >= 8
        - validation_ease >= 8
        - market_demand >= 7
        - market_timing >= 8
        - life_stage_fit >= 8
        - founder readiness layer >= 70%
        - historical patterns layer >= 50%
    """
    fr = input.founder_readiness
    ic = input.idea_characteristics
    cv = input.contextual_viability

    strengths: list[str] = []

    # Founder readiness
    if fr.skill_match >= 8:
        strengths.append("Strong skill match — you can start building immediately")
    if fr.time_availability >= 8:
        hours = format_number(fr.time_availability * 2)
        strengths.append(f"{hours}+ hours/week available — sufficient for launch phase")
    if fr.financial_buffer >= 7:
        strengths.append("Solid financial buffer — can weather slow initial traction")

    # Idea characteristics
    if ic.quickness >= 8:
        strengths.append("High quickness — can ship MVP in days, not weeks")
    if ic.validation_ease >= 8:
        strengths.append("Easy validation — can test demand within 48 hours")
    if ic.market_demand >= 7:
        strengths.append("Proven market demand — competitors validate the space")

    # Contextual
    if cv.market_timing >= 8:
        strengths.append("Excellent market timing — ride current trends")
    if cv.life_stage_fit >= 8:
        strengths.append("Great life stage fit — no major conflicts")

    # Layer level
    if layers.founder_readiness.percentage >= 70:
        strengths.append("Overall founder readiness is strong")
    if layers.historical_patterns.percentage >= 50:
        strengths.append("Category has better-than-average success rates")

    return strengths[:MAX_STRENGTHS]


def generate_gaps(input: FullEvaluationInput, layers: Layers) -> list[Gap]:
    """Collect risk findings, stable-sorted by severity, capped at five.

    Critical: financial_buffer <= 3, time_availability <= 3.
    Warning: skill_match <= 5, market_demand <= 4, life_stage_fit <= 4,
    historical patterns layer < 40%.
    Minor: profitability <= 6.
    The historical warning is checked after the minor rule; the stable
    sort moves it ahead while keeping it behind the other warnings.
    """
    fr = input.founder_readiness
    ic = input.idea_characteristics
    cv = input.contextual_viability

    gaps: list[Gap] = []

    if fr.financial_buffer <= 3:
        gaps.append(Gap(
            type=GapType.CRITICAL,
            description="No financial buffer",
            mitigation="Ideas with 90+ day revenue cycles are high risk without runway",
            action="Set validation milestone at $100 MRR within 30 days or pivot",
        ))

    if fr.time_availability <= 3:
        gaps.append(Gap(
            type=GapType.CRITICAL,
            description="Insufficient time availability",
            mitigation="Less than 10 hrs/week makes consistent progress difficult",
            action="Block dedicated time or consider simpler idea scope",
        ))

    if fr.skill_match <= 5:
        gaps.append(Gap(
            type=GapType.WARNING,
            description="Skill gap in required areas",
            mitigation="Missing skills slow down execution and increase failure risk",
            action='Add "learn core skill" to Week 1 plan or find co-founder',
        ))

    if ic.market_demand <= 4:
        gaps.append(Gap(
            type=GapType.WARNING,
            description="Unproven market demand",
            mitigation="Inventing new categories has high failure rate",
            action="Find 3 competitors or adjacent products before building",
        ))

    if cv.life_stage_fit <= 4:
        gaps.append(Gap(
            type=GapType.WARNING,
            description="Life stage conflicts detected",
            mitigation="Major life events compete for attention and energy",
            action="Consider timing — delay launch or reduce scope",
        ))

    if ic.profitability <= 6:
        gaps.append(Gap(
            type=GapType.MINOR,
            description="Moderate profitability ceiling",
            mitigation="May require high volume or upsells to reach target revenue",
            action="Plan pricing strategy and expansion path early",
        ))

    if layers.historical_patterns.percentage < 40:
        gaps.append(Gap(
            type=GapType.WARNING,
            description="Category has high historical failure rate",
            mitigation="Similar ideas often fail — study why",
            action="Review failure modes and implement mitigations before building",
        ))

    # sorted() is stable: insertion order survives within a severity tier
    ordered = sorted(gaps, key=lambda gap: _GAP_SEVERITY_ORDER[gap.type])
    return ordered[:MAX_GAPS]


def generate_obstacles(category: IdeaCategory | str) -> list[Obstacle]:
    """One obstacle per common failure of the category, no filtering or cap."""
    failure_data = get_failure_mode_data(category)
    display_name = category_display_name(failure_data.category)

    return [
        Obstacle(
            name=failure.name,
            failure_rate=failure.percentage,
            description=f"{failure.percentage}% of {display_name} ideas fail due to this",
            mitigation=failure.mitigation,
            action=f"Address before Week 2: {failure.mitigation}",
        )
        for failure in failure_data.common_failures
    ]
