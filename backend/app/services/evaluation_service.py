"""EvaluationService: scores ideas and attaches derived and AI advice.

Orchestrates the pure domain functions (scoring, suggestions, pivots,
comparison) with the optional AI feedback calls. All business rules live
in app.domain; this layer only sequences them and logs outcomes.
"""

import asyncio
from datetime import datetime

import structlog

from app.ai.feedback import (
    analyze_free_idea,
    analyze_idea,
    generate_ai_pivot_suggestion,
    generate_ai_recommendations,
)
from app.domain.improvements import (
    calculate_potential_score,
    compare_evaluations,
    format_layer_name,
    generate_improvement_suggestions,
    generate_pivot_suggestion,
)
from app.domain.scoring import score_basic, score_full
from app.schemas.ai import AIIdeaAnalysis, FreeIdeaAnalysis
from app.schemas.evaluation import (
    BasicQPVInput,
    BasicQPVResult,
    EvaluationComparison,
    EvaluationEnvelope,
    FullEvaluationInput,
    FullEvaluationResponse,
)

logger = structlog.get_logger(__name__)


def build_envelope(input: FullEvaluationInput, now: datetime | None = None) -> EvaluationEnvelope:
    """Score one idea and derive suggestions, pivot hint and potential score."""
    result = score_full(input, now=now)
    suggestions = generate_improvement_suggestions(input, result)

    return EvaluationEnvelope(
        input=input,
        result=result,
        suggestions=suggestions,
        pivot_suggestion=generate_pivot_suggestion(input, result),
        potential_score=calculate_potential_score(result.overall_score, suggestions),
    )


class EvaluationService:
    """Service layer for free, full and comparative evaluations."""

    async def evaluate_free(
        self,
        input: BasicQPVInput,
        include_ai: bool = True,
    ) -> tuple[BasicQPVResult, FreeIdeaAnalysis | None]:
        """Score the three QPV ratings and optionally ask for AI feedback."""
        qpv = score_basic(input)
        logger.info("qpv_scored", score=qpv.score, interpretation=qpv.interpretation.value)

        ai = None
        if include_ai:
            ai = await analyze_free_idea(input.idea_name, input.description, qpv.score)

        return qpv, ai

    async def evaluate_full(
        self,
        input: FullEvaluationInput,
        include_ai: bool = True,
        now: datetime | None = None,
    ) -> FullEvaluationResponse:
        """Run the four-layer evaluation.

        AI recommendations and the AI pivot (below 5 only) are requested
        concurrently; either is None when AI is unavailable.
        """
        envelope = build_envelope(input, now=now)
        result = envelope.result

        logger.info(
            "evaluation_scored",
            idea_id=result.idea_id,
            category=input.category.value,
            overall_score=result.overall_score,
            interpretation=result.interpretation.value,
            energy_filter=result.energy_filter_status.value,
        )

        ai_recommendations = None
        ai_pivot = None
        if include_ai:
            weakest_key, weakest = min(result.layers.items(), key=lambda item: item[1].percentage)
            ai_recommendations, ai_pivot = await asyncio.gather(
                generate_ai_recommendations(
                    input.idea_name,
                    input.description,
                    input.category,
                    result.overall_score,
                    format_layer_name(weakest_key),
                    weakest.percentage,
                ),
                generate_ai_pivot_suggestion(
                    input.idea_name,
                    input.description,
                    input.category,
                    result.overall_score,
                ),
            )

        return FullEvaluationResponse(
            **dict(envelope),
            ai_recommendations=ai_recommendations,
            ai_pivot_suggestion=ai_pivot,
        )

    async def analyze(self, idea_name: str, description: str) -> AIIdeaAnalysis | None:
        """AI analysis of an idea with a suggested category; None when AI is unavailable."""
        analysis = await analyze_idea(idea_name, description)
        logger.info(
            "idea_analyzed",
            available=analysis is not None,
            suggested_category=analysis.suggested_category.value if analysis else None,
        )
        return analysis

    def compare(self, inputs: list[FullEvaluationInput], now: datetime | None = None) -> EvaluationComparison:
        """Score 2-5 ideas and pick the winner and per-layer leaders.

        Raises:
            ValueError: If fewer than 2 or more than 5 ideas are given
        """
        results = [score_full(input, now=now) for input in inputs]
        comparison = compare_evaluations(results)
        logger.info(
            "evaluations_compared",
            idea_count=len(results),
            winner_idea_id=comparison.winner_idea_id,
        )
        return comparison
