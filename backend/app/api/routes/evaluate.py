"""Evaluation routes — QPV score, four-layer evaluation, AI idea analysis, comparison."""

from fastapi import APIRouter, HTTPException, Query

from app.schemas.ai import AIIdeaAnalysis, FreeIdeaAnalysis, IdeaAnalysisRequest
from app.schemas.evaluation import (
    BasicQPVRequest,
    BasicQPVResult,
    CamelModel,
    ComparisonRequest,
    EvaluationComparison,
    FullEvaluationInput,
    FullEvaluationResponse,
)
from app.services.evaluation_service import EvaluationService

router = APIRouter()


class FreeEvaluationResponse(CamelModel):
    qpv: BasicQPVResult
    ai: FreeIdeaAnalysis | None = None
    success: bool = True


class IdeaAnalysisResponse(CamelModel):
    analysis: AIIdeaAnalysis | None = None
    success: bool = True


@router.post("/free", response_model=FreeEvaluationResponse)
async def evaluate_free(
    body: BasicQPVRequest,
    include_ai: bool = Query(True, alias="ai"),
):
    """Tier 1: weighted QPV score with optional AI feedback (no signup)."""
    qpv, ai = await EvaluationService().evaluate_free(body, include_ai=include_ai)
    return FreeEvaluationResponse(qpv=qpv, ai=ai)


@router.post("/full", response_model=FullEvaluationResponse)
async def evaluate_full(
    body: FullEvaluationInput,
    include_ai: bool = Query(True, alias="ai"),
):
    """Tier 2/3: four-layer evaluation with suggestions and pivot hints."""
    return await EvaluationService().evaluate_full(body, include_ai=include_ai)


@router.post("/analyze", response_model=IdeaAnalysisResponse)
async def analyze_idea(body: IdeaAnalysisRequest):
    """AI analysis with a suggested category; ``analysis`` is null when AI is unavailable."""
    analysis = await EvaluationService().analyze(body.idea_name, body.description)
    return IdeaAnalysisResponse(analysis=analysis)


@router.post("/compare", response_model=EvaluationComparison)
async def compare_ideas(body: ComparisonRequest):
    """Score 2-5 ideas side by side."""
    try:
        return EvaluationService().compare(body.ideas)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
