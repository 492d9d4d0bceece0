"""Pydantic schemas for AI-generated qualitative feedback."""

from pydantic import Field

from app.schemas.evaluation import Category, CamelModel


class FreeIdeaAnalysis(CamelModel):
    """Lightweight feedback returned with the free QPV score."""

    summary: str
    strengths: list[str] = Field(default_factory=list)
    concerns: list[str] = Field(default_factory=list)
    next_step: str = ""


class AIIdeaAnalysis(CamelModel):
    """Structured analysis of an idea description."""

    suggested_category: Category
    target_audience: str
    competitors: list[str] = Field(default_factory=list)
    unique_value_proposition: str
    potential_risks: list[str] = Field(default_factory=list)
    market_validation: str
    quick_wins: list[str] = Field(default_factory=list)


class IdeaAnalysisRequest(CamelModel):
    idea_name: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=10, max_length=1000)
