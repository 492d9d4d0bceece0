"""Markdown export of a full evaluation.

Section order is fixed for downstream consumers: header, overall score,
description, layer table, energy filter, strengths, gaps, obstacles,
suggestions, input echo, footer.
"""

from datetime import datetime
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from app.domain.categories import category_display_name
from app.domain.improvements import format_layer_name
from app.domain.numbers import format_number
from app.domain.scoring import LAYER_WEIGHTS, interpretation_text
from app.schemas.evaluation import (
    FullEvaluationInput,
    FullEvaluationResult,
    GapType,
    ImprovementSuggestion,
    Priority,
)

MARKDOWN_TEMPLATE_DIR = Path(__file__).parent / "templates" / "markdown"

GAP_ICONS: dict[GapType, str] = {
    GapType.CRITICAL: "🔴",
    GapType.WARNING: "🟠",
    GapType.MINOR: "🟡",
}

PRIORITY_ICONS: dict[Priority, str] = {
    Priority.HIGH: "🔥",
    Priority.MEDIUM: "⚡",
    Priority.LOW: "💡",
}


def short_date(value: datetime) -> str:
    """US short date without zero padding, e.g. 3/7/2026."""
    return f"{value.month}/{value.day}/{value.year}"


def weight_percent(weight: float) -> str:
    return f"{round(weight * 100)}%"


def register_filters(env: Environment) -> None:
    """Template filters shared by the Markdown and HTML exporters."""
    env.filters["num"] = format_number
    env.filters["category_name"] = category_display_name
    env.filters["interpretation_text"] = interpretation_text
    env.filters["layer_name"] = format_layer_name
    env.filters["percent"] = weight_percent
    env.filters["short_date"] = short_date
    env.filters["gap_icon"] = GAP_ICONS.__getitem__
    env.filters["priority_icon"] = PRIORITY_ICONS.__getitem__


class MarkdownExporter:
    """Render an evaluation report as Markdown (Notion-pasteable)."""

    def __init__(self):
        self.env = Environment(
            loader=FileSystemLoader(str(MARKDOWN_TEMPLATE_DIR)),
            autoescape=False,  # Markdown should NOT be escaped
            trim_blocks=True,
            lstrip_blocks=True,
        )
        register_filters(self.env)

    def export(
        self,
        input: FullEvaluationInput,
        result: FullEvaluationResult,
        suggestions: list[ImprovementSuggestion] | None = None,
    ) -> str:
        """Export one evaluation as a Markdown string.

        Args:
            input: The evaluation input (echoed in the "Input Details" section)
            result: The scored evaluation
            suggestions: Optional improvement suggestions; section omitted when empty

        Returns:
            Markdown string
        """
        template = self.env.get_template("evaluation.md.j2")
        return template.render(
            input=input,
            result=result,
            suggestions=suggestions or [],
            layer_weights=LAYER_WEIGHTS,
        )
