"""JSON and CSV exports of evaluations, plus CSV import of idea stubs."""

import csv
import io
import re
from datetime import datetime, timezone

from app.domain.categories import category_display_name
from app.domain.numbers import format_number
from app.schemas.evaluation import (
    EvaluationEnvelope,
    FullEvaluationInput,
    FullEvaluationResult,
    ImprovementSuggestion,
)

CSV_HEADERS: tuple[str, ...] = (
    "Idea Name",
    "Category",
    "Overall Score",
    "Interpretation",
    "Founder Readiness %",
    "Idea Characteristics %",
    "Historical Patterns %",
    "Contextual Viability %",
    "Energy Filter",
    "Skill Match",
    "Time Availability",
    "Financial Buffer",
    "Quickness",
    "Profitability",
    "Validation Ease",
    "Market Demand",
    "Life Stage Fit",
    "Market Timing",
    "Evaluated At",
)

# CSV import column (lowercased header) -> input field
CSV_IMPORT_COLUMNS: dict[str, str] = {
    "idea name": "idea_name",
    "description": "description",
}

# Anything outside the idea-id slug alphabet
_FILENAME_UNSAFE = re.compile(r"[^a-z0-9-]")


def iso_timestamp(value: datetime) -> str:
    """UTC ISO-8601 with millisecond precision and a Z suffix."""
    utc = value.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


def generate_json_export(
    input: FullEvaluationInput,
    result: FullEvaluationResult,
    suggestions: list[ImprovementSuggestion] | None = None,
    now: datetime | None = None,
) -> str:
    """Serialize one evaluation as a versioned JSON envelope (camelCase keys)."""
    if now is None:
        now = datetime.now(timezone.utc)

    envelope = EvaluationEnvelope(
        exported_at=now,
        input=input,
        result=result,
        suggestions=suggestions or [],
    )
    return envelope.model_dump_json(by_alias=True, indent=2)


def _quote(value: str) -> str:
    return '"' + value.replace('"', '""') + '"'


def generate_csv_export(ideas: list[tuple[FullEvaluationInput, FullEvaluationResult]]) -> str:
    """Render a batch of evaluations as CSV, one row per idea.

    The idea name is always quoted; every other column is a plain value.
    """
    rows = [",".join(CSV_HEADERS)]

    for input, result in ideas:
        fr = input.founder_readiness
        ic = input.idea_characteristics
        cv = input.contextual_viability
        layers = result.layers
        row = [
            _quote(input.idea_name),
            category_display_name(input.category),
            format_number(result.overall_score),
            result.interpretation.value,
            format_number(layers.founder_readiness.percentage),
            format_number(layers.idea_characteristics.percentage),
            format_number(layers.historical_patterns.percentage),
            format_number(layers.contextual_viability.percentage),
            result.energy_filter_status.value,
            format_number(fr.skill_match),
            format_number(fr.time_availability),
            format_number(fr.financial_buffer),
            format_number(ic.quickness),
            format_number(ic.profitability),
            format_number(ic.validation_ease),
            format_number(ic.market_demand),
            format_number(cv.life_stage_fit),
            format_number(cv.market_timing),
            iso_timestamp(result.evaluated_at),
        ]
        rows.append(",".join(row))

    return "\n".join(rows)


def parse_csv_import(content: str) -> list[dict[str, str]]:
    """Read idea stubs (name + description) from a CSV with a header row.

    Header matching is case-insensitive; unknown columns are ignored and
    rows without an idea name are skipped.
    """
    reader = csv.reader(io.StringIO(content.strip()))
    try:
        headers = [h.strip().lower() for h in next(reader)]
    except StopIteration:
        return []

    ideas: list[dict[str, str]] = []
    for values in reader:
        idea: dict[str, str] = {}
        for header, value in zip(headers, values):
            field = CSV_IMPORT_COLUMNS.get(header)
            if field is not None:
                idea[field] = value.strip()
        if idea.get("idea_name"):
            ideas.append(idea)

    return ideas


def export_filename(result: FullEvaluationResult, extension: str) -> str:
    """Download filename, e.g. ``profit-pulse-my-idea-lx2k9.md``.

    Characters of the idea id outside the slug alphabet become hyphens.
    """
    safe_id = _FILENAME_UNSAFE.sub("-", result.idea_id.lower())
    return f"profit-pulse-{safe_id}.{extension}"
