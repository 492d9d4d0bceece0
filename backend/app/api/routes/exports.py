"""Export routes — Markdown, JSON, HTML and PDF for one evaluation, CSV batch export and import."""

from datetime import UTC, datetime

import structlog
from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import Response

from app.core.exceptions import ExportError
from app.exports import MarkdownExporter, PDFExporter, generate_csv_export, generate_json_export, parse_csv_import
from app.exports.data_exporter import export_filename
from app.schemas.evaluation import BatchExportRequest, CamelModel, EvaluationEnvelope

logger = structlog.get_logger(__name__)

router = APIRouter()

MEDIA_TYPES: dict[str, str] = {
    "markdown": "text/markdown; charset=utf-8",
    "json": "application/json",
    "html": "text/html; charset=utf-8",
    "pdf": "application/pdf",
    "csv": "text/csv; charset=utf-8",
}

EXTENSIONS: dict[str, str] = {
    "markdown": "md",
    "json": "json",
    "html": "html",
    "pdf": "pdf",
}


class ImportedIdea(CamelModel):
    idea_name: str
    description: str = ""


class CsvImportResponse(CamelModel):
    ideas: list[ImportedIdea]
    count: int


def _attachment(content: str | bytes, media_type: str, filename: str) -> Response:
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


async def _render(format: str, envelope: EvaluationEnvelope) -> str | bytes:
    """Render one evaluation in the requested format.

    Raises:
        ExportError: If the format is unknown or its renderer is unavailable
    """
    if format == "markdown":
        return MarkdownExporter().export(envelope.input, envelope.result, envelope.suggestions)
    if format == "json":
        return generate_json_export(envelope.input, envelope.result, envelope.suggestions)
    if format == "html":
        return await PDFExporter().render_html(envelope.input, envelope.result, envelope.suggestions)
    if format == "pdf":
        return await PDFExporter().export(envelope.input, envelope.result, envelope.suggestions)
    raise ExportError(f"Unsupported export format: {format}")


@router.post("/csv")
async def export_csv(body: BatchExportRequest):
    """Export a batch of evaluations as one CSV file."""
    content = generate_csv_export([(e.input, e.result) for e in body.evaluations])
    filename = f"profit-pulse-ideas-{datetime.now(UTC):%Y-%m-%d}.csv"
    logger.info("evaluations_exported", format="csv", count=len(body.evaluations))
    return _attachment(content, MEDIA_TYPES["csv"], filename)


@router.post("/import", response_model=CsvImportResponse)
async def import_csv(request: Request):
    """Read idea names and descriptions from a raw CSV request body."""
    try:
        content = (await request.body()).decode("utf-8-sig")
    except UnicodeDecodeError:
        raise HTTPException(status_code=400, detail="CSV must be UTF-8 encoded")

    ideas = [ImportedIdea(**idea) for idea in parse_csv_import(content)]
    logger.info("ideas_imported", count=len(ideas))
    return CsvImportResponse(ideas=ideas, count=len(ideas))


@router.post("/{format}")
async def export_evaluation(format: str, body: EvaluationEnvelope):
    """Export one evaluation (markdown, json, html or pdf)."""
    if format not in EXTENSIONS:
        raise HTTPException(status_code=404, detail=f"Unsupported export format: {format}")

    try:
        content = await _render(format, body)
    except ExportError as e:
        logger.warning("export_failed", format=format, error=str(e))
        raise HTTPException(status_code=503, detail=str(e))

    logger.info("evaluation_exported", format=format, idea_id=body.result.idea_id)
    return _attachment(content, MEDIA_TYPES[format], export_filename(body.result, EXTENSIONS[format]))
