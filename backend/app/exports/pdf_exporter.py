"""PDF export of a full evaluation using Jinja2 and WeasyPrint.

The HTML document is the structured description handed to the PDF
renderer; it follows the same section order as the Markdown report.
PDF generation runs in a worker thread via asyncio.to_thread().
"""

import asyncio
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from app.core.exceptions import ExportError
from app.domain.scoring import LAYER_WEIGHTS
from app.exports.markdown_exporter import register_filters
from app.schemas.evaluation import FullEvaluationInput, FullEvaluationResult, ImprovementSuggestion

HTML_TEMPLATE_DIR = Path(__file__).parent / "templates" / "html"

DOCUMENT_TITLE = "Profit Pulse Evaluation Report"
BRANDING = "Powered by Profit Pulse"


class PDFExporter:
    """Export evaluations as print-ready HTML and PDF documents."""

    def __init__(self) -> None:
        self.env = Environment(
            loader=FileSystemLoader(str(HTML_TEMPLATE_DIR)),
            autoescape=True,
        )
        register_filters(self.env)

    async def render_html(
        self,
        input: FullEvaluationInput,
        result: FullEvaluationResult,
        suggestions: list[ImprovementSuggestion] | None = None,
        generated_date: str | None = None,
    ) -> str:
        """Render the HTML document for one evaluation.

        Args:
            input: Evaluation input
            result: Scored evaluation
            suggestions: Optional improvement suggestions
            generated_date: Display date (defaults to the evaluation date)

        Returns:
            HTML string
        """
        if generated_date is None:
            generated_date = result.evaluated_at.strftime("%B %d, %Y")

        template = self.env.get_template("evaluation.html")
        return template.render(
            input=input,
            result=result,
            suggestions=suggestions or [],
            layer_weights=LAYER_WEIGHTS,
            document_title=DOCUMENT_TITLE,
            branding=BRANDING,
            generated_date=generated_date,
        )

    async def export(
        self,
        input: FullEvaluationInput,
        result: FullEvaluationResult,
        suggestions: list[ImprovementSuggestion] | None = None,
        generated_date: str | None = None,
    ) -> bytes:
        """Export one evaluation as PDF bytes.

        Raises:
            ExportError: If WeasyPrint is not installed
        """
        html_content = await self.render_html(input, result, suggestions, generated_date)

        try:
            from weasyprint import HTML
        except ImportError as e:
            raise ExportError(
                "WeasyPrint not installed. Install with: pip install 'profit-pulse[pdf]'"
            ) from e

        return await asyncio.to_thread(
            lambda: HTML(string=html_content, base_url=str(HTML_TEMPLATE_DIR)).write_pdf()
        )

