"""Tests for the HTML document and PDF export."""

import sys

import pytest

from app.core.exceptions import ExportError
from app.domain.improvements import generate_improvement_suggestions
from app.domain.scoring import score_full
from app.exports import PDFExporter
from app.exports.pdf_exporter import BRANDING, DOCUMENT_TITLE

pytestmark = pytest.mark.unit


@pytest.fixture
def exporter():
    return PDFExporter()


async def test_render_html_sections(exporter, weak_input, fixed_now):
    result = score_full(weak_input, now=fixed_now)
    html = await exporter.render_html(weak_input, result, generate_improvement_suggestions(weak_input, result))

    assert f"<h1>{DOCUMENT_TITLE}</h1>" in html
    assert BRANDING in html
    assert "March 07, 2026" in html
    assert "1.9/10" in html
    assert "<td>Historical Patterns</td>" in html
    assert "Simplify Your MVP" in html
    assert "These are the top failure modes for Content Creator ideas:" in html


async def test_render_html_escapes_user_text(exporter, make_input, fixed_now):
    input = make_input(idea_name="<script>alert(1)</script>", description="Fish & Chips")
    html = await exporter.render_html(input, score_full(input, now=fixed_now))

    assert "<script>alert(1)</script>" not in html
    assert "&lt;script&gt;" in html
    assert "Fish &amp; Chips" in html


async def test_generated_date_override(exporter, strong_input, fixed_now):
    html = await exporter.render_html(strong_input, score_full(strong_input, now=fixed_now), generated_date="Today")
    assert "<strong>Evaluated:</strong> Today" in html


async def test_export_without_weasyprint_raises(exporter, strong_input, fixed_now, monkeypatch):
    monkeypatch.setitem(sys.modules, "weasyprint", None)

    with pytest.raises(ExportError, match="WeasyPrint not installed"):
        await exporter.export(strong_input, score_full(strong_input, now=fixed_now))


async def test_export_pdf_bytes(exporter, strong_input, fixed_now):
    pytest.importorskip("weasyprint")

    pdf = await exporter.export(strong_input, score_full(strong_input, now=fixed_now))
    assert pdf.startswith(b"%PDF")
