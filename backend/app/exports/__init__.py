"""Evaluation export package.

Provides:
- MarkdownExporter: Notion-pasteable report
- PDFExporter: HTML document and WeasyPrint PDF
- JSON envelope and CSV batch exports, CSV import of idea stubs
"""

from app.exports.data_exporter import generate_csv_export, generate_json_export, parse_csv_import
from app.exports.markdown_exporter import MarkdownExporter
from app.exports.pdf_exporter import PDFExporter

__all__ = [
    "MarkdownExporter",
    "PDFExporter",
    "generate_csv_export",
    "generate_json_export",
    "parse_csv_import",
]
