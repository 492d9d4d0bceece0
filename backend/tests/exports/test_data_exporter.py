"""Tests for JSON and CSV exports and CSV import."""

import json
from datetime import UTC, datetime

import pytest

from app.domain.improvements import generate_improvement_suggestions
from app.domain.scoring import score_full
from app.exports import generate_csv_export, generate_json_export, parse_csv_import
from app.exports.data_exporter import CSV_HEADERS, export_filename, iso_timestamp
from app.schemas.evaluation import EvaluationEnvelope

pytestmark = pytest.mark.unit


class TestJsonExport:
    def test_envelope_shape(self, strong_input, fixed_now):
        result = score_full(strong_input, now=fixed_now)
        suggestions = generate_improvement_suggestions(strong_input, result)

        data = json.loads(generate_json_export(strong_input, result, suggestions, now=fixed_now))

        assert data["version"] == "2.0"
        assert data["exportedAt"].startswith("2026-03-07T14:30:00")
        assert data["input"]["ideaName"] == "Test"
        assert data["input"]["category"] == "saas-tool"
        assert data["input"]["founderReadiness"]["skillMatch"] == 8
        assert data["result"]["overallScore"] == 7.1
        assert data["result"]["layers"]["historicalPatterns"]["percentage"] == 35.0
        assert data["result"]["energyFilterStatus"] == "pass"
        assert data["suggestions"][0]["potentialScoreGain"] == 0.3

    def test_envelope_parses_back(self, weak_input, fixed_now):
        result = score_full(weak_input, now=fixed_now)
        envelope = EvaluationEnvelope.model_validate_json(generate_json_export(weak_input, result, now=fixed_now))
        assert envelope.input == weak_input
        assert envelope.result == result
        assert envelope.suggestions == []


class TestCsvExport:
    def test_header_row(self, strong_input, fixed_now):
        csv_text = generate_csv_export([(strong_input, score_full(strong_input, now=fixed_now))])
        header = csv_text.split("\n")[0]
        assert header.split(",") == list(CSV_HEADERS)
        assert len(CSV_HEADERS) == 19

    def test_row_values(self, strong_input, fixed_now):
        csv_text = generate_csv_export([(strong_input, score_full(strong_input, now=fixed_now))])
        assert csv_text.split("\n")[1] == (
            '"Test",SaaS Tool,7.1,strong,80,80,35,80,pass,8,8,8,8,8,8,8,8,8,2026-03-07T14:30:00.123Z'
        )

    def test_one_row_per_idea(self, strong_input, weak_input, fixed_now):
        ideas = [(i, score_full(i, now=fixed_now)) for i in (strong_input, weak_input)]
        lines = generate_csv_export(ideas).split("\n")
        assert len(lines) == 3
        assert lines[2].startswith('"Creator Hub",Content Creator,1.9,weak,')

    def test_quotes_in_name_are_doubled(self, make_input, fixed_now):
        input = make_input(idea_name='Say "Hi", World')
        row = generate_csv_export([(input, score_full(input, now=fixed_now))]).split("\n")[1]
        assert row.startswith('"Say ""Hi"", World",')

    def test_names_survive_import(self, make_input, fixed_now):
        inputs = [make_input(idea_name="Plain"), make_input(idea_name='Comma, "Quoted"')]
        csv_text = generate_csv_export([(i, score_full(i, now=fixed_now)) for i in inputs])
        assert [idea["idea_name"] for idea in parse_csv_import(csv_text)] == ["Plain", 'Comma, "Quoted"']


class TestCsvImport:
    def test_reads_name_and_description(self):
        content = (
            "Idea Name,Description,Notes\n"
            "Invoice Bot,Automates invoices,x\n"
            ",missing name,y\n"
            '"Quoted, Name","Line with ""quotes""",z\n'
        )
        assert parse_csv_import(content) == [
            {"idea_name": "Invoice Bot", "description": "Automates invoices"},
            {"idea_name": "Quoted, Name", "description": 'Line with "quotes"'},
        ]

    def test_header_match_is_case_insensitive(self):
        assert parse_csv_import("IDEA NAME\nSolo") == [{"idea_name": "Solo"}]

    def test_empty_content(self):
        assert parse_csv_import("") == []
        assert parse_csv_import("Idea Name,Description\n") == []


def test_iso_timestamp_milliseconds():
    assert iso_timestamp(datetime(2026, 1, 2, 3, 4, 5, 6000, tzinfo=UTC)) == "2026-01-02T03:04:05.006Z"


def test_export_filename(strong_input, fixed_now):
    result = score_full(strong_input, now=fixed_now)
    assert export_filename(result, "md") == f"profit-pulse-{result.idea_id}.md"


@pytest.mark.parametrize(
    "idea_id,expected",
    [
        ("my-idea-✓", "profit-pulse-my-idea--.md"),
        ('a"; filename="evil.exe', "profit-pulse-a---filename--evil-exe.md"),
        ("My Idea-LX2K9", "profit-pulse-my-idea-lx2k9.md"),
    ],
)
def test_export_filename_keeps_slug_alphabet(strong_input, fixed_now, idea_id, expected):
    result = score_full(strong_input, now=fixed_now).model_copy(update={"idea_id": idea_id})
    assert export_filename(result, "md") == expected
