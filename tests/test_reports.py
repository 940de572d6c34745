import csv
import io
from datetime import datetime, timezone

import pandas as pd

from estimate_checker.application.dto import ComparisonResponse
from estimate_checker.domain.models import ERROR, EXPECTED_FLIGHT, EXPECTED_STOCK, DiffEntry, ValidationWarning
from estimate_checker.domain.results import ComparisonReport, ComparisonSummary
from estimate_checker.presentation.diff_report import render_csv, render_html, render_xlsx
from estimate_checker.presentation.text_report import format_diff, render_text


def make_report(diffs=(), warnings=(), by_status=None, by_field=None) -> ComparisonReport:
    summary = ComparisonSummary(
        total_orders=2,
        changed_orders=len({diff.key for diff in diffs}),
        unchanged_orders=2 - len({diff.key for diff in diffs}),
        before_count=2,
        after_count=2,
        changes_by_status=by_status or {},
        changes_by_field=by_field or {},
        generated_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )
    return ComparisonReport(summary=summary, diffs=tuple(diffs), warnings=tuple(warnings))


def make_response(report: ComparisonReport) -> ComparisonResponse:
    return ComparisonResponse(
        before_name="before.csv",
        after_name="after.csv",
        report=report,
        before_index={},
        after_index={},
    )


DIFFS = (
    DiffEntry("A2|P2|X2", "PO", "P2", "P9", ERROR),
    DiffEntry("A1|P1|X1", "Estimated Delivery Dates", "2024-01-01 (stock)", "2024-01-05 (stock)", EXPECTED_STOCK),
    DiffEntry("A2|P2|X2", "Pulling Dates", "", "2024-01-03", EXPECTED_FLIGHT),
)


def test_text_report_identical_files():
    text = render_text(make_response(make_report()))

    assert text.startswith("=== DELIVERY ESTIMATE COMPARISON REPORT ===\n")
    assert "Before file: before.csv (2 orders)" in text
    assert "NO DIFFERENCES FOUND" in text
    assert "=== VALIDATION SUMMARY ===" in text
    assert "WARNING" not in text


def test_text_report_sections_in_order():
    report = make_report(
        DIFFS,
        warnings=[ValidationWarning("input-fields-changed", "Input data fields changed - possible data corruption!")],
        by_status={"In Stock": 1, "": 1},
        by_field={"PO": 1, "Estimated Delivery Dates": 1, "Pulling Dates": 1},
    )

    text = render_text(make_response(report))

    sections = [
        "=== SUMMARY STATISTICS ===",
        "=== CHANGES BY STATUS ===",
        "=== CHANGES BY FIELD ===",
        "=== DETAILED DIFFERENCES ===",
        "EXPECTED-STOCK CHANGES (1):",
        "EXPECTED-FLIGHT CHANGES (1):",
        "ERROR CHANGES (1):",
        "=== VALIDATION SUMMARY ===",
        "WARNING: Input data fields changed",
    ]
    positions = [text.index(section) for section in sections]
    assert positions == sorted(positions)
    assert "UNEXPECTED CHANGES" not in text
    assert "(blank): 1 orders changed" in text
    assert "Total differences: 3" in text


def test_format_diff_fixed_width():
    line = format_diff(DiffEntry("K", "PO", "a", "b", ERROR))
    assert line == "K" + " " * 14 + " | PO" + " " * 18 + " | a" + " " * 24 + " | b" + " " * 24 + " | ERROR"


def test_render_csv():
    rows = list(csv.DictReader(io.StringIO(render_csv(DIFFS).decode("utf-8"))))
    assert len(rows) == 3
    assert rows[0] == {"order_key": "A2|P2|X2", "field": "PO", "before": "P2", "after": "P9", "change_type": "ERROR"}


def test_render_html_escapes_values():
    report = make_report([DiffEntry("K", "Status", "<a>", "b&c", "UNEXPECTED")])
    html = render_html(report)
    assert "&lt;a&gt;" in html
    assert "b&amp;c" in html
    assert render_html(make_report()) == "<p>No differences found.</p>"


def test_render_xlsx_sheets():
    report = make_report(DIFFS, by_field={"PO": 1})
    workbook = pd.read_excel(io.BytesIO(render_xlsx(report)), sheet_name=None, engine="openpyxl")

    assert set(workbook) == {"diffs", "summary"}
    assert workbook["diffs"]["change_type"].tolist() == [ERROR, EXPECTED_STOCK, EXPECTED_FLIGHT]
    assert "PO" in workbook["summary"]["name"].tolist()
