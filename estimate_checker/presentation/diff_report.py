"""Diff report generators for snapshot comparisons."""
from __future__ import annotations

import csv
import html
import io
from typing import Sequence

import pandas as pd

from estimate_checker.domain.models import DiffEntry
from estimate_checker.domain.results import ComparisonReport

DIFF_COLUMNS = ["order_key", "field", "before", "after", "change_type"]


def diffs_to_rows(diffs: Sequence[DiffEntry]) -> list[dict[str, str]]:
    rows: list[dict[str, str]] = []
    for item in diffs:
        rows.append(
            {
                "order_key": item.key,
                "field": item.field,
                "before": item.before,
                "after": item.after,
                "change_type": item.change_type,
            }
        )
    return rows


def summary_to_rows(report: ComparisonReport) -> list[dict[str, object]]:
    summary = report.summary
    rows: list[dict[str, object]] = [
        {"section": "totals", "name": "Total Orders", "count": summary.total_orders},
        {"section": "totals", "name": "Changed Orders", "count": summary.changed_orders},
        {"section": "totals", "name": "Unchanged Orders", "count": summary.unchanged_orders},
    ]
    rows += [
        {"section": "status", "name": status, "count": count}
        for status, count in summary.changes_by_status.items()
    ]
    rows += [
        {"section": "field", "name": field, "count": count}
        for field, count in summary.changes_by_field.items()
    ]
    rows += [{"section": "warning", "name": warning.message, "count": ""} for warning in report.warnings]
    return rows


def render_csv(diffs: Sequence[DiffEntry]) -> bytes:
    rows = diffs_to_rows(diffs)
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=DIFF_COLUMNS)
    writer.writeheader()
    writer.writerows(rows)
    return buffer.getvalue().encode("utf-8")


def render_html(report: ComparisonReport) -> str:
    rows = diffs_to_rows(report.diffs)
    if not rows:
        return "<p>No differences found.</p>"
    header = "".join(f"<th>{col}</th>" for col in DIFF_COLUMNS)
    body_parts = []
    for row in rows:
        cells = "".join(f"<td>{html.escape(value)}</td>" for value in row.values())
        body_parts.append(f'<tr class="{row["change_type"].lower()}">{cells}</tr>')
    body_html = "".join(body_parts)
    return f"<table><thead><tr>{header}</tr></thead><tbody>{body_html}</tbody></table>"


def render_xlsx(report: ComparisonReport) -> bytes:
    buf = io.BytesIO()
    with pd.ExcelWriter(buf, engine="xlsxwriter") as writer:
        pd.DataFrame(diffs_to_rows(report.diffs), columns=DIFF_COLUMNS).to_excel(
            writer, sheet_name="diffs", index=False
        )
        pd.DataFrame(summary_to_rows(report), columns=["section", "name", "count"]).to_excel(
            writer, sheet_name="summary", index=False
        )
        sheet = writer.sheets["diffs"]
        sheet.set_column(0, 0, 28)
        sheet.set_column(1, 1, 24)
        sheet.set_column(2, 3, 30)
        sheet.set_column(4, 4, 18)
    return buf.getvalue()
