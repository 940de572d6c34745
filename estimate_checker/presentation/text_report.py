"""Fixed-width console report for a snapshot comparison."""
from __future__ import annotations

from estimate_checker.application.dto import ComparisonResponse
from estimate_checker.domain.models import DiffEntry
from estimate_checker.domain.results import ComparisonReport

ROW_FORMAT = "{:<15} | {:<20} | {:<25} | {:<25} | {}"
RULE_WIDTH = 120
BLANK_STATUS = "(blank)"

EXPECTATIONS = (
    "Expected changes:",
    "  [ok] 'In Stock' orders should have delivery date changes",
    "  [ok] Flight-based orders should have pulling/delivery date changes",
    "",
    "Unexpected changes:",
    "  [x] 'No Inventory Available' orders should NOT change",
    "  [x] 'Invalid Date' orders should NOT change",
    "  [x] Quantity fields should NOT change (unless there's a bug)",
)


def format_diff(diff: DiffEntry) -> str:
    return ROW_FORMAT.format(diff.key, diff.field, diff.before, diff.after, diff.change_type)


def _summary_lines(report: ComparisonReport) -> list[str]:
    summary = report.summary
    lines = [
        "=== SUMMARY STATISTICS ===",
        f"Total Orders: {summary.total_orders}",
        f"Changed Orders: {summary.changed_orders}",
        f"Unchanged Orders: {summary.unchanged_orders}",
        "",
        "=== CHANGES BY STATUS ===",
    ]
    for status, count in summary.changes_by_status.items():
        lines.append(f"{status or BLANK_STATUS}: {count} orders changed")
    lines += ["", "=== CHANGES BY FIELD ==="]
    for field, count in summary.changes_by_field.items():
        lines.append(f"{field}: {count} changes")
    lines.append("")
    return lines


def _detail_lines(report: ComparisonReport) -> list[str]:
    if not report.has_differences():
        return ["NO DIFFERENCES FOUND - Files are identical!"]

    lines = [
        "=== DETAILED DIFFERENCES ===",
        f"Total differences: {len(report.diffs)}",
        "",
        ROW_FORMAT.format("ORDER KEY", "FIELD", "BEFORE", "AFTER", "CHANGE TYPE"),
        "-" * RULE_WIDTH,
    ]
    for change_type, diffs in report.group_by_change_type().items():
        lines += ["", f"{change_type} CHANGES ({len(diffs)}):"]
        lines.extend(format_diff(diff) for diff in diffs)
    return lines


def _validation_lines(report: ComparisonReport) -> list[str]:
    lines = ["", "=== VALIDATION SUMMARY ===", *EXPECTATIONS]
    for warning in report.warnings:
        lines.append(f"WARNING: {warning.message}")
    return lines


def render_text(response: ComparisonResponse) -> str:
    summary = response.report.summary
    lines = [
        "=== DELIVERY ESTIMATE COMPARISON REPORT ===",
        f"Before file: {response.before_name} ({summary.before_count} orders)",
        f"After file: {response.after_name} ({summary.after_count} orders)",
        "",
    ]
    lines += _summary_lines(response.report)
    lines += _detail_lines(response.report)
    lines += _validation_lines(response.report)
    return "\n".join(lines) + "\n"
