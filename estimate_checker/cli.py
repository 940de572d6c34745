"""Command-line entrypoint for delivery estimate comparison."""
from __future__ import annotations

import argparse
import codecs
import logging
import sys
from dataclasses import replace
from pathlib import Path

from estimate_checker.application.dto import ComparisonResponse
from estimate_checker.application.use_cases import ComparisonContext, CompareSnapshotsUseCase
from estimate_checker.config import SETTINGS, Settings
from estimate_checker.domain.keys import KEY_POLICIES
from estimate_checker.domain.services import TOTAL_MODES, EstimateComparator
from estimate_checker.infrastructure.repositories.file_repositories import open_snapshot_repository
from estimate_checker.presentation.diff_report import render_csv, render_html, render_xlsx
from estimate_checker.presentation.text_report import render_text

logger = logging.getLogger("estimate_checker")


def _encoding(value: str) -> str:
    try:
        codecs.lookup(value)
    except LookupError as exc:
        raise argparse.ArgumentTypeError(f"unknown encoding: {value}") from exc
    return value


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Compare before/after delivery estimate extracts and classify every change"
    )
    parser.add_argument("before", nargs="?", default=str(SETTINGS.before_path), help="Before snapshot (csv or xlsx)")
    parser.add_argument("after", nargs="?", default=str(SETTINGS.after_path), help="After snapshot (csv or xlsx)")
    parser.add_argument("--delimiter", default=SETTINGS.delimiter, help="Field delimiter for text files")
    parser.add_argument("--encoding", type=_encoding, default=SETTINGS.encoding, help="Text encoding of delimited files")
    parser.add_argument("--fields", help="Comma-separated list of fields to compare, in order")
    parser.add_argument("--key-policy", choices=sorted(KEY_POLICIES), default=SETTINGS.key_policy)
    parser.add_argument("--total-mode", choices=TOTAL_MODES, default=SETTINGS.total_mode)
    parser.add_argument("--min-fields", type=int, help="Skip lines with fewer values (default: header width)")
    parser.add_argument("--sheet", help="Worksheet name for workbook snapshots")
    parser.add_argument("--csv", type=Path, help="Also write the diff list as CSV")
    parser.add_argument("--html", type=Path, help="Also write the diff list as an HTML table")
    parser.add_argument("--xlsx", type=Path, help="Also write diffs and summary to a workbook")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def build_settings(args: argparse.Namespace) -> Settings:
    fields = SETTINGS.compared_fields
    if args.fields:
        fields = tuple(name.strip() for name in args.fields.split(",") if name.strip())
    return replace(
        SETTINGS,
        before_path=Path(args.before),
        after_path=Path(args.after),
        compared_fields=fields,
        key_policy=args.key_policy,
        total_mode=args.total_mode,
        delimiter=args.delimiter,
        encoding=args.encoding,
        min_fields=args.min_fields,
        sheet_name=args.sheet,
    )


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        stream=sys.stderr,
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )


def _write_exports(args: argparse.Namespace, response: ComparisonResponse) -> None:
    report = response.report
    exports = (
        (args.csv, lambda: render_csv(report.diffs)),
        (args.html, lambda: render_html(report).encode("utf-8")),
        (args.xlsx, lambda: render_xlsx(report)),
    )
    for path, render in exports:
        if path is None:
            continue
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(render())
        logger.info("Wrote %s", path)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    configure_logging(args.verbose)
    settings = build_settings(args)

    try:
        context = ComparisonContext(
            before_repository=open_snapshot_repository(settings.before_path, settings=settings),
            after_repository=open_snapshot_repository(settings.after_path, settings=settings),
            comparator=EstimateComparator(
                compared_fields=settings.compared_fields,
                total_mode=settings.total_mode,
            ),
            key_policy=settings.key_policy,
        )
        response = CompareSnapshotsUseCase(context).execute()
    except (OSError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    sys.stdout.write(render_text(response))
    try:
        _write_exports(args, response)
    except OSError as exc:
        print(f"Error: cannot write export: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
