"""Shared parsing utilities for snapshot ingestion."""
from __future__ import annotations

from io import BytesIO
from pathlib import Path
from typing import Sequence

import pandas as pd

from estimate_checker.domain.models import OrderRecord

# Column carrying the 1-based source line (or worksheet row) of each record.
LINE_COLUMN = "__line__"


class EmptySnapshotError(ValueError):
    """Raised when a snapshot has no header line to read."""


class MalformedLineError(ValueError):
    """Raised when a single data line cannot be tokenised."""


class UnreadableSnapshotError(ValueError):
    """Raised when a workbook file cannot be opened by its engine."""


def ensure_bytes(source: BytesIO | Path | bytes) -> bytes:
    if isinstance(source, bytes):
        return source
    if isinstance(source, BytesIO):
        return source.getvalue()
    if isinstance(source, Path):
        if not source.exists():
            raise FileNotFoundError(f"Snapshot not found: {source}")
        return source.read_bytes()
    raise TypeError(f"Unsupported source type: {type(source)!r}")


def clean_cell(value: object) -> str:
    if value is None:
        return ""
    try:
        if pd.isna(value):
            return ""
    except (TypeError, ValueError):
        pass
    return str(value).strip()


def clean_headers(headers: Sequence[object]) -> list[str]:
    return [clean_cell(header) for header in headers]


def frame_to_records(df: pd.DataFrame) -> list[OrderRecord]:
    """Turn a string-typed frame with a :data:`LINE_COLUMN` into order records."""
    value_columns = [column for column in df.columns if column != LINE_COLUMN]
    records: list[OrderRecord] = []
    for idx, row in df.iterrows():
        line_number = int(row[LINE_COLUMN]) if LINE_COLUMN in df.columns else int(idx) + 2
        records.append(
            OrderRecord(
                fields={column: clean_cell(row[column]) for column in value_columns},
                line_number=line_number,
            )
        )
    return records
