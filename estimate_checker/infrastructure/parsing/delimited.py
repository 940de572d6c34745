"""Delimited-text parser producing string-typed snapshot frames.

Lines are tokenised one at a time so that a single malformed line can be
skipped with a warning while the rest of the file is still read. Quoted
fields may span delimiters, a doubled quote inside a quoted field is one
literal quote, and the escape character makes the next character literal.

Byte input is also decoded line by line, so a line that is not valid text
in the chosen encoding is skipped the same way. The encoding must write a
newline as a single byte, as UTF-8 and Latin-1 do.
"""
from __future__ import annotations

import logging

import pandas as pd

from estimate_checker.infrastructure.parsing.utils import (
    LINE_COLUMN,
    EmptySnapshotError,
    MalformedLineError,
)

logger = logging.getLogger(__name__)


def split_line(
    line: str,
    delimiter: str = ",",
    quote: str = '"',
    escape: str | None = "\\",
) -> list[str]:
    if len(delimiter) != 1:
        raise ValueError(f"Delimiter must be a single character, got {delimiter!r}")

    values: list[str] = []
    current: list[str] = []
    in_quotes = False
    i = 0
    n = len(line)
    while i < n:
        ch = line[i]
        if escape and ch == escape:
            if i + 1 < n:
                current.append(line[i + 1])
                i += 2
            else:
                current.append(ch)
                i += 1
            continue
        if ch == quote:
            if in_quotes and i + 1 < n and line[i + 1] == quote:
                current.append(quote)
                i += 2
                continue
            in_quotes = not in_quotes
        elif ch == delimiter and not in_quotes:
            values.append("".join(current).strip())
            current = []
        else:
            current.append(ch)
        i += 1

    if in_quotes:
        raise MalformedLineError("unterminated quoted field")
    values.append("".join(current).strip())
    return values


def _decode_lines(data: bytes | str, encoding: str) -> list[str | None]:
    """Split ``data`` into lines, decoding bytes one line at a time.

    A line that does not decode is returned as ``None`` so it keeps its line
    number and can be skipped like any other unreadable line.
    """
    if isinstance(data, str):
        return data.lstrip("\ufeff").splitlines()
    lines: list[str | None] = []
    for raw in data.splitlines():
        try:
            lines.append(raw.decode(encoding))
        except UnicodeDecodeError:
            lines.append(None)
    if lines and lines[0] is not None:
        # utf-8-sig only strips the mark at the very start of its input.
        lines[0] = lines[0].lstrip("\ufeff")
    return lines


def read_delimited(
    data: bytes | str,
    delimiter: str = ",",
    quote: str = '"',
    escape: str | None = "\\",
    min_fields: int | None = None,
    encoding: str = "utf-8-sig",
    name: str = "<snapshot>",
) -> pd.DataFrame:
    lines = _decode_lines(data, encoding)

    header_at = next((idx for idx, line in enumerate(lines) if line is None or line.strip()), None)
    if header_at is None:
        raise EmptySnapshotError(f"Empty file: {name}")
    header = lines[header_at]
    if header is None:
        raise MalformedLineError(f"Header of {name} is not valid {encoding} text")
    try:
        headers = split_line(header, delimiter, quote, escape)
    except MalformedLineError as exc:
        raise MalformedLineError(f"Header of {name} could not be parsed: {exc}") from exc

    required = len(headers) if min_fields is None else min_fields
    rows: list[dict[str, object]] = []
    skipped = 0
    for line_number, line in enumerate(lines[header_at + 1 :], start=header_at + 2):
        if line is None:
            logger.warning("%s: line %d could not be parsed (not valid %s text), skipping", name, line_number, encoding)
            skipped += 1
            continue
        if not line.strip():
            continue
        try:
            values = split_line(line, delimiter, quote, escape)
        except MalformedLineError as exc:
            logger.warning("%s: line %d could not be parsed (%s), skipping: %s", name, line_number, exc, line)
            skipped += 1
            continue
        if len(values) < required:
            logger.warning(
                "%s: line %d has %d values, expected at least %d, skipping: %s",
                name,
                line_number,
                len(values),
                required,
                line,
            )
            skipped += 1
            continue

        row: dict[str, object] = dict(zip(headers, values))
        row[LINE_COLUMN] = line_number
        rows.append(row)

    columns = list(dict.fromkeys(headers)) + [LINE_COLUMN]
    logger.debug("%s: read %d rows, skipped %d", name, len(rows), skipped)
    return pd.DataFrame(rows, columns=columns)
