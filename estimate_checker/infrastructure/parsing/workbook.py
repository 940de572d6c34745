"""Excel workbook parser for snapshots exported as ``.xlsx``/``.xls``."""
from __future__ import annotations

import logging
import zipfile
from io import BytesIO

import pandas as pd
from openpyxl.utils.exceptions import InvalidFileException
from xlrd import XLRDError

from estimate_checker.infrastructure.parsing.utils import (
    LINE_COLUMN,
    EmptySnapshotError,
    UnreadableSnapshotError,
    clean_cell,
    clean_headers,
)

logger = logging.getLogger(__name__)

XLS_SUFFIXES = (".xls",)

# What openpyxl and xlrd raise for files that are not the workbook they claim to be.
# A zip without the workbook parts surfaces as KeyError from zipfile.
ENGINE_ERRORS = (zipfile.BadZipFile, InvalidFileException, XLRDError, KeyError)


def _engine_for(name: str) -> str:
    return "xlrd" if name.lower().endswith(XLS_SUFFIXES) else "openpyxl"


def _pick_sheet(source: BytesIO, preferred: str | None, engine: str) -> str | int:
    if preferred is None:
        return 0
    with pd.ExcelFile(source, engine=engine) as xls:
        sheets = xls.sheet_names
    if not sheets:
        raise ValueError("Workbook has no sheets")
    if preferred in sheets:
        return preferred
    lower_map = {sheet.lower(): sheet for sheet in sheets}
    if preferred.lower() in lower_map:
        return lower_map[preferred.lower()]
    raise ValueError(f"Worksheet {preferred!r} not found; available: {sheets}")


def read_workbook(
    data: bytes,
    sheet_name: str | None = None,
    name: str = "<workbook>",
) -> pd.DataFrame:
    engine = _engine_for(name)
    try:
        sheet = _pick_sheet(BytesIO(data), sheet_name, engine)
        raw = pd.read_excel(
            BytesIO(data),
            sheet_name=sheet,
            engine=engine,
            dtype=str,
            header=None,
            keep_default_na=False,
        )
    except ENGINE_ERRORS as exc:
        raise UnreadableSnapshotError(f"Cannot read workbook {name}: {exc}") from exc
    if raw.empty:
        raise EmptySnapshotError(f"Empty file: {name}")

    headers = clean_headers(raw.iloc[0].tolist())
    body = raw.iloc[1:].copy()
    body.columns = headers
    body = body.loc[:, ~body.columns.duplicated(keep="last")].copy()
    for column in body.columns:
        body[column] = body[column].map(clean_cell)
    # Worksheet rows are 1-based and the header occupies row 1.
    body[LINE_COLUMN] = [int(idx) + 1 for idx in body.index]
    blank = (body.drop(columns=[LINE_COLUMN]) == "").all(axis=1)
    if blank.any():
        logger.debug("%s: dropping %d blank rows", name, int(blank.sum()))
    return body[~blank].reset_index(drop=True)
