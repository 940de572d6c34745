from pathlib import Path

import pandas as pd
import pytest

from estimate_checker.infrastructure.parsing.utils import (
    LINE_COLUMN,
    EmptySnapshotError,
    UnreadableSnapshotError,
    frame_to_records,
)
from estimate_checker.infrastructure.parsing.workbook import read_workbook


def write_workbook(path: Path, rows: list[list[object]], sheet_name: str = "Sheet1") -> bytes:
    pd.DataFrame(rows).to_excel(path, sheet_name=sheet_name, header=False, index=False, engine="openpyxl")
    return path.read_bytes()


def test_read_workbook_trims_and_numbers_rows(tmp_path: Path):
    data = write_workbook(
        tmp_path / "before.xlsx",
        [
            [" Order Number ", "PO", "Status"],
            ["A1", " P1 ", "In Stock"],
            [None, None, None],
            ["A2", "P2", "Invalid Date"],
        ],
    )

    frame = read_workbook(data, name="before.xlsx")
    records = frame_to_records(frame)

    assert [record.get("Order Number") for record in records] == ["A1", "A2"]
    assert records[0].get("PO") == "P1"
    assert frame[LINE_COLUMN].tolist() == [2, 4]


def test_read_workbook_named_sheet(tmp_path: Path):
    path = tmp_path / "snap.xlsx"
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        pd.DataFrame([["x"], ["1"]]).to_excel(writer, sheet_name="Notes", header=False, index=False)
        pd.DataFrame([["PO"], ["P7"]]).to_excel(writer, sheet_name="Estimates", header=False, index=False)

    frame = read_workbook(path.read_bytes(), sheet_name="estimates", name="snap.xlsx")

    assert frame["PO"].tolist() == ["P7"]


def test_read_workbook_missing_sheet(tmp_path: Path):
    data = write_workbook(tmp_path / "snap.xlsx", [["PO"], ["P1"]])
    with pytest.raises(ValueError):
        read_workbook(data, sheet_name="Nope", name="snap.xlsx")


def test_read_workbook_empty(tmp_path: Path):
    path = tmp_path / "empty.xlsx"
    pd.DataFrame().to_excel(path, index=False, engine="openpyxl")
    with pytest.raises(EmptySnapshotError):
        read_workbook(path.read_bytes(), name="empty.xlsx")


def test_read_workbook_text_named_xlsx():
    with pytest.raises(UnreadableSnapshotError, match="before.xlsx"):
        read_workbook(b"Order Number,PO\nA1,P1\n", name="before.xlsx")


def test_read_workbook_text_named_xls():
    with pytest.raises(UnreadableSnapshotError):
        read_workbook(b"Order Number,PO\nA1,P1\n", name="before.xls")
