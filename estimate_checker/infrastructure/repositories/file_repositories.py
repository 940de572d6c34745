"""File-backed repositories for before/after snapshots."""
from __future__ import annotations

from io import BytesIO
from pathlib import Path
from typing import Sequence

from estimate_checker.config import SETTINGS, Settings
from estimate_checker.domain.models import OrderRecord
from estimate_checker.domain.repositories import SnapshotRepository
from estimate_checker.infrastructure.parsing.delimited import read_delimited
from estimate_checker.infrastructure.parsing.utils import ensure_bytes, frame_to_records
from estimate_checker.infrastructure.parsing.workbook import read_workbook

WORKBOOK_SUFFIXES = (".xlsx", ".xlsm", ".xls")


def _source_name(source: BytesIO | Path | bytes, name: str | None) -> str:
    if name:
        return name
    if isinstance(source, Path):
        return str(source)
    return "<upload>"


class DelimitedSnapshotRepository(SnapshotRepository):
    def __init__(
        self,
        source: BytesIO | Path | bytes,
        settings: Settings = SETTINGS,
        name: str | None = None,
    ) -> None:
        self._name = _source_name(source, name)
        self._source = ensure_bytes(source)
        self._settings = settings

    @property
    def name(self) -> str:
        return self._name

    def list_records(self) -> Sequence[OrderRecord]:
        frame = read_delimited(
            self._source,
            delimiter=self._settings.delimiter,
            quote=self._settings.quote_char,
            escape=self._settings.escape_char,
            min_fields=self._settings.min_fields,
            encoding=self._settings.encoding,
            name=self._name,
        )
        return frame_to_records(frame)


class WorkbookSnapshotRepository(SnapshotRepository):
    def __init__(
        self,
        source: BytesIO | Path | bytes,
        settings: Settings = SETTINGS,
        name: str | None = None,
    ) -> None:
        self._name = _source_name(source, name)
        self._source = ensure_bytes(source)
        self._settings = settings

    @property
    def name(self) -> str:
        return self._name

    def list_records(self) -> Sequence[OrderRecord]:
        frame = read_workbook(self._source, sheet_name=self._settings.sheet_name, name=self._name)
        return frame_to_records(frame)


def open_snapshot_repository(
    source: BytesIO | Path | bytes,
    settings: Settings = SETTINGS,
    name: str | None = None,
) -> SnapshotRepository:
    """Pick the workbook or delimited-text reader from the file suffix."""
    label = _source_name(source, name)
    if label.lower().endswith(WORKBOOK_SUFFIXES):
        return WorkbookSnapshotRepository(source, settings=settings, name=label)
    return DelimitedSnapshotRepository(source, settings=settings, name=label)
