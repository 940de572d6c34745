"""Domain-level results for delivery estimate comparison."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, Mapping, Sequence

from .models import CHANGE_TYPES, DiffEntry, ValidationWarning


@dataclass(frozen=True)
class ComparisonSummary:
    total_orders: int
    changed_orders: int
    unchanged_orders: int
    before_count: int
    after_count: int
    changes_by_status: Mapping[str, int]
    changes_by_field: Mapping[str, int]
    generated_at: datetime


@dataclass(frozen=True)
class ComparisonReport:
    summary: ComparisonSummary
    diffs: Sequence[DiffEntry] = field(default_factory=tuple)
    warnings: Sequence[ValidationWarning] = field(default_factory=tuple)

    def has_differences(self) -> bool:
        return bool(self.diffs)

    def count(self, change_type: str) -> int:
        return sum(1 for diff in self.diffs if diff.change_type == change_type)

    def group_by_change_type(self) -> dict[str, list[DiffEntry]]:
        groups: dict[str, list[DiffEntry]] = {change_type: [] for change_type in CHANGE_TYPES}
        for diff in self.diffs:
            groups.setdefault(diff.change_type, []).append(diff)
        return {change_type: items for change_type, items in groups.items() if items}

    def iter_missing(self) -> Iterable[DiffEntry]:
        return (diff for diff in self.diffs if diff.is_missing)
