"""Domain services implementing the snapshot comparison rules."""
from __future__ import annotations

import logging
from collections import Counter
from datetime import datetime, timezone
from typing import Iterable, Mapping, Sequence

from .classification import Classifier, classify
from .models import (
    COMPARED_FIELDS,
    ERROR,
    EXISTS,
    ITEM,
    MISSING_FIELD,
    NOT_FOUND,
    PART_ID,
    PO,
    STATUS,
    DiffEntry,
    OrderRecord,
    ValidationWarning,
)
from .results import ComparisonReport, ComparisonSummary

logger = logging.getLogger(__name__)

MAX_TOTAL = "max"
UNION_TOTAL = "union"
TOTAL_MODES = (MAX_TOTAL, UNION_TOTAL)

FROZEN_STATUSES = ("No Inventory Available", "Invalid Date")
CORRUPTION_FIELDS = ("Required Qty", PO, ITEM, PART_ID)


class EstimateComparator:
    """Pairs two keyed snapshots and classifies every field that changed."""

    def __init__(
        self,
        compared_fields: Sequence[str] = COMPARED_FIELDS,
        classifier: Classifier = classify,
        total_mode: str = MAX_TOTAL,
    ) -> None:
        if total_mode not in TOTAL_MODES:
            raise ValueError(f"Unknown total mode {total_mode!r}; expected one of {TOTAL_MODES}")
        self._fields = tuple(compared_fields)
        self._classify = classifier
        self._total_mode = total_mode

    def compare(
        self,
        before: Mapping[str, OrderRecord],
        after: Mapping[str, OrderRecord],
    ) -> ComparisonReport:
        diffs: list[DiffEntry] = []
        changes_by_status: Counter[str] = Counter()
        changes_by_field: Counter[str] = Counter()
        changed = 0
        unchanged = 0

        keys = self._union_keys(before, after)
        for key in keys:
            before_record = before.get(key)
            after_record = after.get(key)

            if before_record is None:
                diffs.append(DiffEntry(key, MISSING_FIELD, NOT_FOUND, EXISTS, ERROR))
                changed += 1
                continue
            if after_record is None:
                diffs.append(DiffEntry(key, MISSING_FIELD, EXISTS, NOT_FOUND, ERROR))
                changed += 1
                continue

            field_diffs = self._diff_fields(key, before_record, after_record)
            if field_diffs:
                diffs.extend(field_diffs)
                changes_by_field.update(diff.field for diff in field_diffs)
                changes_by_status[before_record.get(STATUS)] += 1
                changed += 1
            else:
                unchanged += 1

        if self._total_mode == UNION_TOTAL:
            total = len(keys)
        else:
            total = max(len(before), len(after))

        summary = ComparisonSummary(
            total_orders=total,
            changed_orders=changed,
            unchanged_orders=unchanged,
            before_count=len(before),
            after_count=len(after),
            changes_by_status=dict(changes_by_status),
            changes_by_field=dict(changes_by_field),
            generated_at=datetime.now(timezone.utc),
        )
        logger.debug(
            "Compared %d keys: %d changed, %d unchanged, %d diffs",
            len(keys),
            changed,
            unchanged,
            len(diffs),
        )
        return ComparisonReport(
            summary=summary,
            diffs=tuple(diffs),
            warnings=tuple(validate_changes(summary.changes_by_status, summary.changes_by_field)),
        )

    def _diff_fields(self, key: str, before: OrderRecord, after: OrderRecord) -> list[DiffEntry]:
        status = before.get(STATUS)
        entries: list[DiffEntry] = []
        for field in self._fields:
            before_value = before.get(field)
            after_value = after.get(field)
            if before_value != after_value:
                change_type = self._classify(field, before_value, after_value, status)
                entries.append(DiffEntry(key, field, before_value, after_value, change_type))
        return entries

    @staticmethod
    def _union_keys(before: Mapping[str, OrderRecord], after: Mapping[str, OrderRecord]) -> list[str]:
        keys = list(before)
        keys.extend(key for key in after if key not in before)
        return keys


def validate_changes(
    changes_by_status: Mapping[str, int],
    changes_by_field: Mapping[str, int],
    frozen_statuses: Iterable[str] = FROZEN_STATUSES,
    corruption_fields: Iterable[str] = CORRUPTION_FIELDS,
) -> list[ValidationWarning]:
    warnings: list[ValidationWarning] = []
    for status in frozen_statuses:
        if status in changes_by_status:
            warnings.append(
                ValidationWarning(
                    code="frozen-status-changed",
                    message=f"'{status}' orders changed!",
                    subjects=(status,),
                )
            )

    changed_inputs = tuple(name for name in corruption_fields if name in changes_by_field)
    if changed_inputs:
        warnings.append(
            ValidationWarning(
                code="input-fields-changed",
                message="Input data fields changed - possible data corruption!",
                subjects=changed_inputs,
            )
        )
    return warnings
