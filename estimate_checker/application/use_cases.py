"""Application services orchestrating the snapshot comparison workflow."""
from __future__ import annotations

import logging
from dataclasses import dataclass

from estimate_checker.application.dto import ComparisonResponse
from estimate_checker.domain.keys import ORDER_POLICY, index_records
from estimate_checker.domain.repositories import SnapshotRepository
from estimate_checker.domain.services import EstimateComparator

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ComparisonContext:
    before_repository: SnapshotRepository
    after_repository: SnapshotRepository
    comparator: EstimateComparator
    key_policy: str = ORDER_POLICY


class CompareSnapshotsUseCase:
    def __init__(self, context: ComparisonContext) -> None:
        self._context = context

    def execute(self) -> ComparisonResponse:
        before_repo = self._context.before_repository
        after_repo = self._context.after_repository

        # Both snapshots load before any comparison runs.
        before_records = before_repo.list_records()
        after_records = after_repo.list_records()
        logger.debug(
            "Loaded %d records from %s and %d from %s",
            len(before_records),
            before_repo.name,
            len(after_records),
            after_repo.name,
        )

        before_index = index_records(before_records, policy=self._context.key_policy)
        after_index = index_records(after_records, policy=self._context.key_policy)
        report = self._context.comparator.compare(before_index, after_index)
        return ComparisonResponse(
            before_name=before_repo.name,
            after_name=after_repo.name,
            report=report,
            before_index=before_index,
            after_index=after_index,
        )
