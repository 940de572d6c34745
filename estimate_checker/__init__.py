"""Before/after comparison of order-level delivery estimate extracts."""
from estimate_checker.application.use_cases import CompareSnapshotsUseCase, ComparisonContext
from estimate_checker.domain.classification import classify
from estimate_checker.domain.keys import index_records
from estimate_checker.domain.services import EstimateComparator, validate_changes
from estimate_checker.infrastructure.repositories.file_repositories import (
    DelimitedSnapshotRepository,
    WorkbookSnapshotRepository,
    open_snapshot_repository,
)

__all__ = [
    "CompareSnapshotsUseCase",
    "ComparisonContext",
    "EstimateComparator",
    "classify",
    "index_records",
    "validate_changes",
    "DelimitedSnapshotRepository",
    "WorkbookSnapshotRepository",
    "open_snapshot_repository",
]
