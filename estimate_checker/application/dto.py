"""Application-level DTOs for snapshot comparison."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from estimate_checker.domain.models import OrderRecord
from estimate_checker.domain.results import ComparisonReport


@dataclass(slots=True, frozen=True)
class ComparisonResponse:
    before_name: str
    after_name: str
    report: ComparisonReport
    before_index: Mapping[str, OrderRecord]
    after_index: Mapping[str, OrderRecord]
