"""Repository interfaces anchoring the domain layer."""
from __future__ import annotations

from typing import Protocol, Sequence

from .models import OrderRecord


class SnapshotRepository(Protocol):
    """Provides the order records of one before/after snapshot."""

    @property
    def name(self) -> str:
        ...

    def list_records(self) -> Sequence[OrderRecord]:
        ...
