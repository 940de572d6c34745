"""Domain models for delivery estimate comparison.

These dataclasses capture a single order row as read from an extract and the
per-field differences found between two snapshots of the same order.
"""
from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

EXPECTED_STOCK = "EXPECTED-STOCK"
EXPECTED_FLIGHT = "EXPECTED-FLIGHT"
UNEXPECTED = "UNEXPECTED"
ERROR = "ERROR"

# Order in which change groups are reported.
CHANGE_TYPES = (EXPECTED_STOCK, EXPECTED_FLIGHT, UNEXPECTED, ERROR)

MISSING_FIELD = "MISSING"
EXISTS = "EXISTS"
NOT_FOUND = "NOT FOUND"

ORDER_NUMBER = "Order Number"
PO = "PO"
ITEM = "Item"
PART_ID = "Part ID"
STATUS = "Status"
ESTIMATED_DELIVERY_DATES = "Estimated Delivery Dates"
PULLING_DATES = "Pulling Dates"

COMPARED_FIELDS = (
    ORDER_NUMBER,
    PO,
    ITEM,
    PART_ID,
    "Required Qty",
    "Request Date",
    "PO Create Date",
    ESTIMATED_DELIVERY_DATES,
    PULLING_DATES,
    STATUS,
    "Stock Used",
    "Flight Qty Used",
    "Available Qty",
    "Fulfilled Qty",
    "Remaining Qty",
)


@dataclass(frozen=True)
class OrderRecord:
    """One order row from a snapshot, values trimmed and never ``None``."""

    fields: Mapping[str, str]
    line_number: int = 0

    def __post_init__(self) -> None:
        cleaned = {
            str(name).strip(): "" if value is None else str(value).strip()
            for name, value in self.fields.items()
        }
        object.__setattr__(self, "fields", MappingProxyType(cleaned))

    def get(self, name: str) -> str:
        return self.fields.get(name, "")


@dataclass(frozen=True)
class DiffEntry:
    """A single classified difference for one order key."""

    key: str
    field: str
    before: str
    after: str
    change_type: str

    @property
    def is_missing(self) -> bool:
        return self.field == MISSING_FIELD


@dataclass(frozen=True)
class ValidationWarning:
    """Advisory finding raised over the aggregated comparison counts."""

    code: str
    message: str
    subjects: tuple[str, ...] = ()
