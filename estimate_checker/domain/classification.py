"""Change classification rules.

Every rule here is a literal, case-sensitive substring check. The comparator
only sees the :data:`Classifier` signature, so a stricter matcher can replace
:func:`classify` without touching the comparison loop.
"""
from __future__ import annotations

from typing import Callable

from .models import (
    ERROR,
    ESTIMATED_DELIVERY_DATES,
    EXPECTED_FLIGHT,
    EXPECTED_STOCK,
    ITEM,
    ORDER_NUMBER,
    PART_ID,
    PO,
    PULLING_DATES,
    UNEXPECTED,
)

Classifier = Callable[[str, str, str, "str | None"], str]

IMMUTABLE_FIELDS = frozenset(
    {
        ORDER_NUMBER,
        PO,
        ITEM,
        PART_ID,
        "Required Qty",
        "Request Date",
        "PO Create Date",
    }
)

STOCK_STATUS_MARKERS = ("Stock",)
FLIGHT_STATUS_MARKERS = ("Flight", "Awaiting")
STOCK_VALUE_MARKER = "(stock)"
FLIGHT_VALUE_MARKER = "(flight)"


def _mentions(text: str, markers: tuple[str, ...]) -> bool:
    return any(marker in text for marker in markers)


def classify(field: str, before: str, after: str, status: str | None) -> str:
    """Label one field change; the first matching rule wins."""
    status = status or ""
    if field == ESTIMATED_DELIVERY_DATES:
        if (
            _mentions(status, STOCK_STATUS_MARKERS)
            or STOCK_VALUE_MARKER in before
            or STOCK_VALUE_MARKER in after
        ):
            return EXPECTED_STOCK
        if (
            _mentions(status, FLIGHT_STATUS_MARKERS)
            or FLIGHT_VALUE_MARKER in before
            or FLIGHT_VALUE_MARKER in after
        ):
            return EXPECTED_FLIGHT
    if field == PULLING_DATES:
        return EXPECTED_FLIGHT
    if field in IMMUTABLE_FIELDS:
        return ERROR
    return UNEXPECTED
