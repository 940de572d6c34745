"""Record keying and per-snapshot indexing."""
from __future__ import annotations

import logging
from typing import Callable, Mapping, Sequence

from .models import ITEM, ORDER_NUMBER, PART_ID, PO, OrderRecord

logger = logging.getLogger(__name__)

KEY_SEPARATOR = "|"
LINE_PREFIX = "LINE_"

ORDER_POLICY = "order"
ITEM_POLICY = "item"


def order_key(record: OrderRecord, line_number: int) -> str:
    """``Order Number|PO|Part ID``, falling back to the source line when the order number is blank."""
    order_number = record.get(ORDER_NUMBER)
    head = order_number if order_number else f"{LINE_PREFIX}{line_number}"
    return KEY_SEPARATOR.join((head, record.get(PO), record.get(PART_ID)))


def item_key(record: OrderRecord, line_number: int) -> str:
    return KEY_SEPARATOR.join((record.get(PO), record.get(ITEM), record.get(PART_ID)))


KEY_POLICIES: Mapping[str, Callable[[OrderRecord, int], str]] = {
    ORDER_POLICY: order_key,
    ITEM_POLICY: item_key,
}


def resolve_key_policy(policy: str) -> Callable[[OrderRecord, int], str]:
    try:
        return KEY_POLICIES[policy]
    except KeyError as exc:
        raise ValueError(
            f"Unknown key policy {policy!r}; expected one of {sorted(KEY_POLICIES)}"
        ) from exc


def index_records(
    records: Sequence[OrderRecord],
    line_numbers: Sequence[int] | None = None,
    policy: str = ORDER_POLICY,
) -> dict[str, OrderRecord]:
    """Map each record to its key. Later records win on key collisions."""
    build_key = resolve_key_policy(policy)
    if line_numbers is None:
        line_numbers = [record.line_number for record in records]
    elif len(line_numbers) != len(records):
        raise ValueError(
            f"Got {len(line_numbers)} line numbers for {len(records)} records"
        )

    index: dict[str, OrderRecord] = {}
    for record, line_number in zip(records, line_numbers):
        key = build_key(record, line_number)
        if key in index:
            logger.debug(
                "Key %s at line %d replaces line %d", key, line_number, index[key].line_number
            )
        index[key] = record
    logger.debug("Indexed %d records into %d keys (policy=%s)", len(records), len(index), policy)
    return index
