"""Central configuration for the estimate checker package."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from estimate_checker.domain.keys import ORDER_POLICY
from estimate_checker.domain.models import COMPARED_FIELDS
from estimate_checker.domain.services import MAX_TOTAL

DEFAULT_BEFORE_FILE = Path("delivery_estimates_before.csv")
DEFAULT_AFTER_FILE = Path("delivery_estimates_after.csv")


@dataclass(slots=True, frozen=True)
class Settings:
    before_path: Path
    after_path: Path
    compared_fields: tuple[str, ...]
    key_policy: str
    total_mode: str
    delimiter: str
    quote_char: str
    escape_char: str
    # None means "as many fields as the header has".
    min_fields: int | None
    sheet_name: str | None
    encoding: str


SETTINGS = Settings(
    before_path=DEFAULT_BEFORE_FILE,
    after_path=DEFAULT_AFTER_FILE,
    compared_fields=tuple(COMPARED_FIELDS),
    key_policy=ORDER_POLICY,
    total_mode=MAX_TOTAL,
    delimiter=",",
    quote_char='"',
    escape_char="\\",
    min_fields=None,
    sheet_name=None,
    encoding="utf-8-sig",
)
