"""Domain models for feeding records."""

import re
from dataclasses import dataclass
from datetime import datetime

MIN_AMOUNT = 1
MAX_AMOUNT = 20
MAX_RECORD_ID = 2**63 - 1

_INTEGER = re.compile(r"[+-]?\d+")


class ValidationError(ValueError):
    """Raised when user input cannot be turned into a valid value."""


@dataclass(frozen=True)
class FeedingRecord:
    """One logged feeding event."""

    id: int
    owner_id: int
    amount: int
    created_at: datetime


def parse_amount(raw: str | None) -> int:
    """Parse a feeding amount in grams, enforcing the 1..20 range."""
    value = _parse_int(raw)
    if not MIN_AMOUNT <= value <= MAX_AMOUNT:
        raise ValidationError(
            f"amount must be between {MIN_AMOUNT} and {MAX_AMOUNT}, got {value}"
        )
    return value


def parse_record_id(raw: str | None) -> int:
    """Parse a record id, which must be a positive integer."""
    value = _parse_int(raw)
    if not 0 < value <= MAX_RECORD_ID:
        raise ValidationError(f"record id out of range: {value}")
    return value


def _parse_int(raw: str | None) -> int:
    if raw is None or not _INTEGER.fullmatch(raw):
        raise ValidationError(f"not an integer: {raw!r}")
    return int(raw)
