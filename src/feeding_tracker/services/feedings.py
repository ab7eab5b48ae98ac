"""Feeding record service."""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Protocol
from zoneinfo import ZoneInfo

from feeding_tracker.domain.feedings import MAX_AMOUNT, MIN_AMOUNT, FeedingRecord
from feeding_tracker.services.time_window import resolve_timezone, start_of_today


class StoreError(RuntimeError):
    """Raised when the record store fails to complete an operation."""


class FeedingRepository(Protocol):
    """Persistence interface for feeding records."""

    def insert(self, owner_id: int, amount: int) -> int:
        """Create a record and return its id."""

    def delete_by_id_and_owner(self, record_id: int, owner_id: int) -> int:
        """Delete the record if the owner matches; return rows removed."""

    def sum_all(self) -> int:
        """Return the sum of all amounts, 0 when empty."""

    def sum_since(self, since: datetime) -> int:
        """Return the sum of amounts created at or after the instant."""

    def list_since(self, since: datetime) -> list[FeedingRecord]:
        """Return records created at or after the instant, oldest first."""

    def ping(self) -> None:
        """Check that the store is reachable."""


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class FeedingService:
    """Service for logging feedings and computing totals in a time zone."""

    repository: FeedingRepository
    timezone_name: str | None = None
    clock: Callable[[], datetime] = field(default=_utcnow)

    def timezone(self) -> ZoneInfo:
        """Return the configured zone (UTC when unset)."""
        return resolve_timezone(self.timezone_name)

    def add(self, owner_id: int, amount: int) -> int:
        """Log a feeding and return the new record id."""
        if not MIN_AMOUNT <= amount <= MAX_AMOUNT:
            raise ValueError(f"amount out of range: {amount}")
        return self.repository.insert(owner_id, amount)

    def delete(self, record_id: int, owner_id: int) -> int:
        """Delete a record owned by the user; other owners' records are kept."""
        return self.repository.delete_by_id_and_owner(record_id, owner_id)

    def total(self) -> int:
        """Return the total amount logged so far."""
        return self.repository.sum_all()

    def today_start(self) -> datetime:
        """Return local midnight of today in the configured zone."""
        return start_of_today(self.timezone_name, now=self.clock())

    def today_total(self) -> int:
        """Return the amount logged since local midnight."""
        return self.repository.sum_since(self.today_start())

    def today_records(self) -> list[FeedingRecord]:
        """Return today's records, oldest first."""
        return self.repository.list_since(self.today_start())
