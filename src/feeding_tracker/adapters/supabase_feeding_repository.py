"""Supabase repository for feeding records."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import TypeVar

import httpx
from supabase import Client, PostgrestAPIError

from feeding_tracker.domain.feedings import FeedingRecord
from feeding_tracker.services.feedings import FeedingRepository, StoreError

_TABLE = "feeding_records"
_TOTAL_FUNCTION = "feeding_total"

T = TypeVar("T")


@dataclass
class SupabaseFeedingRepository(FeedingRepository):
    """Supabase implementation for feeding record persistence."""

    client: Client

    def insert(self, owner_id: int, amount: int) -> int:
        """Insert a record and return the id assigned by the database."""
        response = self._run(
            lambda: self.client.table(_TABLE)
            .insert({"owner_id": owner_id, "amount": amount})
            .execute()
        )
        if not response.data:
            raise StoreError("Failed to create feeding record")
        return int(response.data[0]["id"])

    def delete_by_id_and_owner(self, record_id: int, owner_id: int) -> int:
        """Delete a record only when both id and owner match."""
        response = self._run(
            lambda: self.client.table(_TABLE)
            .delete()
            .eq("id", record_id)
            .eq("owner_id", owner_id)
            .execute()
        )
        return len(response.data or [])

    def sum_all(self) -> int:
        """Return the sum of all amounts."""
        return self._total(since=None)

    def sum_since(self, since: datetime) -> int:
        """Return the sum of amounts created at or after the instant."""
        return self._total(since=since.isoformat())

    def list_since(self, since: datetime) -> list[FeedingRecord]:
        """Return records created at or after the instant, oldest first."""
        response = self._run(
            lambda: self.client.table(_TABLE)
            .select("id, owner_id, amount, created_at")
            .gte("created_at", since.isoformat())
            .order("created_at", desc=False)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]

    def ping(self) -> None:
        """Run a trivial query to verify connectivity."""
        self._run(lambda: self.client.table(_TABLE).select("id").limit(1).execute())

    def _total(self, since: str | None) -> int:
        # Summed in SQL; PostgREST caps selected rows at its max-rows setting.
        response = self._run(
            lambda: self.client.rpc(_TOTAL_FUNCTION, {"since": since}).execute()
        )
        return _parse_total(response.data)

    def _run(self, operation: Callable[[], T]) -> T:
        try:
            return operation()
        except (PostgrestAPIError, httpx.HTTPError) as exc:
            raise StoreError(str(exc) or type(exc).__name__) from exc


def _parse_total(data: object) -> int:
    if isinstance(data, list):
        data = data[0] if data else None
    if isinstance(data, dict):
        data = data.get("total")
    return int(data or 0)


def _parse_row(row: dict[str, object]) -> FeedingRecord:
    created_at_raw = row.get("created_at")
    if not isinstance(created_at_raw, str) or not created_at_raw:
        raise StoreError(f"Feeding record {row.get('id')} has no created_at")
    return FeedingRecord(
        id=int(row["id"]),
        owner_id=int(row["owner_id"]),
        amount=int(row["amount"]),
        created_at=datetime.fromisoformat(created_at_raw),
    )
