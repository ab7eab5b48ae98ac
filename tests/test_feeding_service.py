"""Tests for the feeding service."""

from datetime import UTC, datetime, timedelta

import pytest

from feeding_tracker.services.feedings import FeedingService
from tests.conftest import InMemoryFeedingRepository

NOW = datetime(2024, 5, 10, 23, 45, tzinfo=UTC)


def _service(repo: InMemoryFeedingRepository, timezone_name: str | None = None):
    return FeedingService(
        repository=repo, timezone_name=timezone_name, clock=lambda: NOW
    )


def test_empty_store_sums_to_zero() -> None:
    service = _service(InMemoryFeedingRepository())

    assert service.total() == 0
    assert service.today_total() == 0
    assert service.today_records() == []


@pytest.mark.parametrize("amount", range(1, 21))
def test_add_increases_total_by_amount(amount: int) -> None:
    repo = InMemoryFeedingRepository(now=NOW)
    service = _service(repo)
    service.add(7, 3)
    before = service.total()

    service.add(7, amount)

    assert service.total() == before + amount


@pytest.mark.parametrize("amount", [0, 21, -1, 100])
def test_add_rejects_out_of_range(amount: int) -> None:
    repo = InMemoryFeedingRepository()
    service = _service(repo)

    with pytest.raises(ValueError):
        service.add(7, amount)
    assert repo.records == []


def test_today_excludes_yesterday() -> None:
    repo = InMemoryFeedingRepository()
    repo.add_record(1, 5, NOW - timedelta(days=1))
    repo.add_record(1, 4, NOW - timedelta(hours=1))
    service = _service(repo)

    assert service.total() == 9
    assert service.today_total() == 4
    assert [record.amount for record in service.today_records()] == [4]


def test_timezone_changes_which_records_are_today() -> None:
    repo = InMemoryFeedingRepository()
    late_utc = datetime(2024, 5, 10, 23, 30, tzinfo=UTC)
    early_utc = datetime(2024, 5, 10, 10, 0, tzinfo=UTC)
    repo.add_record(1, 6, early_utc)
    repo.add_record(1, 2, late_utc)

    assert _service(repo, "UTC").today_total() == 8
    # In Tokyo it is already May 11 (08:45), so only the 23:30 UTC record counts.
    assert _service(repo, "Asia/Tokyo").today_total() == 2


def test_today_records_are_oldest_first() -> None:
    repo = InMemoryFeedingRepository()
    repo.add_record(1, 3, NOW - timedelta(minutes=5))
    repo.add_record(2, 8, NOW - timedelta(hours=2))
    service = _service(repo)

    records = service.today_records()

    assert [record.amount for record in records] == [8, 3]


def test_delete_is_scoped_to_owner() -> None:
    repo = InMemoryFeedingRepository()
    mine = repo.add_record(1, 3, NOW)
    theirs = repo.add_record(2, 5, NOW)
    service = _service(repo)

    assert service.delete(theirs.id, owner_id=1) == 0
    assert service.delete(mine.id, owner_id=1) == 1
    assert [record.id for record in repo.records] == [theirs.id]


def test_timezone_defaults_to_utc() -> None:
    assert _service(InMemoryFeedingRepository()).timezone().key == "UTC"
