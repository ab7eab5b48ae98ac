"""Day boundary calculations in a configured time zone."""

from datetime import UTC, datetime
from zoneinfo import ZoneInfo

from feeding_tracker.config import ConfigurationError, is_valid_timezone

DEFAULT_TIMEZONE = "UTC"


def resolve_timezone(timezone_name: str | None) -> ZoneInfo:
    """Return the zone for a name, falling back to UTC when unset."""
    name = (timezone_name or "").strip() or DEFAULT_TIMEZONE
    if not is_valid_timezone(name):
        raise ConfigurationError(f"Unknown time zone: {name}")
    return ZoneInfo(name)


def start_of_today(timezone_name: str | None, now: datetime | None = None) -> datetime:
    """Return local midnight of the current day in the zone, as a UTC instant.

    The result is an inclusive lower bound for "today" queries.
    """
    tz = resolve_timezone(timezone_name)
    current = (now or datetime.now(tz=UTC)).astimezone(tz)
    midnight = datetime(current.year, current.month, current.day, tzinfo=tz)
    return midnight.astimezone(UTC)
