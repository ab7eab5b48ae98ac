"""Access control for the bot."""

from dataclasses import dataclass

from feeding_tracker.config import parse_allowed_user_ids


@dataclass(frozen=True)
class AccessGate:
    """Immutable set of Telegram users allowed to talk to the bot."""

    allowed_user_ids: frozenset[int]

    @classmethod
    def from_config(cls, raw: str | None) -> "AccessGate":
        """Build the gate from the comma-separated ALLOWED_USERS value."""
        return cls(allowed_user_ids=parse_allowed_user_ids(raw))

    def is_authorized(self, user_id: int) -> bool:
        """Return True when the user is in the allowed set."""
        return user_id in self.allowed_user_ids
