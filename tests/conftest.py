"""Shared test fixtures."""

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import UTC, datetime

import pytest

from feeding_tracker.adapters.telegram_client import TelegramClient
from feeding_tracker.config import Settings
from feeding_tracker.containers import AppContainer
from feeding_tracker.domain.feedings import FeedingRecord
from feeding_tracker.services.access import AccessGate
from feeding_tracker.services.commands import CommandHandler
from feeding_tracker.services.feedings import (
    FeedingRepository,
    FeedingService,
    StoreError,
)

ALLOWED_USER_ID = 123
OTHER_ALLOWED_USER_ID = 456
STRANGER_USER_ID = 999
CHAT_ID = 99
FIXED_NOW = datetime(2024, 5, 10, 12, 0, tzinfo=UTC)


@dataclass
class InMemoryFeedingRepository(FeedingRepository):
    """In-memory feeding repository for tests."""

    records: list[FeedingRecord] = field(default_factory=list)
    calls: int = 0
    fail: bool = False
    now: datetime = FIXED_NOW

    def add_record(
        self, owner_id: int, amount: int, created_at: datetime
    ) -> FeedingRecord:
        record = FeedingRecord(
            id=len(self.records) + 1,
            owner_id=owner_id,
            amount=amount,
            created_at=created_at,
        )
        self.records.append(record)
        return record

    def insert(self, owner_id: int, amount: int) -> int:
        self._track()
        return self.add_record(owner_id, amount, self.now).id

    def delete_by_id_and_owner(self, record_id: int, owner_id: int) -> int:
        self._track()
        kept = [
            record
            for record in self.records
            if not (record.id == record_id and record.owner_id == owner_id)
        ]
        removed = len(self.records) - len(kept)
        self.records = kept
        return removed

    def sum_all(self) -> int:
        self._track()
        return sum(record.amount for record in self.records)

    def sum_since(self, since: datetime) -> int:
        self._track()
        return sum(
            record.amount for record in self.records if record.created_at >= since
        )

    def list_since(self, since: datetime) -> list[FeedingRecord]:
        self._track()
        return sorted(
            (record for record in self.records if record.created_at >= since),
            key=lambda record: record.created_at,
        )

    def ping(self) -> None:
        self._track()

    def _track(self) -> None:
        self.calls += 1
        if self.fail:
            raise StoreError("connection refused")


@dataclass
class FakeTelegramClient(TelegramClient):
    """Fake Telegram client that records messages."""

    messages: list[tuple[int, str]] = field(default_factory=list)
    markups: list[dict | None] = field(default_factory=list)
    updates: list[list[dict[str, object]]] = field(default_factory=list)
    offsets: list[int | None] = field(default_factory=list)
    commands: list[dict[str, str]] | None = None
    menu_button: dict[str, object] | None = None

    async def send_message(
        self, chat_id: int, text: str, reply_markup: dict | None = None
    ) -> None:
        self.messages.append((chat_id, text))
        self.markups.append(reply_markup)

    async def get_updates(
        self, offset: int | None = None, timeout: int = 60
    ) -> list[dict[str, object]]:
        self.offsets.append(offset)
        return self.updates.pop(0) if self.updates else []

    async def get_me(self) -> dict[str, object]:
        return {"id": 1, "is_bot": True, "username": "feeding_test_bot"}

    async def set_my_commands(self, commands: list[dict[str, str]]) -> None:
        self.commands = commands

    async def set_chat_menu_button(
        self, menu_button: dict[str, object] | None = None
    ) -> None:
        self.menu_button = menu_button


def message_payload(
    text: str | None,
    user_id: int = ALLOWED_USER_ID,
    chat_id: int = CHAT_ID,
    update_id: int = 1,
) -> dict[str, object]:
    """Build a Telegram update payload; slash-prefixed text gets a command entity."""
    message: dict[str, object] = {
        "message_id": update_id * 10,
        "date": 1700000000,
        "chat": {"id": chat_id, "type": "private"},
        "from": {"id": user_id, "is_bot": False, "first_name": "Test"},
    }
    if text is not None:
        message["text"] = text
        if text.startswith("/"):
            command_length = len(text.split(" ", maxsplit=1)[0])
            message["entities"] = [
                {"type": "bot_command", "offset": 0, "length": command_length}
            ]
    return {"update_id": update_id, "message": message}


@pytest.fixture
def settings() -> Settings:
    return Settings(
        bot_token="test-token",
        allowed_users=f"{ALLOWED_USER_ID},{OTHER_ALLOWED_USER_ID}",
        database_url="https://example.supabase.co",
        database_service_key="header.payload.signature",
    )


@pytest.fixture
def repository() -> InMemoryFeedingRepository:
    return InMemoryFeedingRepository()


@pytest.fixture
def telegram_client() -> FakeTelegramClient:
    return FakeTelegramClient()


@pytest.fixture
def feeding_service(repository: InMemoryFeedingRepository) -> FeedingService:
    return FeedingService(repository=repository, clock=lambda: FIXED_NOW)


@pytest.fixture
def command_handler(
    feeding_service: FeedingService, telegram_client: FakeTelegramClient
) -> CommandHandler:
    return CommandHandler(
        access_gate=AccessGate(frozenset({ALLOWED_USER_ID, OTHER_ALLOWED_USER_ID})),
        feeding_service=feeding_service,
        telegram_client=telegram_client,
    )


@pytest.fixture
def container(
    settings: Settings,
    telegram_client: FakeTelegramClient,
    feeding_service: FeedingService,
    command_handler: CommandHandler,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        telegram_client=telegram_client,
        access_gate=command_handler.access_gate,
        feeding_service=feeding_service,
        command_handler=command_handler,
        close_resources=close_resources,
    )


@pytest.fixture(autouse=True)
def _propagate_app_logs() -> Iterator[None]:
    """Let caplog see application logs even after configure_logging ran."""
    logger = logging.getLogger("feeding_tracker")
    logger.handlers.clear()
    logger.propagate = True
    yield
    logger.handlers.clear()
    logger.propagate = True
