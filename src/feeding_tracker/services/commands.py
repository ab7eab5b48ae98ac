"""Command handling for Telegram updates."""

import logging
from dataclasses import dataclass, field
from zoneinfo import ZoneInfo

from feeding_tracker.adapters.telegram_client import TelegramClient
from feeding_tracker.api.telegram_models import TelegramMessage, TelegramUpdate
from feeding_tracker.config import ConfigurationError
from feeding_tracker.domain.feedings import (
    FeedingRecord,
    ValidationError,
    parse_amount,
    parse_record_id,
)
from feeding_tracker.services.access import AccessGate
from feeding_tracker.services.feedings import FeedingService, StoreError
from feeding_tracker.telegram_commands import SHOW_TODAY_LABEL, build_reply_keyboard

_logger = logging.getLogger(__name__)

ACCESS_DENIED_TEXT = "You don't have access to this bot."
GREETING_TEXT = "Hi! Use /help to see the available commands."
UNKNOWN_COMMAND_TEXT = "Unknown command. Use /help for the list of commands."
ADD_USAGE_TEXT = "Please provide a number from 1 to 20. Example: /add 5"
DELETE_USAGE_TEXT = "Please provide a valid record ID to delete. Example: /delete 1"
PLAIN_TEXT_USAGE_TEXT = (
    "Please pick a number from 1 to 20 or use the button to view today's food."
)
NO_RECORDS_TODAY_TEXT = "No records today."
TODAY_RECORDS_HEADER = "Today's records:"
ADD_FAILED_TEXT = "Error adding data."
FETCH_FAILED_TEXT = "Error fetching data."
TODAY_RECORDS_FAILED_TEXT = "Error fetching today's records."
DELETE_FAILED_TEXT = "Error deleting the record. Make sure the ID is correct."
OWN_RECORD_MARK = " (you)"
HELP_TEXT = "\n".join(
    [
        "Available commands:",
        "- /add <amount>: Log food (a number from 1 to 20). Example: /add 5",
        "- /total: Show the total amount of food.",
        "- /today: Show the amount of food logged today.",
        "- /today_row: Show all records for today.",
        "- /delete <id>: Delete a record by ID. Example: /delete 1",
        "- /help: Show this message.",
        "You can also use the keyboard buttons.",
    ]
)


def format_record_line(record: FeedingRecord, requester_id: int, tz: ZoneInfo) -> str:
    """Format one record for the today listing."""
    mark = OWN_RECORD_MARK if record.owner_id == requester_id else ""
    local_time = record.created_at.astimezone(tz).strftime("%H:%M")
    return f"ID: {record.id}, Корм: {record.amount}, Время: {local_time}{mark}"


@dataclass
class CommandHandler:
    """Map inbound Telegram messages to feeding operations and replies.

    Every message is handled on its own: the only state shared between
    messages is the record store and the immutable access gate.
    """

    access_gate: AccessGate
    feeding_service: FeedingService
    telegram_client: TelegramClient
    keyboard: dict[str, object] = field(default_factory=build_reply_keyboard)

    async def handle_update(self, update: TelegramUpdate) -> None:
        """Handle one update; updates without a message are ignored."""
        message = update.message
        if message is None or message.from_user is None:
            return
        await self.handle_message(message)

    async def handle_message(self, message: TelegramMessage) -> None:
        """Authorize the sender, then dispatch a command or plain text."""
        chat_id = message.chat.id
        user_id = message.from_user.id if message.from_user else None
        if user_id is None or not self.access_gate.is_authorized(user_id):
            _logger.info("Rejected message from unauthorized user %s", user_id)
            await self._reply(chat_id, ACCESS_DENIED_TEXT)
            return

        if message.is_command():
            await self._handle_command(
                chat_id, user_id, message.command(), message.command_arguments()
            )
        else:
            await self._handle_text(chat_id, user_id, message.text or "")

    async def _handle_command(  # noqa: PLR0911
        self, chat_id: int, user_id: int, command: str, arguments: str
    ) -> None:
        if command == "start":
            await self._reply(chat_id, GREETING_TEXT, keyboard=True)
            return
        if command == "add":
            try:
                amount = parse_amount(arguments)
            except ValidationError:
                await self._reply(chat_id, ADD_USAGE_TEXT)
                return
            await self._add(chat_id, user_id, amount, keyboard=False)
            return
        if command == "total":
            await self._total(chat_id)
            return
        if command == "today":
            await self._today(chat_id)
            return
        if command == "today_row":
            await self._today_records(chat_id, user_id)
            return
        if command == "delete":
            try:
                record_id = parse_record_id(arguments)
            except ValidationError:
                await self._reply(chat_id, DELETE_USAGE_TEXT)
                return
            await self._delete(chat_id, user_id, record_id)
            return
        if command == "help":
            await self._reply(chat_id, HELP_TEXT)
            return
        await self._reply(chat_id, UNKNOWN_COMMAND_TEXT)

    async def _handle_text(self, chat_id: int, user_id: int, text: str) -> None:
        if text == SHOW_TODAY_LABEL:
            await self._today(chat_id)
            return
        try:
            amount = parse_amount(text)
        except ValidationError:
            await self._reply(chat_id, PLAIN_TEXT_USAGE_TEXT, keyboard=True)
            return
        await self._add(chat_id, user_id, amount, keyboard=True)

    async def _add(
        self, chat_id: int, user_id: int, amount: int, *, keyboard: bool
    ) -> None:
        try:
            record_id = self.feeding_service.add(user_id, amount)
        except StoreError:
            _logger.exception(
                "Failed to add feeding record",
                extra={"user_id": user_id, "amount": amount},
            )
            await self._reply(chat_id, ADD_FAILED_TEXT)
            return
        _logger.info("User %s added record %s (%sg)", user_id, record_id, amount)
        await self._reply(chat_id, f"Added {amount}g of food.", keyboard=keyboard)

    async def _total(self, chat_id: int) -> None:
        try:
            total = self.feeding_service.total()
        except StoreError:
            _logger.exception("Failed to fetch total")
            await self._reply(chat_id, FETCH_FAILED_TEXT)
            return
        await self._reply(chat_id, f"Total food added: {total}g.")

    async def _today(self, chat_id: int) -> None:
        try:
            total = self.feeding_service.today_total()
        except (StoreError, ConfigurationError):
            _logger.exception("Failed to fetch today's total")
            await self._reply(chat_id, FETCH_FAILED_TEXT)
            return
        if total == 0:
            await self._reply(chat_id, NO_RECORDS_TODAY_TEXT)
            return
        await self._reply(chat_id, f"Added today: {total}g.")

    async def _today_records(self, chat_id: int, user_id: int) -> None:
        try:
            tz = self.feeding_service.timezone()
            records = self.feeding_service.today_records()
        except (StoreError, ConfigurationError):
            _logger.exception("Failed to fetch today's records")
            await self._reply(chat_id, TODAY_RECORDS_FAILED_TEXT)
            return
        if not records:
            await self._reply(chat_id, NO_RECORDS_TODAY_TEXT)
            return
        lines = [TODAY_RECORDS_HEADER]
        lines.extend(format_record_line(record, user_id, tz) for record in records)
        await self._reply(chat_id, "\n".join(lines))

    async def _delete(self, chat_id: int, user_id: int, record_id: int) -> None:
        try:
            removed = self.feeding_service.delete(record_id, user_id)
        except StoreError:
            _logger.exception(
                "Failed to delete feeding record",
                extra={"user_id": user_id, "record_id": record_id},
            )
            await self._reply(chat_id, DELETE_FAILED_TEXT)
            return
        if not removed:
            _logger.info(
                "Delete of record %s by user %s matched no rows", record_id, user_id
            )
        # Confirmed even when nothing matched; existence is not revealed.
        await self._reply(chat_id, f"Record {record_id} deleted.")

    async def _reply(self, chat_id: int, text: str, *, keyboard: bool = False) -> None:
        await self.telegram_client.send_message(
            chat_id=chat_id,
            text=text,
            reply_markup=self.keyboard if keyboard else None,
        )
