"""Telegram bot command and keyboard configuration."""

import logging
from dataclasses import dataclass
from enum import Enum

from feeding_tracker.adapters.telegram_client import TelegramClient
from feeding_tracker.domain.feedings import MAX_AMOUNT, MIN_AMOUNT

_logger = logging.getLogger(__name__)

SHOW_TODAY_LABEL = "Show today's food"
KEYBOARD_ROW_SIZE = 5


@dataclass(frozen=True)
class TelegramCommand:
    """Declarative bot command definition."""

    command: str
    description: str


class BotCommand(Enum):
    """Enum of bot commands (single source of truth)."""

    START = TelegramCommand("start", "Greeting and quick-reply keyboard")
    ADD = TelegramCommand("add", "Log food, 1 to 20 grams: /add 5")
    TOTAL = TelegramCommand("total", "Total food logged")
    TODAY = TelegramCommand("today", "Food logged today")
    TODAY_ROW = TelegramCommand("today_row", "All records for today")
    DELETE = TelegramCommand("delete", "Delete your record by ID: /delete 1")
    HELP = TelegramCommand("help", "List available commands")


def telegram_commands() -> list[dict[str, str]]:
    """Return commands formatted for Telegram API."""
    return [
        {"command": entry.value.command, "description": entry.value.description}
        for entry in BotCommand
    ]


def build_reply_keyboard() -> dict[str, object]:
    """Return the quick-reply keyboard: amounts 1..20 in rows of five."""
    amounts = [str(value) for value in range(MIN_AMOUNT, MAX_AMOUNT + 1)]
    rows: list[list[dict[str, str]]] = [
        [{"text": label} for label in amounts[start : start + KEYBOARD_ROW_SIZE]]
        for start in range(0, len(amounts), KEYBOARD_ROW_SIZE)
    ]
    rows.append([{"text": SHOW_TODAY_LABEL}])
    return {"keyboard": rows}


CHAT_MENU_BUTTON: dict[str, object] = {"type": "commands"}


async def sync_bot_commands(telegram_client: TelegramClient) -> None:
    """Publish the command list and menu button; failures are only logged."""
    try:
        await telegram_client.set_my_commands(telegram_commands())
        await telegram_client.set_chat_menu_button(CHAT_MENU_BUTTON)
    except Exception:
        _logger.exception("Failed to sync Telegram bot commands")
