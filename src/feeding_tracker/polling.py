"""Long-polling update loop."""

import asyncio
import logging

import httpx
from pydantic import ValidationError

from feeding_tracker.adapters.telegram_client import TelegramApiError, TelegramClient
from feeding_tracker.api.telegram_models import TelegramUpdate
from feeding_tracker.services.commands import CommandHandler

_logger = logging.getLogger(__name__)

POLL_TIMEOUT_SECONDS = 60
RETRY_DELAY_SECONDS = 3.0


async def poll_once(
    telegram_client: TelegramClient,
    handler: CommandHandler,
    offset: int | None,
    timeout: int = POLL_TIMEOUT_SECONDS,
) -> int | None:
    """Fetch one batch of updates, handle them in order, return the next offset."""
    raw_updates = await telegram_client.get_updates(offset=offset, timeout=timeout)
    for raw in raw_updates:
        update_id = raw.get("update_id")
        if isinstance(update_id, int):
            offset = update_id + 1
        try:
            update = TelegramUpdate.model_validate(raw)
        except ValidationError:
            _logger.warning("Skipping malformed update %s", update_id)
            continue
        try:
            await handler.handle_update(update)
        except (httpx.HTTPError, TelegramApiError):
            _logger.exception(
                "Failed to reply to update", extra={"update_id": update.update_id}
            )
    return offset


async def run_polling(
    telegram_client: TelegramClient,
    handler: CommandHandler,
    retry_delay: float = RETRY_DELAY_SECONDS,
) -> None:
    """Process updates one at a time until cancelled."""
    offset: int | None = None
    while True:
        try:
            offset = await poll_once(telegram_client, handler, offset)
        except (httpx.HTTPError, TelegramApiError):
            _logger.exception("Polling for updates failed")
            await asyncio.sleep(retry_delay)
