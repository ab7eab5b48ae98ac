"""Command-line entrypoint running the bot with long polling."""

import asyncio
import logging

import httpx

from feeding_tracker.adapters.telegram_client import TelegramApiError
from feeding_tracker.app_logging import configure_logging
from feeding_tracker.config import ConfigurationError, load_settings
from feeding_tracker.containers import AppContainer, build_container
from feeding_tracker.polling import run_polling
from feeding_tracker.services.feedings import StoreError
from feeding_tracker.telegram_commands import sync_bot_commands

_logger = logging.getLogger(__name__)


def main() -> int:
    """Start the bot; return a non-zero exit status on startup failure."""
    configure_logging()
    try:
        settings = load_settings()
    except ConfigurationError as exc:
        _logger.error("%s", exc)
        return 1
    try:
        container = build_container(settings)
    except Exception:
        _logger.exception("Failed to initialise the database client")
        return 1
    try:
        return asyncio.run(serve(container))
    except KeyboardInterrupt:
        _logger.info("Bot stopped")
        return 0


async def serve(container: AppContainer) -> int:
    """Verify connectivity, then process updates until cancelled."""
    try:
        try:
            container.feeding_service.repository.ping()
        except StoreError:
            _logger.exception("Database is unreachable")
            return 1
        try:
            me = await container.telegram_client.get_me()
        except (httpx.HTTPError, TelegramApiError):
            _logger.exception("Failed to connect to Telegram")
            return 1
        _logger.info("Bot started: %s", me.get("username"))
        await sync_bot_commands(container.telegram_client)
        await run_polling(container.telegram_client, container.command_handler)
    finally:
        await container.close_resources()
    return 0
