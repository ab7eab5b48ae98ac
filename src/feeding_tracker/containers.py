"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from feeding_tracker.adapters.supabase_feeding_repository import (
    SupabaseFeedingRepository,
)
from feeding_tracker.adapters.telegram_client import (
    HttpxTelegramClient,
    TelegramClient,
)
from feeding_tracker.config import Settings, load_settings
from feeding_tracker.services.access import AccessGate
from feeding_tracker.services.commands import CommandHandler
from feeding_tracker.services.feedings import FeedingService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    telegram_client: TelegramClient
    access_gate: AccessGate
    feeding_service: FeedingService
    command_handler: CommandHandler
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or load_settings()
    supabase_client = create_client(
        resolved_settings.database_url, resolved_settings.database_service_key
    )
    feeding_service = FeedingService(
        repository=SupabaseFeedingRepository(supabase_client),
        timezone_name=resolved_settings.timezone,
    )
    access_gate = AccessGate.from_config(resolved_settings.allowed_users)
    telegram_client = HttpxTelegramClient.create(resolved_settings.bot_token)
    command_handler = CommandHandler(
        access_gate=access_gate,
        feeding_service=feeding_service,
        telegram_client=telegram_client,
    )

    async def close_resources() -> None:
        await telegram_client.close()

    return AppContainer(
        settings=resolved_settings,
        telegram_client=telegram_client,
        access_gate=access_gate,
        feeding_service=feeding_service,
        command_handler=command_handler,
        close_resources=close_resources,
    )
