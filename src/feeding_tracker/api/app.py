"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request

from feeding_tracker.adapters.telegram_client import TelegramApiError
from feeding_tracker.api.telegram_models import TelegramUpdate
from feeding_tracker.app_logging import configure_logging
from feeding_tracker.containers import AppContainer
from feeding_tracker.telegram_commands import sync_bot_commands


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app that receives Telegram updates by webhook."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        state_container: AppContainer = app.state.container
        state_container.feeding_service.repository.ping()
        await sync_bot_commands(state_container.telegram_client)
        yield
        await state_container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/telegram/webhook")
    async def telegram_webhook(
        update: TelegramUpdate, request: Request
    ) -> dict[str, str]:
        """Handle a Telegram webhook update."""
        state_container: AppContainer = request.app.state.container
        try:
            await state_container.command_handler.handle_update(update)
        except (httpx.HTTPError, TelegramApiError):
            # Always acknowledged: a non-2xx answer makes Telegram redeliver.
            logger.exception(
                "Failed to reply to update", extra={"update_id": update.update_id}
            )
        return {"status": "ok"}

    return app
