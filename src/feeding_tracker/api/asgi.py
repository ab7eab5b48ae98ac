"""ASGI entrypoint for the feeding tracker webhook."""

from feeding_tracker.api.app import create_app
from feeding_tracker.containers import build_container

app = create_app(build_container())
