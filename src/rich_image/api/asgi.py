"""ASGI entrypoint for the generation endpoint."""

from rich_image.api.app import create_app
from rich_image.containers import build_container

app = create_app(build_container())
