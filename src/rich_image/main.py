"""Command-line client for the generation endpoint."""

import argparse
import asyncio
import mimetypes
import sys
from pathlib import Path

from rich_image.adapters.generation_http_client import (
    GenerationClient,
    HttpxGenerationClient,
)
from rich_image.app_logging import configure_logging
from rich_image.client.controller import GenerationController, PhotoFile
from rich_image.client.notifier import LoggingNotifier
from rich_image.config import ClientSettings
from rich_image.domain.scenarios import DEFAULT_SCENARIO, Scenario


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the client."""
    parser = argparse.ArgumentParser(
        prog="rich-image",
        description="Se Eu Fosse Rico: see yourself in a high-status scenario.",
    )
    parser.add_argument("photo", type=Path, help="Path to the photo to upload")
    parser.add_argument(
        "--scenario",
        choices=[scenario.value for scenario in Scenario],
        default=DEFAULT_SCENARIO.value,
    )
    parser.add_argument("--url", help="Generation endpoint URL")
    parser.add_argument("--key", help="Bearer credential for the endpoint")
    return parser


def read_photo(path: Path) -> PhotoFile:
    """Load a photo from disk with a type guessed from its name."""
    content_type, _ = mimetypes.guess_type(path.name)
    return PhotoFile(
        filename=path.name,
        content_type=content_type or "application/octet-stream",
        content=path.read_bytes(),
    )


async def run(args: argparse.Namespace, client: GenerationClient) -> int:
    """Drive one generation and print the resulting URL."""
    controller = GenerationController(client=client, notifier=LoggingNotifier())
    controller.select_photo(read_photo(args.photo))
    controller.select_scenario(args.scenario)
    if await controller.generate():
        print(controller.generated_image_url)
        return 0
    if controller.error_message:
        print(controller.error_message, file=sys.stderr)
    return 1


def main(argv: list[str] | None = None, client: GenerationClient | None = None) -> int:
    """Entry point for the ``rich-image`` command."""
    configure_logging()
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.photo.is_file():
        parser.error(f"photo not found: {args.photo}")

    if client is not None:
        return asyncio.run(run(args, client))

    settings = ClientSettings()
    function_url = args.url or settings.function_url
    anon_key = args.key or settings.anon_key
    if not function_url or not anon_key:
        parser.error("set --url/--key or RICH_IMAGE_FUNCTION_URL/RICH_IMAGE_ANON_KEY")

    async def _run_with_http_client() -> int:
        http_client = HttpxGenerationClient.create(function_url, anon_key)
        try:
            return await run(args, http_client)
        finally:
            await http_client.close()

    return asyncio.run(_run_with_http_client())


if __name__ == "__main__":
    sys.exit(main())
