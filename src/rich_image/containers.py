"""Dependency container wiring for the application."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from rich_image.adapters.gemini_image_client import GeminiImageClient
from rich_image.adapters.openai_image_client import OpenAIImageClient
from rich_image.adapters.supabase_image_storage import SupabaseImageStorage
from rich_image.config import ConfigurationError, Settings
from rich_image.services.generation import (
    GenerationService,
    ImageStorage,
    ImageTransformer,
)

logger = logging.getLogger(__name__)


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    generation_service: GenerationService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    transformer = _build_transformer(resolved_settings)
    # Placeholder mode never writes to the bucket.
    storage = None if transformer is None else _build_storage(resolved_settings)
    generation_service = GenerationService(
        transformer=transformer,
        storage=storage,
        object_prefix=resolved_settings.storage_prefix,
    )

    async def close_resources() -> None:
        if isinstance(transformer, OpenAIImageClient):
            await transformer.close()

    return AppContainer(
        settings=resolved_settings,
        generation_service=generation_service,
        close_resources=close_resources,
    )


def _build_transformer(settings: Settings) -> ImageTransformer | None:
    api_key = settings.provider_api_key()
    if api_key is None:
        if not settings.placeholder_fallback:
            raise ConfigurationError(
                f"Missing API key for image provider '{settings.image_provider}'"
            )
        logger.warning(
            "No API key for image provider; serving placeholder images",
            extra={"provider": settings.image_provider},
        )
        return None
    if settings.image_provider == "openai":
        return OpenAIImageClient.create(
            api_key=api_key, model=settings.openai_image_model
        )
    return GeminiImageClient.create(api_key=api_key, model=settings.gemini_model)


def _build_storage(settings: Settings) -> ImageStorage | None:
    if not settings.storage_enabled:
        return None
    if not settings.supabase_url or not settings.supabase_service_key:
        raise ConfigurationError(
            "SUPABASE_URL and SUPABASE_SERVICE_KEY are required "
            "when storage is enabled"
        )
    supabase_client = create_client(
        settings.supabase_url, settings.supabase_service_key
    )
    return SupabaseImageStorage(client=supabase_client, bucket=settings.storage_bucket)
