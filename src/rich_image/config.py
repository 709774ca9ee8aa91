"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

DEFAULT_CORS_ALLOW_HEADERS = "authorization, x-client-info, apikey, content-type"


class ConfigurationError(RuntimeError):
    """Raised at startup when required configuration is missing."""


class Settings(BaseSettings):
    """Server settings loaded from environment variables."""

    supabase_url: str | None = None
    supabase_service_key: str | None = None
    storage_bucket: str = "rich-images"
    storage_prefix: str = "rich"
    storage_enabled: bool = True
    image_provider: str = "gemini"
    gemini_api_key: str | None = None
    gemini_model: str = "gemini-2.5-flash-image"
    openai_api_key: str | None = None
    openai_image_model: str = "gpt-image-1"
    placeholder_fallback: bool = True
    cors_allow_headers: str = DEFAULT_CORS_ALLOW_HEADERS
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    def provider_api_key(self) -> str | None:
        """Return the credential for the configured image provider, if any."""
        if self.image_provider == "gemini":
            return _clean(self.gemini_api_key)
        if self.image_provider == "openai":
            return _clean(self.openai_api_key)
        raise ConfigurationError(f"Unknown image provider: {self.image_provider}")


class ClientSettings(BaseSettings):
    """Settings for the command-line client."""

    function_url: str | None = None
    anon_key: str | None = None

    model_config = SettingsConfigDict(
        env_prefix="RICH_IMAGE_",
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def cors_headers(raw_allow_headers: str) -> dict[str, str]:
    """Build the permissive CORS headers attached to every response."""
    allowed = ", ".join(
        chunk.strip() for chunk in raw_allow_headers.split(",") if chunk.strip()
    )
    return {
        "Access-Control-Allow-Origin": "*",
        "Access-Control-Allow-Headers": allowed or DEFAULT_CORS_ALLOW_HEADERS,
    }


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    cleaned = value.strip()
    return cleaned or None
