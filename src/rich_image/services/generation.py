"""Generation service that turns a photo and scenario into an image URL."""

import base64
import binascii
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Protocol

from rich_image.domain.errors import InvalidRequestError, ProviderError, StorageError
from rich_image.domain.generation import GenerationResult
from rich_image.domain.scenarios import (
    UnknownScenarioError,
    build_prompt,
    resolve_scenario,
)

logger = logging.getLogger(__name__)

PLACEHOLDER_URL_TEMPLATE = "https://picsum.photos/seed/{prefix}-{stamp}/800/600"

_EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
}


class ImageTransformer(Protocol):
    """Interface for the external generative-image provider."""

    async def transform(
        self, image_bytes: bytes, mime_type: str, prompt: str
    ) -> bytes | None:
        """Return transformed image bytes, or None when no image was produced."""


class ImageStorage(Protocol):
    """Interface for the bucket generated images are written to."""

    def upload(self, name: str, content: bytes, content_type: str) -> None:
        """Upload bytes under ``name`` without overwriting existing objects."""

    def public_url(self, name: str) -> str:
        """Return the public URL of a stored object."""


def _now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class GenerationService:
    """Validates requests, calls the provider and persists the result.

    ``transformer`` is None when the provider credential was not configured;
    requests are then answered with a placeholder image. ``storage`` is None
    when persistence is disabled and the image is returned inline.
    """

    transformer: ImageTransformer | None
    storage: ImageStorage | None
    object_prefix: str = "rich"
    clock: Callable[[], datetime] = field(default=_now)

    @property
    def placeholder_mode(self) -> bool:
        """Return true when requests are served with placeholder images."""
        return self.transformer is None

    async def generate(
        self, image_b64: str | None, scenario_key: str | None
    ) -> GenerationResult:
        """Generate a scenario image for a base64-encoded photo."""
        if not image_b64 or not image_b64.strip():
            raise InvalidRequestError("Missing image data")
        try:
            scenario = resolve_scenario(scenario_key)
        except UnknownScenarioError as exc:
            raise InvalidRequestError(str(exc)) from exc

        if self.transformer is None:
            return GenerationResult(
                status="ok",
                message="Image provider not configured; returning a placeholder",
                image_url=self._placeholder_url(),
            )

        image_bytes = _decode_base64(image_b64)
        mime_type = _detect_mime_type(image_bytes)
        output = await self.transformer.transform(
            image_bytes, mime_type, build_prompt(scenario)
        )
        if not output:
            logger.warning(
                "Image provider returned no image",
                extra={"scenario": scenario.value},
            )
            raise ProviderError("Image generation failed")

        output_type = _detect_mime_type(output)
        if self.storage is None:
            image_url = _to_data_url(output, output_type)
        else:
            image_url = self._store(output, output_type)
        return GenerationResult(
            status="success",
            message="Image generated successfully",
            image_url=image_url,
        )

    def _store(self, content: bytes, content_type: str) -> str:
        name = self.object_name(content_type)
        try:
            self.storage.upload(name, content, content_type)
        except Exception as exc:
            logger.exception(
                "Failed to upload generated image", extra={"object_name": name}
            )
            raise StorageError(f"Failed to store generated image: {exc}") from exc
        logger.info("Stored generated image", extra={"object_name": name})
        return self.storage.public_url(name)

    def object_name(self, content_type: str) -> str:
        """Build a time-based object name for a generated image."""
        extension = _EXTENSIONS.get(content_type, "jpg")
        return f"{self.object_prefix}-{self._stamp()}.{extension}"

    def _placeholder_url(self) -> str:
        return PLACEHOLDER_URL_TEMPLATE.format(
            prefix=self.object_prefix, stamp=self._stamp()
        )

    def _stamp(self) -> int:
        return int(self.clock().timestamp() * 1000)


def _decode_base64(value: str) -> bytes:
    """Decode a base64 payload, tolerating a leading data-URL prefix."""
    payload = value.strip()
    if payload.startswith("data:") and "," in payload:
        payload = payload.split(",", maxsplit=1)[1]
    try:
        decoded = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise InvalidRequestError("Invalid image encoding") from exc
    if not decoded:
        raise InvalidRequestError("Missing image data")
    return decoded


def _to_data_url(image_bytes: bytes, mime_type: str) -> str:
    """Convert bytes to a base64 data URL."""
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"


def _detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    return "image/jpeg"
