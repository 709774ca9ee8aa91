"""Google Gemini client for scenario image transformation."""

import base64
from collections.abc import Iterator
from dataclasses import dataclass

from google import genai
from google.genai import types

from rich_image.services.generation import ImageTransformer


@dataclass
class GeminiImageClient(ImageTransformer):
    """Image transformer backed by Gemini image generation."""

    client: genai.Client
    model: str

    @classmethod
    def create(cls, api_key: str, model: str) -> "GeminiImageClient":
        """Create a Gemini image client."""
        return cls(client=genai.Client(api_key=api_key), model=model)

    async def transform(
        self, image_bytes: bytes, mime_type: str, prompt: str
    ) -> bytes | None:
        """Send the photo and prompt and return the first inline image."""
        response = await self.client.aio.models.generate_content(
            model=self.model,
            contents=[
                types.Part.from_bytes(data=image_bytes, mime_type=mime_type),
                prompt,
            ],
            config=types.GenerateContentConfig(response_modalities=["IMAGE"]),
        )
        for part in _iter_response_parts(response):
            inline_data = getattr(part, "inline_data", None)
            data = getattr(inline_data, "data", None) if inline_data else None
            if not data:
                continue
            if isinstance(data, str):
                return base64.b64decode(data)
            return bytes(data)
        return None


def _iter_response_parts(response: object) -> Iterator[object]:
    """Yield content parts across all response candidates."""
    for candidate in getattr(response, "candidates", None) or []:
        content = getattr(candidate, "content", None)
        yield from getattr(content, "parts", None) or []
