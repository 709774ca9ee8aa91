"""OpenAI Images API client for scenario image transformation."""

import base64
from dataclasses import dataclass

from openai import AsyncOpenAI

from rich_image.services.generation import ImageTransformer

_FILENAMES = {
    "image/png": "photo.png",
    "image/webp": "photo.webp",
}


@dataclass
class OpenAIImageClient(ImageTransformer):
    """Image transformer backed by the OpenAI image edit endpoint."""

    client: AsyncOpenAI
    model: str

    @classmethod
    def create(cls, api_key: str, model: str) -> "OpenAIImageClient":
        """Create an OpenAI image client."""
        return cls(client=AsyncOpenAI(api_key=api_key), model=model)

    async def transform(
        self, image_bytes: bytes, mime_type: str, prompt: str
    ) -> bytes | None:
        """Edit the photo with the prompt and return the first result."""
        filename = _FILENAMES.get(mime_type, "photo.jpg")
        response = await self.client.images.edit(
            model=self.model,
            image=(filename, image_bytes, mime_type),
            prompt=prompt,
        )
        if not response.data:
            return None
        encoded = response.data[0].b64_json
        if not encoded:
            return None
        return base64.b64decode(encoded)

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.client.close()
