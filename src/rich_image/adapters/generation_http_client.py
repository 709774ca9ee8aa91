"""HTTP client for the generation endpoint."""

from dataclasses import dataclass
from typing import Protocol

import httpx


class GenerationClient(Protocol):
    """Interface for posting generation requests."""

    async def post_generation(self, image: str, scenario: str) -> httpx.Response:
        """Post a generation request and return the raw response."""


@dataclass
class HttpxGenerationClient(GenerationClient):
    """Generation client implemented with httpx."""

    function_url: str
    anon_key: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, function_url: str, anon_key: str) -> "HttpxGenerationClient":
        """Create a generation client with a managed httpx session."""
        return cls(
            function_url=function_url,
            anon_key=anon_key,
            http_client=httpx.AsyncClient(),
        )

    async def post_generation(self, image: str, scenario: str) -> httpx.Response:
        """Send the photo and scenario with the bearer credential."""
        return await self.http_client.post(
            self.function_url,
            json={"image": image, "scenario": scenario},
            headers={"Authorization": f"Bearer {self.anon_key}"},
            timeout=None,
        )

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
