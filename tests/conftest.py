"""Shared test fixtures."""

import base64
from dataclasses import dataclass, field
from datetime import UTC, datetime

import httpx
import pytest

from rich_image.adapters.generation_http_client import GenerationClient
from rich_image.client.notifier import Notifier
from rich_image.config import Settings
from rich_image.containers import AppContainer
from rich_image.services.generation import (
    GenerationService,
    ImageStorage,
    ImageTransformer,
)

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"generated-image"
JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"uploaded-photo"
FIXED_NOW = datetime(2025, 1, 2, 3, 4, 5, tzinfo=UTC)
FIXED_MILLIS = int(FIXED_NOW.timestamp() * 1000)


def encoded(data: bytes) -> str:
    return base64.b64encode(data).decode("utf-8")


@dataclass
class FakeImageTransformer(ImageTransformer):
    """Fake provider returning fixed bytes and recording calls."""

    output: bytes | None = PNG_BYTES
    error: Exception | None = None
    calls: list[tuple[bytes, str, str]] = field(default_factory=list)

    async def transform(
        self, image_bytes: bytes, mime_type: str, prompt: str
    ) -> bytes | None:
        self.calls.append((image_bytes, mime_type, prompt))
        if self.error is not None:
            raise self.error
        return self.output


@dataclass
class InMemoryImageStorage(ImageStorage):
    """In-memory bucket for tests."""

    objects: dict[str, tuple[bytes, str]] = field(default_factory=dict)
    error: Exception | None = None
    base_url: str = "https://storage.test/rich-images"

    def upload(self, name: str, content: bytes, content_type: str) -> None:
        if self.error is not None:
            raise self.error
        if name in self.objects:
            raise RuntimeError("The resource already exists")
        self.objects[name] = (content, content_type)

    def public_url(self, name: str) -> str:
        return f"{self.base_url}/{name}"

    def object_for_url(self, url: str) -> bytes:
        name = url.removeprefix(f"{self.base_url}/")
        return self.objects[name][0]


@dataclass
class FakeNotifier(Notifier):
    """Notifier that records every notification."""

    errors: list[str] = field(default_factory=list)
    successes: list[str] = field(default_factory=list)
    loading: dict[int, str] = field(default_factory=dict)
    dismissed: list[int] = field(default_factory=list)

    def show_error(self, message: str) -> None:
        self.errors.append(message)

    def show_success(self, message: str) -> None:
        self.successes.append(message)

    def show_loading(self, message: str) -> int:
        notification_id = len(self.loading) + 1
        self.loading[notification_id] = message
        return notification_id

    def dismiss(self, notification_id: int) -> None:
        self.dismissed.append(notification_id)


@dataclass
class FakeGenerationClient(GenerationClient):
    """Generation client returning a canned response."""

    response: httpx.Response | None = None
    error: Exception | None = None
    requests: list[tuple[str, str]] = field(default_factory=list)

    async def post_generation(self, image: str, scenario: str) -> httpx.Response:
        self.requests.append((image, scenario))
        if self.error is not None:
            raise self.error
        assert self.response is not None
        return self.response


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
        gemini_api_key="gemini-key",
        openai_api_key="openai-key",
    )


@pytest.fixture
def transformer() -> FakeImageTransformer:
    return FakeImageTransformer()


@pytest.fixture
def storage() -> InMemoryImageStorage:
    return InMemoryImageStorage()


def make_container(
    settings: Settings,
    transformer: ImageTransformer | None,
    storage: ImageStorage | None,
) -> AppContainer:
    generation_service = GenerationService(
        transformer=transformer,
        storage=storage,
        object_prefix=settings.storage_prefix,
        clock=lambda: FIXED_NOW,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        generation_service=generation_service,
        close_resources=close_resources,
    )


@pytest.fixture
def container(
    settings: Settings,
    transformer: FakeImageTransformer,
    storage: InMemoryImageStorage,
) -> AppContainer:
    return make_container(settings, transformer, storage)


@pytest.fixture
def placeholder_container(settings: Settings) -> AppContainer:
    return make_container(settings, None, InMemoryImageStorage())
