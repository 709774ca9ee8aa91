"""Tests for provider, storage and HTTP adapters."""

import asyncio
import base64
import json
from dataclasses import dataclass, field
from types import SimpleNamespace

import httpx
import pytest

from rich_image.adapters.gemini_image_client import GeminiImageClient
from rich_image.adapters.generation_http_client import HttpxGenerationClient
from rich_image.adapters.openai_image_client import OpenAIImageClient
from rich_image.adapters.supabase_image_storage import SupabaseImageStorage
from tests.conftest import JPEG_BYTES, PNG_BYTES


class _FakeGeminiModels:
    def __init__(self, response: object) -> None:
        self.response = response
        self.last_kwargs: dict[str, object] | None = None

    async def generate_content(self, **kwargs):  # type: ignore[no-untyped-def]
        self.last_kwargs = kwargs
        return self.response


def _fake_gemini(response: object) -> SimpleNamespace:
    return SimpleNamespace(aio=SimpleNamespace(models=_FakeGeminiModels(response)))


def _gemini_response(*parts: object) -> SimpleNamespace:
    return SimpleNamespace(
        candidates=[SimpleNamespace(content=SimpleNamespace(parts=list(parts)))]
    )


def test_gemini_client_returns_first_inline_image() -> None:
    response = _gemini_response(
        SimpleNamespace(text="Here you go", inline_data=None),
        SimpleNamespace(
            text=None,
            inline_data=SimpleNamespace(data=PNG_BYTES, mime_type="image/png"),
        ),
    )
    fake = _fake_gemini(response)
    client = GeminiImageClient(client=fake, model="gemini-2.5-flash-image")

    result = asyncio.run(client.transform(JPEG_BYTES, "image/jpeg", "Make me rich"))

    assert result == PNG_BYTES
    kwargs = fake.aio.models.last_kwargs
    assert kwargs["model"] == "gemini-2.5-flash-image"
    assert kwargs["contents"][1] == "Make me rich"
    assert kwargs["config"].response_modalities == ["IMAGE"]


def test_gemini_client_decodes_base64_inline_data() -> None:
    encoded = base64.b64encode(PNG_BYTES).decode("utf-8")
    response = _gemini_response(
        SimpleNamespace(inline_data=SimpleNamespace(data=encoded))
    )
    client = GeminiImageClient(client=_fake_gemini(response), model="model")

    result = asyncio.run(client.transform(JPEG_BYTES, "image/jpeg", "prompt"))

    assert result == PNG_BYTES


def test_gemini_client_returns_none_without_image() -> None:
    response = _gemini_response(SimpleNamespace(text="I can't", inline_data=None))
    client = GeminiImageClient(client=_fake_gemini(response), model="model")

    assert asyncio.run(client.transform(JPEG_BYTES, "image/jpeg", "p")) is None
    empty = GeminiImageClient(
        client=_fake_gemini(SimpleNamespace(candidates=None)), model="model"
    )
    assert asyncio.run(empty.transform(JPEG_BYTES, "image/jpeg", "p")) is None


class _FakeImages:
    def __init__(self, data: list[object]) -> None:
        self.data = data
        self.last_kwargs: dict[str, object] | None = None

    async def edit(self, **kwargs):  # type: ignore[no-untyped-def]
        self.last_kwargs = kwargs
        return SimpleNamespace(data=self.data)


class _FakeOpenAI:
    def __init__(self, data: list[object]) -> None:
        self.images = _FakeImages(data)


def test_openai_client_decodes_first_result() -> None:
    encoded = base64.b64encode(PNG_BYTES).decode("utf-8")
    fake = _FakeOpenAI([SimpleNamespace(b64_json=encoded)])
    client = OpenAIImageClient(client=fake, model="gpt-image-1")

    result = asyncio.run(client.transform(JPEG_BYTES, "image/jpeg", "Make me rich"))

    assert result == PNG_BYTES
    assert fake.images.last_kwargs["image"] == ("photo.jpg", JPEG_BYTES, "image/jpeg")
    assert fake.images.last_kwargs["prompt"] == "Make me rich"


@pytest.mark.parametrize("data", [[], [SimpleNamespace(b64_json=None)]])
def test_openai_client_returns_none_without_image(data: list[object]) -> None:
    client = OpenAIImageClient(client=_FakeOpenAI(data), model="gpt-image-1")

    assert asyncio.run(client.transform(JPEG_BYTES, "image/png", "p")) is None


@dataclass
class FakeBucket:
    name: str
    uploads: list[dict[str, object]] = field(default_factory=list)
    error: Exception | None = None

    def upload(
        self, path: str, file: bytes, file_options: dict[str, str] | None = None
    ) -> SimpleNamespace:
        if self.error is not None:
            raise self.error
        self.uploads.append({"path": path, "file": file, "options": file_options})
        return SimpleNamespace(path=path)

    def get_public_url(self, path: str) -> str:
        base = "https://example.supabase.co/storage/v1/object/public"
        return f"{base}/{self.name}/{path}"


@dataclass
class FakeStorageClient:
    buckets: dict[str, FakeBucket] = field(default_factory=dict)

    def from_(self, name: str) -> FakeBucket:
        if name not in self.buckets:
            self.buckets[name] = FakeBucket(name=name)
        return self.buckets[name]


@dataclass
class FakeSupabaseClient:
    storage: FakeStorageClient = field(default_factory=FakeStorageClient)


def test_supabase_storage_uploads_without_upsert() -> None:
    client = FakeSupabaseClient()
    storage = SupabaseImageStorage(client=client, bucket="rich-images")

    storage.upload("rich-1.png", PNG_BYTES, "image/png")
    url = storage.public_url("rich-1.png")

    upload = client.storage.buckets["rich-images"].uploads[0]
    assert upload["path"] == "rich-1.png"
    assert upload["file"] == PNG_BYTES
    assert upload["options"]["content-type"] == "image/png"
    assert upload["options"]["upsert"] == "false"
    assert url.endswith("/rich-images/rich-1.png")


def test_supabase_storage_propagates_upload_errors() -> None:
    client = FakeSupabaseClient()
    client.storage.from_("rich-images").error = RuntimeError("Duplicate")
    storage = SupabaseImageStorage(client=client, bucket="rich-images")

    with pytest.raises(RuntimeError, match="Duplicate"):
        storage.upload("rich-1.png", PNG_BYTES, "image/png")


def test_generation_client_posts_with_bearer_token() -> None:
    seen: dict[str, object] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["authorization"] = request.headers["authorization"]
        seen["payload"] = json.loads(request.content.decode())
        return httpx.Response(200, json={"imageUrl": "https://cdn.test/x.png"})

    transport = httpx.MockTransport(handler)
    client = HttpxGenerationClient(
        function_url="https://fn.test/generate-rich-image",
        anon_key="anon-key",
        http_client=httpx.AsyncClient(transport=transport),
    )

    response = asyncio.run(client.post_generation("aGVsbG8=", "urban-ceo"))

    assert response.status_code == 200
    assert seen["authorization"] == "Bearer anon-key"
    assert seen["payload"] == {"image": "aGVsbG8=", "scenario": "urban-ceo"}
