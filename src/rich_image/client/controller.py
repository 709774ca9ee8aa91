"""Upload and generation flow for the client."""

import base64
import json
import logging
from dataclasses import dataclass

import httpx

from rich_image.adapters.generation_http_client import GenerationClient
from rich_image.client.notifier import Notifier
from rich_image.domain.scenarios import DEFAULT_SCENARIO, Scenario

logger = logging.getLogger(__name__)

INVALID_FILE_MESSAGE = "Por favor, envie um arquivo de imagem válido."
MISSING_PHOTO_MESSAGE = "Por favor, envie uma foto primeiro."
LOADING_MESSAGE = "Criando sua versão de alto nível…"
INVALID_RESPONSE_MESSAGE = "Resposta inválida da função de geração de imagem."
UNKNOWN_ERROR_MESSAGE = "Erro desconhecido durante a geração."
DEFAULT_SUCCESS_MESSAGE = "Imagem gerada com sucesso!"

_RAW_TEXT_LIMIT = 200


@dataclass(frozen=True)
class PhotoFile:
    """A file picked by the user."""

    filename: str
    content_type: str
    content: bytes


class GenerationFailedError(Exception):
    """Terminal failure of a single generation attempt."""


class TransportError(GenerationFailedError):
    """Non-success HTTP status from the endpoint."""


class ApplicationError(GenerationFailedError):
    """Success status with an error field or without an image URL."""


class GenerationController:
    """Holds UI state and drives a generation request.

    The flow moves Idle -> Loading -> Success or Failure and back to Idle on
    the next action. At most one of ``response_message`` and ``error_message``
    is set at a time.
    """

    def __init__(self, client: GenerationClient, notifier: Notifier) -> None:
        self.client = client
        self.notifier = notifier
        self.photo: str | None = None
        self.scenario: Scenario = DEFAULT_SCENARIO
        self.is_loading = False
        self.generated_image_url: str | None = None
        self.is_dialog_open = False
        self.response_message: str | None = None
        self.error_message: str | None = None

    def select_photo(self, file: PhotoFile | None) -> None:
        """Store a picked file as a data URL, rejecting non-image types."""
        if file is None:
            self.photo = None
            return
        if not file.content_type.startswith("image/"):
            self.notifier.show_error(INVALID_FILE_MESSAGE)
            self.photo = None
            return
        encoded = base64.b64encode(file.content).decode("utf-8")
        self.photo = f"data:{file.content_type};base64,{encoded}"

    def select_scenario(self, key: str) -> None:
        """Set the active scenario."""
        self.scenario = Scenario(key)

    @property
    def can_generate(self) -> bool:
        """Return true when the trigger control should be enabled."""
        return self.photo is not None and not self.is_loading

    def close_dialog(self) -> None:
        """Close the full-image display."""
        self.is_dialog_open = False

    async def generate(self) -> bool:
        """Request a generated image for the selected photo and scenario.

        Returns true when an image URL was received.
        """
        if not self.photo:
            self.notifier.show_error(MISSING_PHOTO_MESSAGE)
            return False

        self.is_loading = True
        self.response_message = None
        self.error_message = None
        loading_id = self.notifier.show_loading(LOADING_MESSAGE)
        try:
            payload = self.photo.split(",", maxsplit=1)[-1]
            response = await self.client.post_generation(payload, self.scenario.value)
            data = _read_success_body(response)
            if isinstance(data, dict) and data.get("error"):
                logger.error("Generation failed (endpoint error): %s", data["error"])
                raise ApplicationError(f"Erro da Edge Function: {data['error']}")
            if not isinstance(data, dict) or not data.get("imageUrl"):
                raise ApplicationError(INVALID_RESPONSE_MESSAGE)

            self.generated_image_url = str(data["imageUrl"])
            self.is_dialog_open = True
            self.response_message = _pretty(data)
            self.notifier.show_success(
                str(data.get("message") or DEFAULT_SUCCESS_MESSAGE)
            )
            return True
        except Exception as exc:
            message = str(exc) or UNKNOWN_ERROR_MESSAGE
            if not isinstance(exc, GenerationFailedError):
                logger.exception("Generation failed")
            self.error_message = message
            self.notifier.show_error(f"Falha na geração: {message}")
            return False
        finally:
            self.notifier.dismiss(loading_id)
            self.is_loading = False


def _read_success_body(response: httpx.Response) -> object:
    """Return the parsed body of a 2xx response or raise a transport error."""
    if response.is_success:
        try:
            return response.json()
        except ValueError as exc:
            raise ApplicationError(INVALID_RESPONSE_MESSAGE) from exc

    try:
        body: object = response.json()
    except ValueError:
        text = response.text
        body = {
            "message": f"{text[:_RAW_TEXT_LIMIT]}...",
            "raw_response": text,
        }
    detail = (
        f"Erro HTTP {response.status_code} ({response.reason_phrase}): "
        f"{_pretty(body)}"
    )
    logger.error("Generation failed (HTTP error): %s", detail)
    raise TransportError(detail)


def _pretty(data: object) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)
