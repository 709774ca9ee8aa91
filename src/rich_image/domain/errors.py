"""Errors raised while serving generation requests."""


class GenerationError(Exception):
    """Base error rendered as a JSON ``{"error": ...}`` envelope."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidRequestError(GenerationError):
    """The request body is missing data or carries unusable values."""

    status_code = 400


class ProviderError(GenerationError):
    """The image provider did not return a usable image."""


class StorageError(GenerationError):
    """Uploading the generated image failed."""
