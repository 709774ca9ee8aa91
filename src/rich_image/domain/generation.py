"""Request and response models for image generation."""

from pydantic import BaseModel, ConfigDict, Field


class GenerationRequest(BaseModel):
    """Body of a generation request.

    Both fields are optional at the parsing layer so that missing values are
    reported with the endpoint's own error messages.
    """

    image: str | None = None
    scenario: str | None = None

    model_config = ConfigDict(extra="ignore")


class GenerationResult(BaseModel):
    """Successful generation envelope."""

    status: str
    message: str
    image_url: str = Field(alias="imageUrl")

    model_config = ConfigDict(populate_by_name=True)


class ScenarioOption(BaseModel):
    """Scenario entry exposed to clients."""

    key: str
    label: str
