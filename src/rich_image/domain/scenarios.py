"""Lifestyle scenarios and the prompts they map to."""

from dataclasses import dataclass
from enum import Enum


class Scenario(str, Enum):
    """Fixed set of high-status settings a photo can be placed in."""

    URBAN_CEO = "urban-ceo"
    SILENT_ELITE = "silent-elite"
    INTERNATIONAL_FREEDOM = "international-freedom"


DEFAULT_SCENARIO = Scenario.URBAN_CEO


@dataclass(frozen=True)
class ScenarioDetails:
    """User-facing label and prompt fragment for a scenario."""

    label: str
    prompt: str


SCENARIO_DETAILS: dict[Scenario, ScenarioDetails] = {
    Scenario.URBAN_CEO: ScenarioDetails(
        label="CEO Urbano",
        prompt=(
            "as a powerful CEO in a glass-walled penthouse office high above a "
            "modern city skyline at dusk, wearing a tailored designer suit and "
            "a luxury watch"
        ),
    ),
    Scenario.SILENT_ELITE: ScenarioDetails(
        label="Elite Silenciosa",
        prompt=(
            "as a member of the discreet old-money elite, relaxing on the "
            "terrace of a private countryside estate in understated cashmere "
            "and fine linen, with vintage cars and manicured gardens behind"
        ),
    ),
    Scenario.INTERNATIONAL_FREEDOM: ScenarioDetails(
        label="Liberdade Internacional",
        prompt=(
            "as a wealthy world traveler on the deck of a private yacht "
            "anchored off a Mediterranean coast, with a private jet and "
            "turquoise water in the background, dressed in elegant resort wear"
        ),
    ),
}


class UnknownScenarioError(ValueError):
    """Raised for scenario keys outside the fixed set."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Unknown scenario: {key}")
        self.key = key


def resolve_scenario(key: str | None) -> Scenario:
    """Map a request key to a scenario.

    A missing or blank key falls back to the baseline scenario; any other
    unrecognized key is rejected.
    """
    if key is None or not key.strip():
        return DEFAULT_SCENARIO
    try:
        return Scenario(key.strip())
    except ValueError as exc:
        raise UnknownScenarioError(key) from exc


def scenario_prompt(scenario: Scenario) -> str:
    """Return the prompt fragment for a scenario."""
    return SCENARIO_DETAILS[scenario].prompt


def build_prompt(scenario: Scenario) -> str:
    """Compose the full transformation prompt sent to the image provider."""
    return (
        "Transform this photo into a photorealistic image of the same person "
        f"{scenario_prompt(scenario)}. "
        "Preserve the person's face, facial features, skin tone and identity "
        "exactly as in the original photo. Use natural lighting and realistic "
        "textures. Return only the image: do not add any text, captions, "
        "logos or watermarks, and do not reply with a text description."
    )
