"""AI color scheme generation for rebranding.

The generation flow has three steps:
1. build_color_scheme_prompt() renders a deterministic prompt from the
   brand and optional style/mood preferences.
2. OpenAIClient.complete() sends it with a fixed system instruction and
   JSON-object response mode.
3. interpret_color_scheme_response() parses the returned text.

Interpretation is lenient by default: unparseable or empty output becomes an
empty scheme and the request still succeeds. With
COLOR_SCHEME_STRICT_VALIDATION enabled, output must be a JSON object with the
five required keys holding hex colors, or ColorSchemeOutputError is raised.
"""

import json
import time
from typing import Any

from pydantic import ValidationError

from brandshift.core.config import get_settings
from brandshift.core.logging import get_logger
from brandshift.integrations.openai import OpenAIClient
from brandshift.schemas.brand import BrandPayload
from brandshift.schemas.color_scheme import (
    REQUIRED_COLOR_KEYS,
    ColorScheme,
    GenerateColorSchemeResponse,
    Preferences,
)

logger = get_logger(__name__)

COLOR_SCHEME_SYSTEM_PROMPT = (
    "You are a design expert specializing in brand color schemes."
)

COLOR_SCHEME_USER_PROMPT_TEMPLATE = """Generate a new color scheme for rebranding the brand described below.

Brand name: {name}
Industry: {industry}
Original primary color: {primary_color}

Respond with a JSON object with exactly these keys: "primary", "secondary", "accent", "background", "text", "additionalColors".
Each of "primary", "secondary", "accent", "background" and "text" must be a single hex color code (e.g. "#1A73E8").
"additionalColors" must be an array of extra hex color codes that complement the scheme."""

UNKNOWN_PLACEHOLDER = "unknown"


class ColorSchemeServiceError(Exception):
    """Base exception for color scheme generation errors."""

    pass


class ColorSchemeValidationError(ColorSchemeServiceError):
    """Raised when generation input is invalid."""

    def __init__(self, field: str, value: Any, message: str):
        self.field = field
        self.value = value
        self.message = message
        super().__init__(f"Validation failed for '{field}': {message}")


class ColorSchemeOutputError(ColorSchemeServiceError):
    """Raised in strict mode when the model output is not a valid color scheme."""

    def __init__(self, message: str, raw_text: str | None = None):
        self.raw_text = raw_text
        super().__init__(message)


def _present(value: str | None) -> bool:
    return value is not None and value.strip() != ""


def build_color_scheme_prompt(
    brand: BrandPayload | None,
    preferences: Preferences | None = None,
) -> str:
    """Render the user prompt for a brand and optional preferences.

    The output depends only on the arguments. Style and mood lines are added
    only when the corresponding preference is a non-blank string.

    Raises:
        ColorSchemeValidationError: If brand is missing
    """
    if brand is None:
        raise ColorSchemeValidationError("brand", None, "Brand is required")

    prompt = COLOR_SCHEME_USER_PROMPT_TEMPLATE.format(
        name=brand.name,
        industry=brand.industry,
        primary_color=brand.primary_color
        if _present(brand.primary_color)
        else UNKNOWN_PLACEHOLDER,
    )

    if preferences is not None:
        if _present(preferences.style):
            prompt += f"\nThe new color scheme should follow this style: {preferences.style}."
        if _present(preferences.mood):
            prompt += f"\nThe new color scheme should convey this mood: {preferences.mood}."

    return prompt


def interpret_color_scheme_response(
    raw_text: str | None,
    strict: bool = False,
) -> dict[str, Any]:
    """Turn raw model output into color scheme data.

    Lenient mode returns the parsed JSON object as-is, or ``{}`` when the
    text is empty, not JSON, or not a JSON object. Strict mode raises
    ColorSchemeOutputError in those cases and when required keys are
    missing or colors are not hex codes.
    """
    text = (raw_text or "").strip()

    if not text:
        if strict:
            raise ColorSchemeOutputError("Model returned an empty response", raw_text)
        logger.warning("Empty color scheme response, using empty scheme")
        return {}

    try:
        parsed = json.loads(text)
    except json.JSONDecodeError as e:
        if strict:
            raise ColorSchemeOutputError(
                f"Model response is not valid JSON: {e.msg}", raw_text
            ) from e
        logger.warning(
            "Color scheme response is not valid JSON, using empty scheme",
            extra={"response_text": text[:200], "error": e.msg},
        )
        return {}

    if not isinstance(parsed, dict):
        if strict:
            raise ColorSchemeOutputError(
                "Model response is not a JSON object", raw_text
            )
        logger.warning(
            "Color scheme response is not a JSON object, using empty scheme",
            extra={"response_type": type(parsed).__name__},
        )
        return {}

    if strict:
        missing = [key for key in REQUIRED_COLOR_KEYS if key not in parsed]
        if missing:
            raise ColorSchemeOutputError(
                f"Model response is missing keys: {', '.join(missing)}", raw_text
            )
        try:
            ColorScheme.model_validate(parsed)
        except ValidationError as e:
            fields = [".".join(str(loc) for loc in err["loc"]) for err in e.errors()]
            raise ColorSchemeOutputError(
                f"Model response is not a valid color scheme (invalid: {', '.join(fields)})",
                raw_text,
            ) from e

    return parsed


class ColorSchemeService:
    """Generates rebranding color schemes with a chat-completions client."""

    def __init__(
        self,
        client: OpenAIClient,
        strict_validation: bool | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            client: Generation client, shared process-wide
            strict_validation: Reject malformed output. Defaults to settings.
        """
        self._client = client
        if strict_validation is None:
            strict_validation = get_settings().color_scheme_strict_validation
        self._strict = strict_validation

    @property
    def strict_validation(self) -> bool:
        return self._strict

    async def generate(
        self,
        brand: BrandPayload | None,
        preferences: Preferences | None = None,
    ) -> GenerateColorSchemeResponse:
        """Generate a color scheme for a brand.

        Returns:
            Envelope with ``success=True`` and the interpreted scheme

        Raises:
            ColorSchemeValidationError: Brand is missing (no network call is made)
            ColorSchemeOutputError: Strict mode and the output is malformed
            OpenAIError: Any failure from the generation client
        """
        prompt = build_color_scheme_prompt(brand, preferences)

        start_time = time.monotonic()
        logger.info(
            "Generating color scheme",
            extra={
                "brand_name": brand.name,  # type: ignore[union-attr]
                "has_style": preferences is not None and _present(preferences.style),
                "has_mood": preferences is not None and _present(preferences.mood),
                "strict_validation": self._strict,
            },
        )

        result = await self._client.complete(
            prompt,
            system_prompt=COLOR_SCHEME_SYSTEM_PROMPT,
            json_response=True,
        )
        data = interpret_color_scheme_response(result.text, strict=self._strict)

        duration_ms = (time.monotonic() - start_time) * 1000
        logger.info(
            "Color scheme generated",
            extra={
                "brand_name": brand.name,  # type: ignore[union-attr]
                "keys": sorted(data.keys()),
                "duration_ms": round(duration_ms, 2),
            },
        )

        return GenerateColorSchemeResponse(success=True, data=data)
