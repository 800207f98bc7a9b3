"""Port and helpers for the structured-output generative endpoint."""

import base64
from typing import Protocol

from health_tracker.domain.nutrients import NUTRIENT_KEYS


class GenerativeClient(Protocol):
    """Interface for LLM calls constrained to a JSON schema."""

    async def generate(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        prompt: str,
        schema: dict[str, object],
        schema_name: str,
        image_data_url: str | None = None,
    ) -> dict[str, object]:
        """Return the parsed JSON object produced for the prompt."""


def nutrient_schema() -> dict[str, object]:
    """Strict JSON schema for a full nutrient mapping."""
    return {
        "type": "object",
        "properties": {key: {"type": "number", "minimum": 0} for key in NUTRIENT_KEYS},
        "required": list(NUTRIENT_KEYS),
        "additionalProperties": False,
    }


def food_schema() -> dict[str, object]:
    """Strict JSON schema for a named food with nutrients."""
    return {
        "type": "object",
        "properties": {
            "name": {"type": "string"},
            "nutrients": nutrient_schema(),
        },
        "required": ["name", "nutrients"],
        "additionalProperties": False,
    }


def to_data_url(image_bytes: bytes) -> str:
    """Convert bytes to a base64 data URL for image input."""
    mime_type = detect_mime_type(image_bytes)
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"


def detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    return "image/jpeg"
