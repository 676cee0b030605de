"""Gemini image-model wrapper for watermark inpainting."""

from __future__ import annotations

import logging
from typing import Any, Protocol

from vanish.engine.state import Rect, Size
from vanish.llm.prompts import build_instruction
from vanish.utils.images import decode_data_uri, to_data_uri

logger = logging.getLogger(__name__)


class InpaintingError(Exception):
    """Any failure to obtain an inpainted image."""


class MissingAPIKeyError(InpaintingError):
    pass


class Inpainter(Protocol):
    async def inpaint(self, image: str, instruction: str) -> str:
        """Return the inpainted encoded image or raise InpaintingError."""
        ...


def extract_image(response: Any) -> str | None:
    """First inline image among the response's content parts, as a data URI."""
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return None
    content = getattr(candidates[0], "content", None)
    for part in getattr(content, "parts", None) or []:
        inline = getattr(part, "inline_data", None)
        if inline is not None and inline.data:
            return to_data_uri(inline.data, inline.mime_type)
    return None


class GeminiInpainter:
    """Sends one generate_content request per image; no retries.

    The SDK client is created on first use and reused for later requests.
    """

    def __init__(self, api_key: str, model: str) -> None:
        self.api_key = api_key
        self.model = model
        self._client = None

    def _get_client(self):
        if self._client is None:
            from google import genai

            self._client = genai.Client(api_key=self.api_key)
        return self._client

    async def inpaint(self, image: str, instruction: str) -> str:
        if not self.api_key:
            raise MissingAPIKeyError(
                "API key is missing. Set GEMINI_API_KEY (or API_KEY) in the environment or .env."
            )

        from google.genai import types

        try:
            media_type, data = decode_data_uri(image)
        except ValueError as e:
            raise InpaintingError(str(e)) from e

        client = self._get_client()
        logger.info("Requesting inpainting from %s (%d bytes, %s)", self.model, len(data), media_type)
        try:
            response = await client.aio.models.generate_content(
                model=self.model,
                contents=[
                    types.Part.from_bytes(data=data, mime_type=media_type),
                    types.Part.from_text(text=instruction),
                ],
                config=types.GenerateContentConfig(response_modalities=["IMAGE", "TEXT"]),
            )
        except Exception as e:
            logger.error("Gemini API error: %s", e)
            raise InpaintingError(f"Gemini API request failed: {e}") from e

        result = extract_image(response)
        if result is None:
            raise InpaintingError("No image was returned by the AI.")
        return result


async def remove_watermark(
    inpainter: Inpainter,
    image: str,
    selection: Rect,
    container: Size,
) -> str:
    """Describe the selection and ask the inpainter to heal it."""
    instruction = build_instruction(selection, container)
    logger.debug("Instruction: %s", instruction)
    return await inpainter.inpaint(image, instruction)
