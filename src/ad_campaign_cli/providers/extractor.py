from __future__ import annotations

import logging
from typing import Any

from ad_campaign_cli.exceptions import NoImageReturnedError
from ad_campaign_cli.models.parts import data_url_from_bytes

from .base import ImageOutput, ModelOutput, TextOutput

logger = logging.getLogger(__name__)

_EMPTY_TEXT_PLACEHOLDER = "No text response received."


def _response_text(response: Any) -> str:
    return getattr(response, "text", None) or ""


def extract_model_output(response: Any) -> ModelOutput:
    """Turn a raw ``generate_content`` response into an ``ImageOutput`` or ``TextOutput``.

    Every candidate's parts are searched for inline image data; the first hit wins.
    """
    for candidate in getattr(response, "candidates", None) or []:
        content = getattr(candidate, "content", None)
        parts = getattr(content, "parts", None) if content else None
        for part in parts or []:
            inline_data = getattr(part, "inline_data", None)
            if inline_data is not None and getattr(inline_data, "data", None):
                mime_type = getattr(inline_data, "mime_type", None) or "image/png"
                return ImageOutput(mime_type=mime_type, data=inline_data.data, text=_response_text(response))
    return TextOutput(text=_response_text(response))


def to_data_url(output: ModelOutput) -> str:
    if isinstance(output, ImageOutput):
        return data_url_from_bytes(output.data, output.mime_type)

    logger.error("API did not return an image. Response: %s", output.text)
    text = output.text or _EMPTY_TEXT_PLACEHOLDER
    raise NoImageReturnedError(
        f'The AI model responded with text instead of an image: "{text}"',
        text=output.text,
    )
