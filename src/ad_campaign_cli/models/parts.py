from __future__ import annotations

import base64
import binascii
import re
from dataclasses import dataclass

from ad_campaign_cli.exceptions import InvalidImageFormatError

_DATA_URL_RE = re.compile(r"^data:(image/[\w.+-]+);base64,(.+)$", re.DOTALL)


@dataclass(frozen=True, slots=True)
class InlineImagePart:
    mime_type: str
    data: bytes


@dataclass(frozen=True, slots=True)
class TextPart:
    text: str


Part = InlineImagePart | TextPart


@dataclass(frozen=True, slots=True)
class GenerationRequest:
    """Ordered, immutable list of parts sent in one generation call."""

    parts: tuple[Part, ...]

    @classmethod
    def of(cls, *parts: Part | None) -> GenerationRequest:
        return cls(parts=tuple(part for part in parts if part is not None))

    @property
    def image_parts(self) -> list[InlineImagePart]:
        return [part for part in self.parts if isinstance(part, InlineImagePart)]

    @property
    def text(self) -> str:
        return "\n".join(part.text for part in self.parts if isinstance(part, TextPart))


def image_part_from_data_url(data_url: str) -> InlineImagePart:
    match = _DATA_URL_RE.match(data_url.strip()) if isinstance(data_url, str) else None
    if match is None:
        raise InvalidImageFormatError("Invalid image data URL: expected data:image/<subtype>;base64,<payload>")

    mime_type, payload = match.groups()
    try:
        data = base64.b64decode("".join(payload.split()), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise InvalidImageFormatError(f"Invalid base64 payload in {mime_type} data URL") from exc
    if not data:
        raise InvalidImageFormatError(f"Empty payload in {mime_type} data URL")
    return InlineImagePart(mime_type=mime_type, data=data)


def data_url_from_bytes(data: bytes, mime_type: str) -> str:
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"
