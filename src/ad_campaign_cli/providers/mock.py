from __future__ import annotations

import hashlib
import io

from PIL import Image, ImageDraw, ImageFont

from ad_campaign_cli.models.campaign import CAMPAIGN_SIZE
from ad_campaign_cli.models.parts import GenerationRequest

from .base import GenerationClient, ImageOutput, ModelOutput, TextOutput

_MOCK_SCENES = [
    "on a sunlit beach with waves breaking behind it",
    "on an ice pedestal under cool studio lighting",
    "floating above a field of wildflowers at golden hour",
    "on a marble kitchen counter with fresh ingredients",
    "in a neon-lit city street at night",
    "surrounded by frozen liquid splashes",
    "on a picnic blanket in a green park",
    "in a minimalist pastel set with long shadows",
    "on a rooftop bar table at sunset",
    "inside a snowy cabin window with warm lights",
]


class MockGenerationClient(GenerationClient):
    """Deterministic stand-in for the Gemini API used for dry runs and tests."""

    name = "mock"

    def __init__(self, size: tuple[int, int] = (512, 512)) -> None:
        self.size = size

    async def generate_content(
        self,
        model: str,
        request: GenerationRequest,
        *,
        web_search: bool = False,
    ) -> ModelOutput:
        if not request.image_parts:
            return TextOutput(text=self._research_reply())
        return ImageOutput(mime_type="image/png", data=self._render(request.text))

    def _research_reply(self) -> str:
        lines = [
            f"PROMPT {i}: A product shot {_MOCK_SCENES[(i - 1) % len(_MOCK_SCENES)]}."
            for i in range(1, CAMPAIGN_SIZE + 1)
        ]
        return "\n".join(lines)

    def _render(self, prompt: str) -> bytes:
        width, height = self.size
        digest = hashlib.sha256(prompt.encode("utf-8")).hexdigest()
        color_a = tuple(int(digest[i : i + 2], 16) for i in (0, 2, 4))
        color_b = tuple(int(digest[i : i + 2], 16) for i in (6, 8, 10))

        image = Image.new("RGB", (width, height), color_a)
        draw = ImageDraw.Draw(image)

        for y in range(height):
            blend = y / max(height - 1, 1)
            r = int(color_a[0] * (1 - blend) + color_b[0] * blend)
            g = int(color_a[1] * (1 - blend) + color_b[1] * blend)
            b = int(color_a[2] * (1 - blend) + color_b[2] * blend)
            draw.line([(0, y), (width, y)], fill=(r, g, b))

        font = ImageFont.load_default()
        draw.rectangle([(12, 12), (140, 36)], fill=(0, 0, 0))
        draw.text((20, 18), "MOCK AD", fill=(255, 255, 255), font=font)

        buffer = io.BytesIO()
        image.save(buffer, format="PNG")
        return buffer.getvalue()
