from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from ad_campaign_cli.models.parts import GenerationRequest


@dataclass(frozen=True, slots=True)
class ImageOutput:
    mime_type: str
    data: bytes
    text: str = ""


@dataclass(frozen=True, slots=True)
class TextOutput:
    text: str


ModelOutput = ImageOutput | TextOutput


class GenerationClient(ABC):
    name: str = "base"

    @abstractmethod
    async def generate_content(
        self,
        model: str,
        request: GenerationRequest,
        *,
        web_search: bool = False,
    ) -> ModelOutput:
        raise NotImplementedError
