from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Literal

from pydantic import BaseModel, ConfigDict, Field

from ad_campaign_cli.exceptions import CampaignStateError

logger = logging.getLogger(__name__)

CAMPAIGN_SIZE = 10

AspectRatio = Literal["1:1 Instagram", "16:9 YouTube", "2:3 Poster", "9:16 Story", "4:5 Portrait"]
ItemStatus = Literal["pending", "done", "error"]

CreativePrompt = str


class CampaignOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    aspect_ratio: AspectRatio = "1:1 Instagram"
    product_type: str = Field(min_length=1)
    product_title: str = Field(min_length=1)
    flavor: str = ""
    company_name: str = ""
    tagline: str = ""
    brand_colors: str = ""


class CampaignBrief(BaseModel):
    campaign_id: str = Field(min_length=1)
    product_image: str = Field(min_length=1)
    logo_image: str | None = None
    style: str | None = None
    options: CampaignOptions


@dataclass(frozen=True, slots=True)
class ItemResult:
    status: Literal["done", "error"]
    url: str | None = None
    message: str | None = None

    @classmethod
    def done(cls, url: str) -> ItemResult:
        return cls(status="done", url=url)

    @classmethod
    def error(cls, message: str) -> ItemResult:
        return cls(status="error", message=message)


ProgressCallback = Callable[[int, ItemResult], None]


@dataclass(slots=True)
class CampaignItem:
    index: int
    status: ItemStatus = "pending"
    url: str | None = None
    error: str | None = None

    @property
    def is_terminal(self) -> bool:
        return self.status != "pending"

    def apply(self, result: ItemResult) -> None:
        if self.is_terminal:
            raise CampaignStateError(f"Campaign item {self.index} is already {self.status}")
        self.status = result.status
        self.url = result.url
        self.error = result.message


@dataclass(slots=True)
class CampaignOutcome:
    prompts: list[CreativePrompt]
    results: list[ItemResult]

    @property
    def succeeded(self) -> int:
        return sum(1 for result in self.results if result.status == "done")

    @property
    def failed(self) -> int:
        return sum(1 for result in self.results if result.status == "error")


@dataclass(slots=True)
class CampaignBoard:
    """Session state for one campaign: one slot per ad, written through the progress callback.

    Instances are callable so they can be handed to the orchestrator directly as
    ``on_progress``.  Each slot leaves ``pending`` exactly once.
    """

    size: int = CAMPAIGN_SIZE
    items: list[CampaignItem] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.items:
            self.items = [CampaignItem(index=i) for i in range(self.size)]

    def __call__(self, index: int, result: ItemResult) -> None:
        self.record(index, result)

    def record(self, index: int, result: ItemResult) -> None:
        if not 0 <= index < self.size:
            raise CampaignStateError(f"Campaign item index out of range: {index}")
        self.items[index].apply(result)
        logger.debug("Item %d -> %s", index + 1, result.status)

    def fail_all(self, message: str) -> None:
        for item in self.items:
            if not item.is_terminal:
                item.apply(ItemResult.error(message))

    @property
    def completed(self) -> bool:
        return all(item.is_terminal for item in self.items)
