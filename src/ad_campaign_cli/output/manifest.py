from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import UTC, datetime


def utc_now_iso() -> str:
    return datetime.now(UTC).isoformat()


@dataclass(slots=True)
class ItemManifestEntry:
    index: int
    status: str
    prompt: str | None = None
    output_file: str | None = None
    error: str | None = None


@dataclass(slots=True)
class CampaignManifest:
    campaign_id: str
    mode: str
    provider: str
    image_model: str
    dry_run: bool
    started_at: str
    options: dict = field(default_factory=dict)
    style: str | None = None
    research_model: str | None = None
    research_error: str | None = None
    finished_at: str | None = None
    items: list[ItemManifestEntry] = field(default_factory=list)

    def to_dict(self) -> dict:
        return asdict(self)
