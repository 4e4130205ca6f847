from __future__ import annotations

import asyncio
import logging
import re
from dataclasses import dataclass
from pathlib import Path

from ad_campaign_cli.campaign_loader import load_and_validate_brief, load_image_as_data_url, resolve_brief_path
from ad_campaign_cli.exceptions import AdCampaignError, ConfigurationError, ResearchFailedError
from ad_campaign_cli.generation.orchestrator import (
    DEFAULT_IMAGE_MODEL,
    DEFAULT_RESEARCH_MODEL,
    CampaignOrchestrator,
)
from ad_campaign_cli.models.campaign import CampaignBoard, CampaignBrief
from ad_campaign_cli.output.manifest import CampaignManifest, ItemManifestEntry, utc_now_iso
from ad_campaign_cli.output.metrics import RunMetrics, Timer
from ad_campaign_cli.output.writer import image_output_path, save_data_url_image, write_json
from ad_campaign_cli.providers.factory import create_client

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RunConfig:
    brief_path: Path
    output_root: Path
    provider_mode: str = "mock"
    image_model: str = DEFAULT_IMAGE_MODEL
    research_model: str = DEFAULT_RESEARCH_MODEL
    style: str | None = None
    dry_run: bool = False


def _slugify(value: str) -> str:
    return re.sub(r"[^a-z0-9]+", "_", value.lower()).strip("_") or "style"


def _load_images(config: RunConfig, brief: CampaignBrief) -> tuple[str, str | None]:
    product_data_url = load_image_as_data_url(resolve_brief_path(config.brief_path, brief.product_image))
    logo_data_url = None
    if brief.logo_image:
        logo_data_url = load_image_as_data_url(resolve_brief_path(config.brief_path, brief.logo_image))
    return product_data_url, logo_data_url


def _write_reports(
    config: RunConfig,
    manifest: CampaignManifest,
    metrics: RunMetrics,
    timer: Timer,
) -> tuple[dict, dict]:
    metrics.execution_time_seconds = round(timer.elapsed(), 3)
    manifest.finished_at = utc_now_iso()

    campaign_dir = config.output_root / manifest.campaign_id
    write_json(manifest.to_dict(), campaign_dir / "manifest.json")
    write_json(metrics.to_dict(), campaign_dir / "metrics.json")
    return manifest.to_dict(), metrics.to_dict()


def run_campaign(config: RunConfig) -> tuple[dict, dict, CampaignBoard]:
    """Generate a full campaign from the brief and write results, manifest and metrics.

    A research failure marks every item as errored, writes the reports, then re-raises.
    """
    timer = Timer()
    brief = load_and_validate_brief(config.brief_path)
    product_data_url, logo_data_url = _load_images(config, brief)
    client = create_client(config.provider_mode)
    orchestrator = CampaignOrchestrator(
        client,
        image_model=config.image_model,
        research_model=config.research_model,
    )

    board = CampaignBoard()
    manifest = CampaignManifest(
        campaign_id=brief.campaign_id,
        mode="campaign",
        provider=config.provider_mode,
        image_model=config.image_model,
        research_model=config.research_model,
        dry_run=config.dry_run,
        started_at=utc_now_iso(),
        options=brief.options.model_dump(),
    )
    metrics = RunMetrics(items_requested=board.size)

    logger.info("Campaign %s started", brief.campaign_id)
    try:
        outcome = asyncio.run(
            orchestrator.generate_campaign(product_data_url, logo_data_url, brief.options, board)
        )
    except ResearchFailedError as exc:
        board.fail_all(str(exc))
        manifest.research_error = str(exc)
        manifest.items = [
            ItemManifestEntry(index=item.index, status=item.status, error=item.error) for item in board.items
        ]
        metrics.items_failed = board.size
        _write_reports(config, manifest, metrics, timer)
        raise

    campaign_dir = config.output_root / brief.campaign_id
    for item, prompt in zip(board.items, outcome.prompts):
        entry = ItemManifestEntry(index=item.index, status=item.status, prompt=prompt, error=item.error)
        if item.status == "done" and item.url:
            metrics.items_succeeded += 1
            output_stem = campaign_dir / f"ad_{item.index + 1:02d}"
            if config.dry_run:
                entry.output_file = str(image_output_path(item.url, output_stem))
            else:
                entry.output_file = str(save_data_url_image(item.url, output_stem))
        else:
            metrics.items_failed += 1
        manifest.items.append(entry)

    manifest_dict, metrics_dict = _write_reports(config, manifest, metrics, timer)
    logger.info("Campaign %s completed", brief.campaign_id)
    return manifest_dict, metrics_dict, board


def run_style(config: RunConfig) -> tuple[dict, dict]:
    timer = Timer()
    brief = load_and_validate_brief(config.brief_path)
    style = config.style or brief.style
    if not style:
        raise ConfigurationError("No style given. Use --style or set 'style' in the brief.")

    product_data_url, _ = _load_images(config, brief)
    client = create_client(config.provider_mode)
    orchestrator = CampaignOrchestrator(client, image_model=config.image_model)

    manifest = CampaignManifest(
        campaign_id=brief.campaign_id,
        mode="style",
        provider=config.provider_mode,
        image_model=config.image_model,
        dry_run=config.dry_run,
        started_at=utc_now_iso(),
        options=brief.options.model_dump(),
        style=style,
    )
    metrics = RunMetrics(items_requested=1)
    entry = ItemManifestEntry(index=0, status="pending")
    manifest.items.append(entry)

    try:
        url = asyncio.run(orchestrator.generate_style_image(product_data_url, style))
    except AdCampaignError as exc:
        entry.status = "error"
        entry.error = str(exc)
        metrics.items_failed = 1
        _write_reports(config, manifest, metrics, timer)
        raise

    entry.status = "done"
    metrics.items_succeeded = 1
    output_stem = config.output_root / brief.campaign_id / f"style_{_slugify(style)}"
    writer = image_output_path if config.dry_run else save_data_url_image
    entry.output_file = str(writer(url, output_stem))

    return _write_reports(config, manifest, metrics, timer)
