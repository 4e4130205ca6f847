from __future__ import annotations

import json
import mimetypes
from pathlib import Path

from ad_campaign_cli.models.parts import image_part_from_data_url


def image_output_path(data_url: str, output_stem: Path) -> Path:
    """Return ``output_stem`` with the extension matching the data URL's MIME type."""
    part = image_part_from_data_url(data_url)
    return output_stem.with_suffix(mimetypes.guess_extension(part.mime_type) or ".img")


def save_data_url_image(data_url: str, output_stem: Path) -> Path:
    """Write a ``data:image/...`` URL to ``output_stem`` plus the extension matching its MIME type."""
    part = image_part_from_data_url(data_url)
    output_path = image_output_path(data_url, output_stem)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(part.data)
    return output_path


def write_json(payload: dict, output_path: Path) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
