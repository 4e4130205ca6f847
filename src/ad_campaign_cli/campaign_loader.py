from __future__ import annotations

import base64
import json
import mimetypes
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .models.campaign import CampaignBrief

MIN_VALID_EXAMPLE_YAML = """campaign_id: sparkfizz_launch
product_image: sparkfizz.png
logo_image: logo.png
options:
  aspect_ratio: "1:1 Instagram"
  product_type: "cold drink can"
  product_title: "SparkFizz"
"""


class BriefValidationError(ValueError):
    pass


def _parse_brief_file(brief_path: Path) -> dict[str, Any]:
    suffix = brief_path.suffix.lower()
    content = brief_path.read_text(encoding="utf-8")

    if suffix in {".yaml", ".yml"}:
        parsed = yaml.safe_load(content)
    elif suffix == ".json":
        parsed = json.loads(content)
    else:
        raise BriefValidationError(
            "Unsupported brief format. Use .yaml, .yml, or .json files.\n\n"
            f"Minimal valid YAML example:\n{MIN_VALID_EXAMPLE_YAML}"
        )

    if not isinstance(parsed, dict):
        raise BriefValidationError(
            "Brief root must be an object/map.\n\n"
            f"Minimal valid YAML example:\n{MIN_VALID_EXAMPLE_YAML}"
        )
    return parsed


def load_and_validate_brief(brief_path: Path) -> CampaignBrief:
    if not brief_path.exists():
        raise BriefValidationError(f"Brief file not found: {brief_path}")

    try:
        parsed = _parse_brief_file(brief_path)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise BriefValidationError(
            f"Unable to parse brief file: {exc}\n\n"
            f"Minimal valid YAML example:\n{MIN_VALID_EXAMPLE_YAML}"
        ) from exc

    try:
        return CampaignBrief.model_validate(parsed)
    except ValidationError as exc:
        errors = []
        for item in exc.errors():
            location = ".".join(str(part) for part in item["loc"])
            errors.append(f"- {location}: {item['msg']}")
        raise BriefValidationError(
            "Brief validation failed:\n"
            + "\n".join(errors)
            + "\n\nMinimal valid YAML example:\n"
            + MIN_VALID_EXAMPLE_YAML
        ) from exc


def resolve_brief_path(brief_path: Path, relative: str) -> Path:
    path = Path(relative)
    return path if path.is_absolute() else brief_path.parent / path


def load_image_as_data_url(image_path: Path) -> str:
    if not image_path.exists():
        raise BriefValidationError(f"Image file not found: {image_path}")

    mime_type, _ = mimetypes.guess_type(image_path.name)
    if not mime_type or not mime_type.startswith("image/"):
        raise BriefValidationError(f"Not an image file: {image_path}")

    payload = base64.b64encode(image_path.read_bytes()).decode("ascii")
    return f"data:{mime_type};base64,{payload}"
