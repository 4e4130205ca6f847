from __future__ import annotations

import argparse
import logging
import os
from pathlib import Path

from ad_campaign_cli.campaign_loader import BriefValidationError, load_and_validate_brief
from ad_campaign_cli.exceptions import AdCampaignError
from ad_campaign_cli.generation.orchestrator import DEFAULT_IMAGE_MODEL, DEFAULT_RESEARCH_MODEL
from ad_campaign_cli.pipeline import RunConfig, run_campaign, run_style
from ad_campaign_cli.prompts.catalog import available_styles


def _strip_optional_quotes(value: str) -> str:
    trimmed = value.strip()
    if len(trimmed) >= 2 and ((trimmed[0] == '"' and trimmed[-1] == '"') or (trimmed[0] == "'" and trimmed[-1] == "'")):
        return trimmed[1:-1]
    return trimmed


def _load_env_file(env_path: Path) -> None:
    if not env_path.exists() or not env_path.is_file():
        return

    for raw_line in env_path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue

        key, raw_value = line.split("=", 1)
        key = key.strip()
        if not key:
            continue

        os.environ.setdefault(key, _strip_optional_quotes(raw_value))


def _load_default_env_files() -> None:
    cwd_env = Path.cwd() / ".env"
    project_root_env = Path(__file__).resolve().parents[2] / ".env"

    _load_env_file(project_root_env)
    if cwd_env != project_root_env:
        _load_env_file(cwd_env)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate ad creatives from a product image with Gemini")
    parser.add_argument("--brief", default=None, help="Path to campaign brief (.yaml/.yml/.json)")
    parser.add_argument("--output", default="./output", help="Output root folder")
    parser.add_argument("--provider", choices=["mock", "real"], default="mock", help="Provider mode")
    parser.add_argument(
        "--style",
        default=None,
        help="Generate a single image in this catalog style instead of a full campaign",
    )
    parser.add_argument("--list-styles", action="store_true", help="Print the available styles and exit")
    parser.add_argument(
        "--image-model",
        default=os.getenv("GEMINI_IMAGE_MODEL", DEFAULT_IMAGE_MODEL),
        help="Gemini image model name",
    )
    parser.add_argument(
        "--research-model",
        default=os.getenv("GEMINI_RESEARCH_MODEL", DEFAULT_RESEARCH_MODEL),
        help="Gemini text model used for concept research",
    )
    parser.add_argument("--dry-run", action="store_true", help="Run generation but skip image file writes")
    parser.add_argument("--verbose", action="store_true", help="Log every API attempt")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    _load_default_env_files()
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s | %(levelname)s | %(message)s",
    )

    if args.list_styles:
        for style in available_styles():
            print(style)
        return

    if not args.brief:
        raise SystemExit("--brief is required unless --list-styles is used")

    config = RunConfig(
        brief_path=Path(args.brief),
        output_root=Path(args.output),
        provider_mode=args.provider,
        image_model=args.image_model,
        research_model=args.research_model,
        style=args.style,
        dry_run=args.dry_run,
    )

    try:
        brief = load_and_validate_brief(config.brief_path)
        if config.style or brief.style:
            manifest, metrics = run_style(config)
        else:
            manifest, metrics, _ = run_campaign(config)
    except BriefValidationError as exc:
        raise SystemExit(f"Validation error:\n{exc}") from exc
    except AdCampaignError as exc:
        raise SystemExit(f"Generation failed: {exc}") from exc

    print("Run metrics")
    print(f"- Campaign: {manifest['campaign_id']} ({manifest['mode']})")
    print(f"- Items requested: {metrics['items_requested']}")
    print(f"- Items succeeded: {metrics['items_succeeded']}")
    print(f"- Items failed: {metrics['items_failed']}")
    print(f"- Execution time (s): {metrics['execution_time_seconds']}")
    for item in manifest["items"]:
        if item["status"] == "error":
            print(f"- Ad {item['index'] + 1} failed: {item['error']}")


if __name__ == "__main__":
    main()
