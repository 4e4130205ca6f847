import json
from pathlib import Path

import pytest
from PIL import Image

from ad_campaign_cli.exceptions import ResearchFailedError, UnknownStyleError
from ad_campaign_cli.pipeline import RunConfig, run_campaign, run_style
from ad_campaign_cli.providers.base import TextOutput
from fakes import ScriptedClient, research_reply


def _write_brief(tmp_path: Path, with_logo: bool = True) -> Path:
    Image.new("RGB", (8, 8), color=(200, 30, 30)).save(tmp_path / "can.png")
    Image.new("RGB", (4, 4), color=(0, 0, 0)).save(tmp_path / "logo.jpg")
    logo_line = "logo_image: logo.jpg\n" if with_logo else ""
    brief_file = tmp_path / "brief.yaml"
    brief_file.write_text(
        f"""campaign_id: sparkfizz
product_image: can.png
{logo_line}options:
  aspect_ratio: "4:5 Portrait"
  product_type: cold drink can
  product_title: SparkFizz
  flavor: Lemon Lime
  brand_colors: green and white
""",
        encoding="utf-8",
    )
    return brief_file


def test_mock_campaign_writes_ads_manifest_and_metrics(tmp_path: Path) -> None:
    config = RunConfig(brief_path=_write_brief(tmp_path), output_root=tmp_path / "output")

    manifest, metrics, board = run_campaign(config)

    campaign_dir = tmp_path / "output" / "sparkfizz"
    assert metrics["items_succeeded"] == 10
    assert metrics["items_failed"] == 0
    assert board.completed
    assert len(manifest["items"]) == 10
    assert all(item["prompt"] for item in manifest["items"])
    assert (campaign_dir / "ad_01.png").exists()
    assert (campaign_dir / "ad_10.png").exists()
    with Image.open(campaign_dir / "ad_01.png") as ad:
        assert ad.size == (512, 512)
    saved = json.loads((campaign_dir / "manifest.json").read_text(encoding="utf-8"))
    assert saved["options"]["aspect_ratio"] == "4:5 Portrait"
    assert (campaign_dir / "metrics.json").exists()


def test_dry_run_skips_image_writes(tmp_path: Path) -> None:
    config = RunConfig(brief_path=_write_brief(tmp_path, with_logo=False), output_root=tmp_path / "output", dry_run=True)

    manifest, metrics, _ = run_campaign(config)

    assert manifest["dry_run"] is True
    assert metrics["items_succeeded"] == 10
    assert (tmp_path / "output" / "sparkfizz" / "manifest.json").exists()
    assert not (tmp_path / "output" / "sparkfizz" / "ad_01.png").exists()
    assert manifest["items"][0]["output_file"] == str(tmp_path / "output" / "sparkfizz" / "ad_01.png")


def test_research_failure_marks_every_item_errored(tmp_path: Path, monkeypatch) -> None:
    client = ScriptedClient(research=TextOutput(text=research_reply(4)))
    monkeypatch.setattr("ad_campaign_cli.pipeline.create_client", lambda provider: client)
    config = RunConfig(brief_path=_write_brief(tmp_path), output_root=tmp_path / "output")

    with pytest.raises(ResearchFailedError):
        run_campaign(config)

    saved = json.loads((tmp_path / "output" / "sparkfizz" / "manifest.json").read_text(encoding="utf-8"))
    assert "enough creative concepts" in saved["research_error"]
    assert [item["status"] for item in saved["items"]] == ["error"] * 10
    assert client.image_calls == []


def test_style_run_writes_single_image(tmp_path: Path) -> None:
    config = RunConfig(brief_path=_write_brief(tmp_path), output_root=tmp_path / "output", style="Vibrant Pop")

    manifest, metrics = run_style(config)

    assert manifest["mode"] == "style"
    assert metrics["items_succeeded"] == 1
    assert (tmp_path / "output" / "sparkfizz" / "style_vibrant_pop.png").exists()


def test_style_run_with_unknown_style_records_error(tmp_path: Path) -> None:
    config = RunConfig(brief_path=_write_brief(tmp_path), output_root=tmp_path / "output", style="Cubism")

    with pytest.raises(UnknownStyleError):
        run_style(config)

    saved = json.loads((tmp_path / "output" / "sparkfizz" / "manifest.json").read_text(encoding="utf-8"))
    assert saved["items"][0]["status"] == "error"


def test_style_dry_run_records_planned_file_name(tmp_path: Path) -> None:
    config = RunConfig(brief_path=_write_brief(tmp_path), output_root=tmp_path / "output", style="Retro", dry_run=True)

    manifest, _ = run_style(config)

    planned = tmp_path / "output" / "sparkfizz" / "style_retro.png"
    assert manifest["items"][0]["output_file"] == str(planned)
    assert not planned.exists()
