from ad_campaign_cli.output.manifest import CampaignManifest, ItemManifestEntry
from ad_campaign_cli.output.metrics import RunMetrics


def test_manifest_and_metrics_serializable() -> None:
    manifest = CampaignManifest(
        campaign_id="c1",
        mode="campaign",
        provider="mock",
        image_model="gemini-2.5-flash-image-preview",
        dry_run=True,
        started_at="2026-01-01T00:00:00Z",
        items=[ItemManifestEntry(index=0, status="error", error="AI model failed: 403")],
    )
    metrics = RunMetrics(items_requested=10, items_failed=1)
    assert manifest.to_dict()["campaign_id"] == "c1"
    assert manifest.to_dict()["items"][0]["error"] == "AI model failed: 403"
    assert metrics.to_dict()["items_requested"] == 10
