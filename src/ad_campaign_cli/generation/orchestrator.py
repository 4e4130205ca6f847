from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence

from ad_campaign_cli.exceptions import GenerationFailedError, NoImageReturnedError
from ad_campaign_cli.models.campaign import (
    CAMPAIGN_SIZE,
    CampaignOptions,
    CampaignOutcome,
    CreativePrompt,
    ItemResult,
    ProgressCallback,
)
from ad_campaign_cli.models.parts import GenerationRequest, InlineImagePart, TextPart, image_part_from_data_url
from ad_campaign_cli.prompts.builder import build_ad_prompt
from ad_campaign_cli.prompts.catalog import build_fallback_prompt, get_style_prompt
from ad_campaign_cli.providers.base import GenerationClient
from ad_campaign_cli.providers.extractor import to_data_url

from .research import research_creative_prompts
from .retry import Sleep, invoke_with_retry

logger = logging.getLogger(__name__)

DEFAULT_IMAGE_MODEL = "gemini-2.5-flash-image-preview"
DEFAULT_RESEARCH_MODEL = "gemini-2.5-flash"


class CampaignOrchestrator:
    """Drives single-style generation and full 10-ad campaigns against one client.

    Both modes share ``_generate_image``; they differ only in whether a fallback
    prompt is supplied for content-blocked replies.
    """

    def __init__(
        self,
        client: GenerationClient,
        *,
        image_model: str = DEFAULT_IMAGE_MODEL,
        research_model: str = DEFAULT_RESEARCH_MODEL,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self.client = client
        self.image_model = image_model
        self.research_model = research_model
        self._sleep = sleep

    async def _request_image(self, images: Sequence[InlineImagePart], prompt: str) -> str:
        request = GenerationRequest.of(*images, TextPart(prompt))
        output = await invoke_with_retry(self.client, self.image_model, request, sleep=self._sleep)
        return to_data_url(output)

    async def _generate_image(
        self,
        images: Sequence[InlineImagePart],
        prompt: str,
        fallback_prompt: str | None = None,
    ) -> str:
        try:
            return await self._request_image(images, prompt)
        except NoImageReturnedError as exc:
            if fallback_prompt is None:
                raise GenerationFailedError(f"AI model failed: {exc}", causes=[exc]) from exc
            first_error = exc
        except Exception as exc:
            raise GenerationFailedError(f"AI model failed: {exc}", causes=[exc]) from exc

        logger.warning("No image returned, retrying once with fallback prompt")
        try:
            return await self._request_image(images, fallback_prompt)
        except Exception as fallback_error:
            raise GenerationFailedError(
                f"AI model failed: {first_error}; fallback prompt also failed: {fallback_error}",
                causes=[first_error, fallback_error],
            ) from fallback_error

    async def generate_style_image(self, image_data_url: str, style: str) -> str:
        """Restyle one product image with a catalog style and return the result as a data URL."""
        prompt = get_style_prompt(style)
        image_part = image_part_from_data_url(image_data_url)

        logger.info("Generating %s style image", style)
        return await self._generate_image([image_part], prompt, fallback_prompt=build_fallback_prompt(style))

    async def generate_campaign(
        self,
        product_data_url: str,
        logo_data_url: str | None,
        options: CampaignOptions,
        on_progress: ProgressCallback,
    ) -> CampaignOutcome:
        """Research concepts, then generate every ad concurrently.

        ``on_progress(index, result)`` fires once per item as soon as that item
        finishes, in completion order.  Research failures propagate; item
        failures are only reported through the callback.
        """
        product_part = image_part_from_data_url(product_data_url)
        logo_part = image_part_from_data_url(logo_data_url) if logo_data_url else None
        images = [product_part] if logo_part is None else [product_part, logo_part]

        prompts = await research_creative_prompts(
            self.client, self.research_model, options, count=CAMPAIGN_SIZE
        )

        results: list[ItemResult | None] = [None] * len(prompts)

        async def run_item(index: int, creative_prompt: CreativePrompt) -> None:
            ad_prompt = build_ad_prompt(creative_prompt, options, has_logo=logo_part is not None)
            try:
                url = await self._generate_image(images, ad_prompt)
                result = ItemResult.done(url)
            except Exception as exc:
                logger.error("Failed to generate ad for prompt %d: %s", index + 1, exc)
                result = ItemResult.error(str(exc) or "An unknown error occurred.")
            results[index] = result
            on_progress(index, result)

        logger.info("Generating %d ads in parallel", len(prompts))
        await asyncio.gather(*(run_item(index, prompt) for index, prompt in enumerate(prompts)))

        outcome = CampaignOutcome(prompts=prompts, results=[result for result in results if result is not None])
        logger.info("Campaign finished: %d done, %d failed", outcome.succeeded, outcome.failed)
        return outcome
