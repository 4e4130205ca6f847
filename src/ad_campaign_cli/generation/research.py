from __future__ import annotations

import logging

from ad_campaign_cli.exceptions import ResearchFailedError
from ad_campaign_cli.models.campaign import CAMPAIGN_SIZE, CampaignOptions, CreativePrompt
from ad_campaign_cli.models.parts import GenerationRequest, TextPart
from ad_campaign_cli.prompts.builder import build_research_prompt, parse_creative_prompts
from ad_campaign_cli.providers.base import GenerationClient

logger = logging.getLogger(__name__)


async def research_creative_prompts(
    client: GenerationClient,
    model: str,
    options: CampaignOptions,
    *,
    count: int = CAMPAIGN_SIZE,
) -> list[CreativePrompt]:
    """Ask the text model for *count* ad concepts and return them in presentation order.

    The call is made once, with web search enabled and without retry.
    """
    request = GenerationRequest.of(TextPart(build_research_prompt(options, count)))
    logger.info("Researching %d creative concepts for %s", count, options.product_title)

    try:
        output = await client.generate_content(model, request, web_search=True)
    except Exception as exc:
        logger.error("Error during research phase: %s", exc)
        raise ResearchFailedError(
            f"The AI failed during the research phase. Please check your inputs and try again. ({exc})"
        ) from exc

    return parse_creative_prompts(output.text, count)
