from __future__ import annotations

import logging
import re

from ad_campaign_cli.exceptions import InsufficientConceptsError
from ad_campaign_cli.models.campaign import CAMPAIGN_SIZE, CampaignOptions, CreativePrompt

logger = logging.getLogger(__name__)

_PROMPT_MARKER_RE = re.compile(r"PROMPT \d+:")


def build_research_prompt(options: CampaignOptions, count: int = CAMPAIGN_SIZE) -> str:
    return f"""
You are a world-class creative director. Your task is to research popular advertising styles for a product and generate {count} unique, creative concepts for an ad campaign.

PRODUCT DETAILS:
- Product Type: {options.product_type}
- Product Title: {options.product_title}
- Flavor: {options.flavor}
- Company Name: {options.company_name}
- Target Vibe/Colors: {options.brand_colors}

Based on your research of current market trends for this type of product, generate exactly {count} distinct visual prompts for an image generation AI.

Each prompt must be detailed and describe a complete scene.

IMPORTANT: Format your response ONLY with the prompts. Each prompt must start with "PROMPT [number]:". Do not include any other text, greetings, or explanations.

EXAMPLE:
PROMPT 1: A dynamic action shot of the [product] splashing into a crystal clear wave on a sunny beach, with fresh [flavor] fruits scattered on the sand.
PROMPT 2: A minimalist studio shot of the [product] on a pedestal made of ice, with soft, cool-toned lighting highlighting condensation on the can.
...and so on for {count} prompts.
"""


def build_ad_prompt(creative_prompt: CreativePrompt, options: CampaignOptions, has_logo: bool) -> str:
    logo_instruction = (
        "Incorporate the company logo from the second image subtly and professionally."
        if has_logo
        else "No logo was provided, so do not add one."
    )
    return f"""
TASK: Create a professional advertisement using the provided product image.
CONCEPT: {creative_prompt}
INSTRUCTIONS:
1. Place the product from the first image into the scene described by the concept.
2. {logo_instruction}
3. The final ad's aspect ratio must be: {options.aspect_ratio}.
4. Adhere to the brand colors: {options.brand_colors}.
5. If a tagline is provided, incorporate it stylishly: "{options.tagline}".
"""


def parse_creative_prompts(text: str, count: int = CAMPAIGN_SIZE) -> list[CreativePrompt]:
    """Split a research reply on ``PROMPT <n>:`` markers.

    Text before the first marker counts as a segment when it is not blank, the
    same as any other segment.  Raises ``InsufficientConceptsError`` when fewer
    than *count* non-empty segments are found.
    """
    prompts = [segment.strip() for segment in _PROMPT_MARKER_RE.split(text or "")]
    prompts = [segment for segment in prompts if segment]

    if len(prompts) < count:
        logger.error("Failed to parse %d prompts, found %d. Raw response: %s", count, len(prompts), text)
        raise InsufficientConceptsError(
            "The AI failed to generate enough creative concepts. Please try again.",
            found=len(prompts),
        )
    return prompts[:count]
