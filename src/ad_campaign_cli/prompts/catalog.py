from __future__ import annotations

from ad_campaign_cli.exceptions import UnknownStyleError

STYLE_PROMPTS: dict[str, str] = {
    "Luxury": (
        "Transform this product photo into a luxury advertisement. Place the product on a polished black marble "
        "surface with soft golden rim lighting, subtle reflections and a deep, moody background. "
        "The mood should feel exclusive, premium and timeless."
    ),
    "Minimalist": (
        "Create a minimalist studio advertisement for this product. Use a clean seamless pastel backdrop, "
        "a single soft shadow and generous negative space. Keep the product perfectly sharp and centered."
    ),
    "Nature": (
        "Place this product in a fresh natural setting: morning light filtering through green leaves, "
        "dew drops, moss and smooth river stones around it. The scene should feel organic and calm."
    ),
    "Vibrant Pop": (
        "Create a bold pop-art advertisement for this product with saturated complementary colors, "
        "hard-edged shadows, geometric shapes and playful energy. Keep the product as the clear hero."
    ),
    "Lifestyle": (
        "Show this product in an authentic lifestyle scene: a sunlit kitchen counter or cafe table, "
        "shallow depth of field, warm natural tones and hints of everyday use without showing faces."
    ),
    "Retro": (
        "Restyle this product as a 1970s print advertisement: film grain, warm faded colors, "
        "rounded typography-free layout and vintage props that suit the product category."
    ),
    "Futuristic": (
        "Place this product in a futuristic, high-tech environment with neon accent lighting, glossy "
        "reflective surfaces and floating holographic shapes. Cool blue and magenta palette."
    ),
    "Splash": (
        "Create a dynamic high-speed advertisement shot of this product with liquid splashes and droplets "
        "frozen in motion around it, crisp studio strobe lighting and a clean gradient background."
    ),
    "Festive": (
        "Place this product in a festive holiday scene with bokeh string lights, wrapped gifts, "
        "pine branches and a warm cozy glow. Keep the product label clearly visible."
    ),
    "Urban": (
        "Put this product in a gritty urban street scene at dusk: concrete textures, graffiti walls "
        "out of focus and cinematic teal-orange color grading."
    ),
}


def available_styles() -> list[str]:
    return list(STYLE_PROMPTS)


def get_style_prompt(style: str) -> str:
    try:
        return STYLE_PROMPTS[style]
    except KeyError:
        raise UnknownStyleError(
            f"Unknown style: {style!r}. Available styles: {', '.join(available_styles())}"
        ) from None


def build_fallback_prompt(style: str) -> str:
    return (
        f"Create a professional product advertisement photo in a {style.lower()} style. "
        "Keep the product from the image recognizable and place it in a fitting scene "
        "with appropriate lighting and composition. Output a single image."
    )
