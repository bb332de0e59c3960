"""Prompt templates and per-style settings for alt text generation."""

import re
from dataclasses import dataclass

from alttext.models.enums import AltTextStyle

DEFAULT_LANGUAGE = "en"

LANGUAGE_NAMES = {
    "en": "English",
    "es": "Spanish",
    "fr": "French",
    "de": "German",
    "it": "Italian",
    "pt": "Portuguese",
    "pl": "Polish",
    "ja": "Japanese",
}

DESCRIPTION_CONTEXT_LIMIT = 200


@dataclass(frozen=True)
class StyleConfig:
    """Prompt text and numeric limits for one alt text style."""

    system_prompt: str
    user_instruction: str
    min_chars: int  # Target range given to the model
    max_chars: int
    max_tokens: int
    temperature: float
    shape_limit: int  # Hard cap applied by the text shaper


CONCISE_SYSTEM_PROMPT = """You are an expert at writing concise, SEO-optimized alt text for e-commerce product images.

Rules:
- Write ONE short phrase or sentence, between 50 and 100 characters long
- Always end with a complete thought, never cut off mid-sentence
- Focus on: product type, brand, primary color, and key visual feature
- Be direct and keyword-rich, prioritize SEO value
- Do NOT start with "Image of", "Picture of", "Photo of"
- Do NOT mention pricing or promotional text

Example (62 chars): "Navy blue merino wool crew neck sweater with cable-knit pattern"

Use the product context provided to enrich your description with accurate product names and details."""

BALANCED_SYSTEM_PROMPT = """You are an expert at writing rich, descriptive alt text for e-commerce product images.

Your goal is to paint a vivid picture of what is visually shown in the image so that someone who cannot see the image fully understands it.

Rules:
- Write 1-2 full, natural sentences, between 120 and 200 characters long
- Always end with a complete sentence, never cut off mid-sentence
- Describe specific visual elements: colors, materials, patterns, composition
- Include product details like brand name, color, material, and type when visible or provided in context
- Write for ACCESSIBILITY first, SEO second
- Do NOT start with "Image of", "Picture of", "Photo of", or "A photo showing"
- Do NOT mention pricing, discounts, or promotional text
- Do NOT use generic filler phrases like "high quality" or "beautiful design"

Example (130 chars):
"A folded navy blue wool sweater on a white surface. The ribbed collar and cable-knit pattern across the chest are clearly visible."

Use the product context provided to enrich your description with accurate product names and details."""

DETAILED_SYSTEM_PROMPT = """You are an expert at writing comprehensive, highly descriptive alt text for e-commerce product images.

Your goal is to provide a thorough visual description so that someone using a screen reader experiences the image as fully as possible.

Rules:
- Write 2-3 full, detailed sentences, between 200 and 350 characters long
- Always end with a complete sentence, never cut off mid-sentence
- Describe key visible elements: shapes, patterns, colors, textures, composition, perspective, background
- Mention spatial relationships (e.g., "centered on", "displayed against", "shown from a side angle")
- Include product details like brand, color, material, type, and visible features
- Write for ACCESSIBILITY as primary goal
- Do NOT start with "Image of", "Picture of", "Photo of", or "A photo showing"
- Do NOT mention pricing, discounts, or promotional text
- Do NOT use generic filler phrases like "high quality" or "beautiful design"

Example (255 chars):
"Top and bottom view of a snowboard displayed side by side against a dark background. The top view features a hexagonal logo that radiates outwards. The bottom reveals an angular grid pattern in deep purple and violet tones."

Use the product context provided to enrich your description with accurate product names and details."""

STYLE_CONFIGS: dict[AltTextStyle, StyleConfig] = {
    AltTextStyle.CONCISE: StyleConfig(
        system_prompt=CONCISE_SYSTEM_PROMPT,
        user_instruction=(
            "Write a short, keyword-rich alt text phrase between 50-100 characters. "
            "Always end with a complete thought. Output only the alt text, nothing else."
        ),
        min_chars=50,
        max_chars=100,
        max_tokens=80,
        temperature=0.5,
        shape_limit=150,
    ),
    AltTextStyle.BALANCED: StyleConfig(
        system_prompt=BALANCED_SYSTEM_PROMPT,
        user_instruction=(
            "Describe what you see in 1-2 natural sentences, between 120-200 characters. "
            "Always end with a complete sentence. Output only the alt text, nothing else."
        ),
        min_chars=120,
        max_chars=200,
        max_tokens=150,
        temperature=0.6,
        shape_limit=300,
    ),
    AltTextStyle.DETAILED: StyleConfig(
        system_prompt=DETAILED_SYSTEM_PROMPT,
        user_instruction=(
            "Describe what you see in 2-3 detailed sentences, between 200-350 characters. "
            "Always end with a complete sentence. Output only the alt text, nothing else."
        ),
        min_chars=200,
        max_chars=350,
        max_tokens=250,
        temperature=0.6,
        shape_limit=500,
    ),
}


@dataclass
class ProductContext:
    """What we know about the product an image belongs to."""

    name: str
    description: str | None = None
    vendor: str | None = None
    product_type: str | None = None
    tags: list[str] | None = None


def get_style_config(style: str | AltTextStyle) -> StyleConfig:
    """Look up the configuration for a style, falling back to balanced."""
    try:
        return STYLE_CONFIGS[AltTextStyle(style)]
    except ValueError:
        return STYLE_CONFIGS[AltTextStyle.BALANCED]


def get_language_name(code: str) -> str:
    """Human-readable language name for an ISO code (English if unknown)."""
    return LANGUAGE_NAMES.get(code, LANGUAGE_NAMES[DEFAULT_LANGUAGE])


def get_system_prompt(style: str | AltTextStyle, language: str) -> str:
    """System prompt for a style with the output language instruction appended."""
    config = get_style_config(style)
    return f"{config.system_prompt}\n\nWrite in {get_language_name(language)}."


def strip_html(html: str) -> str:
    """Replace tags with spaces and collapse whitespace."""
    text = re.sub(r"<[^>]*>", " ", html)
    return re.sub(r"\s+", " ", text).strip()


def build_context_prompt(context: ProductContext) -> str:
    """Render product context as labelled lines for the model."""
    parts = [f"Product Name: {context.name}"]
    if context.vendor:
        parts.append(f"Brand/Vendor: {context.vendor}")
    if context.product_type:
        parts.append(f"Product Type: {context.product_type}")
    if context.tags:
        parts.append(f"Tags: {', '.join(context.tags)}")
    if context.description:
        clean = strip_html(context.description)
        if len(clean) > DESCRIPTION_CONTEXT_LIMIT:
            clean = clean[:DESCRIPTION_CONTEXT_LIMIT] + "..."
        parts.append(f"Description: {clean}")
    return "\n".join(parts)


def get_generation_prompt(context: ProductContext, style: str | AltTextStyle) -> str:
    """User prompt that accompanies the product image."""
    config = get_style_config(style)
    return f"""Generate alt text for this product image.

Product Context:
{build_context_prompt(context)}

{config.user_instruction}"""
