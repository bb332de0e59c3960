"""Alt text generation service using Claude Vision."""

import logging
from dataclasses import dataclass

import anthropic

from alttext.config import get_settings
from alttext.models.enums import AltTextStyle
from alttext.services.errors import GenerationError
from alttext.services.prompts import (
    DEFAULT_LANGUAGE,
    ProductContext,
    get_generation_prompt,
    get_style_config,
    get_system_prompt,
)

logger = logging.getLogger(__name__)


@dataclass
class GenerationResult:
    """Raw model output for one image."""

    text: str
    tokens_used: int


class VisionService:
    """Service for describing product images with Claude Vision.

    One request per image and no retries; callers decide how to handle a
    failed image.
    """

    def __init__(self, client: anthropic.AsyncAnthropic | None = None) -> None:
        """Initialize the vision service."""
        self.settings = get_settings()
        self.model = self.settings.vision_model
        self._client = client
        self._configured = client is not None or bool(self.settings.anthropic_api_key)

    @property
    def is_configured(self) -> bool:
        """Check if the Anthropic API is configured."""
        return self._configured

    @property
    def client(self) -> anthropic.AsyncAnthropic:
        if self._client is None:
            self._client = anthropic.AsyncAnthropic(api_key=self.settings.anthropic_api_key)
        return self._client

    async def generate_alt_text(
        self,
        image_url: str,
        context: ProductContext,
        style: str | AltTextStyle = AltTextStyle.BALANCED,
        language: str = DEFAULT_LANGUAGE,
    ) -> GenerationResult:
        """Generate alt text for a single product image.

        Args:
            image_url: Publicly reachable URL of the image
            context: Product details used to enrich the description
            style: Store's alt text style
            language: ISO code of the output language

        Returns:
            Unshaped model text and the tokens billed for the request

        Raises:
            GenerationError: If the API is not configured, the request fails,
                or the model returns no text
        """
        if not self.is_configured:
            raise GenerationError("Anthropic API not configured")

        config = get_style_config(style)

        try:
            message = await self.client.messages.create(
                model=self.model,
                max_tokens=config.max_tokens,
                temperature=config.temperature,
                system=get_system_prompt(style, language),
                messages=[
                    {
                        "role": "user",
                        "content": [
                            {
                                "type": "image",
                                "source": {"type": "url", "url": image_url},
                            },
                            {
                                "type": "text",
                                "text": get_generation_prompt(context, style),
                            },
                        ],
                    }
                ],
            )
        except anthropic.APIError as e:
            logger.warning(f"Vision request failed for {image_url}: {e}")
            raise GenerationError(str(e)) from e

        text = "".join(
            block.text for block in message.content if getattr(block, "type", None) == "text"
        ).strip()
        if not text:
            raise GenerationError("Model returned no alt text")

        usage = message.usage
        tokens_used = (usage.input_tokens + usage.output_tokens) if usage else 0
        return GenerationResult(text=text, tokens_used=tokens_used)


def get_vision_service() -> VisionService:
    """Get a vision service instance."""
    return VisionService()
