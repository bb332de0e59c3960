"""Test doubles for the vision model and Squarespace."""

from unittest.mock import AsyncMock, MagicMock

from alttext.services.errors import SquarespaceError
from alttext.services.squarespace import SquarespaceImage, SquarespaceProduct
from alttext.services.vision import GenerationResult, VisionService


def fake_vision(
    responses: dict[str, str | Exception] | None = None, default: str = "A red shoe"
) -> MagicMock:
    """Vision service mock answering per image URL.

    A string value is returned as model text, an exception is raised.
    """
    responses = responses or {}

    async def generate(image_url, context, style="balanced", language="en"):
        outcome = responses.get(image_url, default)
        if isinstance(outcome, Exception):
            raise outcome
        return GenerationResult(text=outcome, tokens_used=42)

    service = MagicMock(spec=VisionService)
    service.generate_alt_text = AsyncMock(side_effect=generate)
    return service


class FakeSquarespace:
    """In-memory stand-in for SquarespaceClient."""

    def __init__(self, products: list[SquarespaceProduct] | None = None, failing_images=()):
        self.products = {p.id: p for p in products or []}
        self.failing_images = set(failing_images)
        self.updates: list[tuple[str, str, str]] = []

    async def get_product(self, product_id: str) -> SquarespaceProduct:
        if product_id not in self.products:
            raise SquarespaceError("Squarespace API error 404: not found", status_code=404)
        return self.products[product_id]

    async def update_image_alt_text(self, product_id: str, image_id: str, alt_text: str) -> None:
        if image_id in self.failing_images:
            raise SquarespaceError(f"Failed to update alt text for image {image_id}: 500")
        self.updates.append((product_id, image_id, alt_text))
        product = self.products.get(product_id)
        image = product.find_image(image_id) if product else None
        if image is not None:
            image.alt_text = alt_text


def make_product(
    product_id: str = "prod-1", image_alts: list[str | None] | None = None
) -> SquarespaceProduct:
    """A product whose images carry the given alt texts."""
    image_alts = image_alts if image_alts is not None else [None]
    return SquarespaceProduct(
        id=product_id,
        title="Trail Runner",
        description="<p>Lightweight <b>trail</b> shoe</p>",
        tags=["shoes", "running"],
        images=[
            SquarespaceImage(
                id=f"img-{i}", url=f"https://cdn.example.com/img-{i}.jpg", alt_text=alt
            )
            for i, alt in enumerate(image_alts)
        ],
    )
