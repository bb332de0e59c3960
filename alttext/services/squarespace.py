"""Squarespace Commerce API client.

Docs: https://developers.squarespace.com/commerce-apis/products
"""

import logging
from dataclasses import dataclass, field
from typing import Any

import httpx

from alttext.config import get_settings
from alttext.services.errors import SquarespaceError

logger = logging.getLogger(__name__)

# Write-then-verify rounds before giving up on a contended product
MAX_MERGE_ATTEMPTS = 3


@dataclass
class SquarespaceImage:
    """A product image as stored on Squarespace."""

    id: str
    url: str
    alt_text: str | None = None
    width: int = 0
    height: int = 0

    @property
    def needs_alt_text(self) -> bool:
        return not (self.alt_text or "").strip()


@dataclass
class SquarespaceProduct:
    """The subset of a Squarespace product used for alt text."""

    id: str
    title: str
    description: str = ""
    tags: list[str] = field(default_factory=list)
    images: list[SquarespaceImage] = field(default_factory=list)

    def find_image(self, image_id: str) -> SquarespaceImage | None:
        return next((img for img in self.images if img.id == image_id), None)


def map_product(raw: dict[str, Any]) -> SquarespaceProduct:
    """Map a raw product payload to a SquarespaceProduct."""
    images = []
    for img in raw.get("images") or []:
        original = img.get("originalSize") or {}
        images.append(
            SquarespaceImage(
                id=img["id"],
                url=original.get("url") or img.get("url") or "",
                alt_text=img.get("altText") or None,
                width=original.get("width") or 0,
                height=original.get("height") or 0,
            )
        )

    return SquarespaceProduct(
        id=raw["id"],
        title=raw.get("name") or raw.get("title") or "Untitled",
        description=raw.get("description") or "",
        tags=raw.get("tags") or [],
        images=images,
    )


class SquarespaceClient:
    """Client for the product endpoints of one connected website."""

    def __init__(self, access_token: str, http_client: httpx.AsyncClient | None = None) -> None:
        self.settings = get_settings()
        self.access_token = access_token
        self.base_url = self.settings.squarespace_api_base
        self.timeout = 30.0
        self._http_client = http_client

    @property
    def headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.access_token}",
            "User-Agent": self.settings.squarespace_user_agent,
        }

    async def _request(self, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        url = f"{self.base_url}{path}"
        try:
            if self._http_client is not None:
                response = await self._http_client.request(
                    method, url, headers=self.headers, **kwargs
                )
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.request(method, url, headers=self.headers, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"HTTP error calling Squarespace {method} {path}: {e}")
            raise SquarespaceError(f"Squarespace request failed: {e}") from e

        if response.is_error:
            raise SquarespaceError(
                f"Squarespace API error {response.status_code}: {response.text}",
                status_code=response.status_code,
            )
        return response.json() if response.content else {}

    async def get_product(self, product_id: str) -> SquarespaceProduct:
        """Fetch a single product with its images."""
        data = await self._request("GET", f"/commerce/products/{product_id}")
        return map_product(data)

    async def update_image_alt_text(self, product_id: str, image_id: str, alt_text: str) -> None:
        """Set the alt text of one product image.

        The API only accepts the product's whole image list, so this fetches
        the current list, replaces the target image's alt text and posts the
        merged list back. A concurrent writer posting its own merge in between
        would silently drop ours, so every write is re-read and the merge is
        repeated if our text did not stick.

        Raises:
            SquarespaceError: If a request fails, the image does not belong to
                the product, or the write keeps being overwritten
        """
        for attempt in range(1, MAX_MERGE_ATTEMPTS + 1):
            product = await self.get_product(product_id)
            target = product.find_image(image_id)
            if target is None:
                raise SquarespaceError(f"Image {image_id} not found on product {product_id}")
            if target.alt_text == alt_text:
                return

            images = [
                {"id": img.id, "altText": alt_text if img.id == image_id else (img.alt_text or "")}
                for img in product.images
            ]
            await self._request(
                "POST",
                f"/commerce/products/{product_id}",
                json={"images": images},
            )

            current = (await self.get_product(product_id)).find_image(image_id)
            if current is not None and current.alt_text == alt_text:
                return
            logger.warning(
                f"Alt text for image {image_id} was overwritten by a concurrent update "
                f"(attempt {attempt}/{MAX_MERGE_ATTEMPTS})"
            )

        raise SquarespaceError(
            f"Failed to update alt text for image {image_id}: product {product_id} kept changing"
        )
