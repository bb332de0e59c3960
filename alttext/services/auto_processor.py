"""Unattended alt text generation for products changed on Squarespace.

Each webhook event runs through a small state machine:

    IGNORED     not a product event, unknown store, auto-process off,
                no credits, product unavailable, or nothing to describe
    PROCESSING  images without alt text, capped at the store's balance, one
                at a time: reserve 1, generate, apply, settle
    COMPLETED   every selected image was attempted

A failed image is refunded and skipped. Running out of credits part way
(another request spent them) ends the run quietly.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from sqlalchemy.orm import Session

from alttext.models.enums import AltTextStatus, UsageAction
from alttext.models.store import Store
from alttext.models.usage_record import UsageRecord
from alttext.services.alt_text_records import upsert_alt_text_record
from alttext.services.credit_ledger import CreditLedger
from alttext.services.errors import GenerationError, SquarespaceError
from alttext.services.prompts import ProductContext, get_style_config
from alttext.services.squarespace import SquarespaceClient, SquarespaceImage, SquarespaceProduct
from alttext.services.text_shaper import shape_alt_text
from alttext.services.vision import VisionService

logger = logging.getLogger(__name__)

PRODUCT_TOPIC_PREFIX = "commerce.products"


class AutoProcessState(StrEnum):
    """States of a webhook auto-process run."""

    IGNORED = "ignored"
    PROCESSING = "processing"
    COMPLETED = "completed"


@dataclass
class ProductEvent:
    """The parts of a Squarespace webhook notification we act on."""

    topic: str
    site_id: str
    product_id: str

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "ProductEvent | None":
        """Parse a notification, returning None unless it is about a product."""
        topic = payload.get("topic") or ""
        site_id = payload.get("websiteId")
        data = payload.get("data") or {}
        product_id = data.get("id") if isinstance(data, dict) else None
        if not topic.startswith(PRODUCT_TOPIC_PREFIX) or not site_id or not product_id:
            return None
        return cls(topic=topic, site_id=str(site_id), product_id=str(product_id))


@dataclass
class AutoProcessOutcome:
    """Where a run ended and what it did."""

    state: AutoProcessState
    reason: str | None = None
    selected: int = 0
    processed: int = 0
    failed: int = 0


def select_images_needing_alt_text(
    product: SquarespaceProduct, limit: int
) -> list[SquarespaceImage]:
    """Images without alt text, earliest first, at most `limit` of them."""
    if limit <= 0:
        return []
    return [img for img in product.images if img.needs_alt_text][:limit]


class AutoProcessor:
    """Generates and applies alt text for a product when a store opted in."""

    def __init__(
        self,
        db: Session,
        vision_service: VisionService | None = None,
        squarespace_factory: Callable[[str], SquarespaceClient] = SquarespaceClient,
        ledger: CreditLedger | None = None,
    ):
        self.db = db
        self.vision_service = vision_service or VisionService()
        self.squarespace_factory = squarespace_factory
        self.ledger = ledger or CreditLedger(db)

    async def process_event(self, payload: dict[str, Any]) -> AutoProcessOutcome:
        """Run one webhook notification through the auto-process state machine."""
        event = ProductEvent.from_payload(payload)
        if event is None:
            return self._ignored("not a product event")

        store = self.db.query(Store).filter(Store.site_id == event.site_id).first()
        if store is None:
            return self._ignored(f"no store for site {event.site_id}")
        if not store.auto_process:
            return self._ignored(f"auto-process disabled for store {store.id}")
        if store.credits_remaining <= 0:
            return self._ignored(f"store {store.id} has no credits")

        # Select images to describe
        client = self.squarespace_factory(store.access_token)
        try:
            product = await client.get_product(event.product_id)
        except SquarespaceError as e:
            logger.warning(f"Could not fetch product {event.product_id} for store {store.id}: {e}")
            return self._ignored("product fetch failed")

        selected = select_images_needing_alt_text(product, store.credits_remaining)
        if not selected:
            return self._ignored(f"product {product.id} has no images missing alt text")

        logger.info(
            f"Auto-processing {len(selected)} images of product {product.id} for store {store.id}"
        )
        return await self._process_images(store, product, selected, client)

    async def _process_images(
        self,
        store: Store,
        product: SquarespaceProduct,
        images: list[SquarespaceImage],
        client: SquarespaceClient,
    ) -> AutoProcessOutcome:
        store_id = store.id
        style = store.alt_text_style
        language = store.default_language
        max_chars = get_style_config(style).shape_limit
        context = ProductContext(
            name=product.title,
            description=product.description or None,
            tags=product.tags or None,
        )
        outcome = AutoProcessOutcome(state=AutoProcessState.PROCESSING, selected=len(images))

        for image in images:
            if not self.ledger.reserve(store_id, 1):
                logger.info(f"Store {store_id} ran out of credits, stopping auto-process")
                break

            settled = False
            try:
                generated = await self.vision_service.generate_alt_text(
                    image.url, context, style, language
                )
                alt_text = shape_alt_text(generated.text, max_chars)
                if not alt_text:
                    raise GenerationError("Model returned empty alt text")

                await client.update_image_alt_text(product.id, image.id, alt_text)

                upsert_alt_text_record(
                    self.db,
                    store_id,
                    product.id,
                    image.id,
                    alt_text,
                    status=AltTextStatus.APPLIED,
                    product_name=product.title,
                    image_url=image.url,
                )
                self.db.add(
                    UsageRecord(
                        store_id=store_id,
                        action=UsageAction.AUTO_PROCESS.value,
                        credits_used=1,
                        product_id=product.id,
                        image_id=image.id,
                    )
                )
                self.ledger.settle(store_id, reserved=1, used=1)
                settled = True
            except Exception as e:
                logger.error(f"Auto-process failed for image {image.id}: {e}", exc_info=True)
                outcome.failed += 1
                continue
            finally:
                # Also runs on cancellation, which is not an Exception
                if not settled:
                    self.db.rollback()
                    self.ledger.refund(store_id, 1)

            outcome.processed += 1

        outcome.state = AutoProcessState.COMPLETED
        logger.info(
            f"Auto-process of product {product.id} for store {store_id} finished: "
            f"{outcome.processed} applied, {outcome.failed} failed"
        )
        return outcome

    def _ignored(self, reason: str) -> AutoProcessOutcome:
        logger.info(f"Ignoring webhook event: {reason}")
        return AutoProcessOutcome(state=AutoProcessState.IGNORED, reason=reason)
