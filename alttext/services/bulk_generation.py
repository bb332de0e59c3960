"""Credit-metered bulk alt text generation."""

import asyncio
import logging
from dataclasses import dataclass, field

from sqlalchemy.orm import Session

from alttext.config import get_settings
from alttext.models.enums import AltTextStatus, UsageAction
from alttext.models.store import Store
from alttext.models.usage_record import UsageRecord
from alttext.services.alt_text_records import upsert_alt_text_record
from alttext.services.credit_ledger import CreditLedger
from alttext.services.errors import (
    BatchGenerationError,
    InsufficientCreditsError,
    LedgerError,
    NoItemsError,
)
from alttext.services.prompts import ProductContext, get_style_config
from alttext.services.text_shaper import shape_alt_text
from alttext.services.vision import GenerationResult, VisionService

logger = logging.getLogger(__name__)


@dataclass
class GenerationItem:
    """One image to describe, with the product context sent to the model."""

    product_id: str
    product_name: str
    image_id: str
    image_url: str
    vendor: str | None = None
    product_type: str | None = None
    tags: list[str] | None = None
    description: str | None = None

    @property
    def context(self) -> ProductContext:
        return ProductContext(
            name=self.product_name,
            description=self.description,
            vendor=self.vendor,
            product_type=self.product_type,
            tags=self.tags,
        )


@dataclass
class ItemFailure:
    """An image that did not get alt text."""

    product_id: str
    image_id: str
    error: str


@dataclass
class BatchGenerationResult:
    """Outcome of a bulk generation request."""

    requested: int
    success_count: int = 0
    failures: list[ItemFailure] = field(default_factory=list)

    @property
    def failed_image_ids(self) -> list[str]:
        return [failure.image_id for failure in self.failures]

    @property
    def message(self) -> str:
        return f"Successfully generated {self.success_count} alt texts."


class BulkGenerationService:
    """Generates alt text for many images, charging one credit per success.

    The full batch is reserved up front. Images are described concurrently
    and a failed image never cancels the others. Once every request has
    finished the reservation is settled so that only successes are charged.
    """

    def __init__(
        self,
        db: Session,
        vision_service: VisionService | None = None,
        ledger: CreditLedger | None = None,
    ):
        self.db = db
        self.settings = get_settings()
        self.vision_service = vision_service or VisionService()
        self.ledger = ledger or CreditLedger(db)

    async def generate_batch(
        self, store: Store, items: list[GenerationItem]
    ) -> BatchGenerationResult:
        """Generate and store alt text for a batch of images.

        Raises:
            NoItemsError: If items is empty
            InsufficientCreditsError: If the store cannot cover every item;
                nothing is called or written
            BatchGenerationError: If the batch aborted after reserving; the
                whole reservation has been refunded
        """
        if not items:
            raise NoItemsError()

        store_id = store.id
        style = store.alt_text_style
        language = store.default_language
        requested = len(items)

        if not self.ledger.reserve(store_id, requested):
            raise InsufficientCreditsError(
                required=requested, available=self.ledger.balance(store_id)
            )

        settled = False
        try:
            outcomes = await self._generate_all(items, style, language)
            result = self._store_results(store_id, items, outcomes, style)

            self.db.add(
                UsageRecord(
                    store_id=store_id,
                    action=UsageAction.GENERATE_BULK.value,
                    credits_used=result.success_count,
                )
            )
            self.ledger.settle(store_id, reserved=requested, used=result.success_count)
            settled = True
        except Exception as e:
            logger.exception(f"Bulk generation aborted for store {store_id}")
            raise BatchGenerationError(f"Generation failed: {e}") from e
        finally:
            # Also runs on cancellation, which is not an Exception
            if not settled:
                self._refund_reservation(store_id, requested)

        logger.info(
            f"Bulk generation for store {store_id}: "
            f"{result.success_count}/{requested} succeeded"
        )
        return result

    def _refund_reservation(self, store_id: int, amount: int) -> None:
        logger.warning(f"Refunding {amount} reserved credits to store {store_id}")
        self.db.rollback()
        try:
            self.ledger.refund(store_id, amount)
        except LedgerError:
            logger.critical(f"Could not refund {amount} credits to store {store_id}")

    async def _generate_all(
        self, items: list[GenerationItem], style: str, language: str
    ) -> list[GenerationResult | BaseException]:
        semaphore = asyncio.Semaphore(self.settings.generation_concurrency)

        async def generate(item: GenerationItem) -> GenerationResult:
            async with semaphore:
                return await self.vision_service.generate_alt_text(
                    item.image_url, item.context, style, language
                )

        return await asyncio.gather(*(generate(item) for item in items), return_exceptions=True)

    def _store_results(
        self,
        store_id: int,
        items: list[GenerationItem],
        outcomes: list[GenerationResult | BaseException],
        style: str,
    ) -> BatchGenerationResult:
        max_chars = get_style_config(style).shape_limit
        result = BatchGenerationResult(requested=len(items))

        for item, outcome in zip(items, outcomes, strict=True):
            if isinstance(outcome, BaseException):
                logger.warning(f"Generation failed for image {item.image_id}: {outcome}")
                error = str(outcome) or type(outcome).__name__
                result.failures.append(ItemFailure(item.product_id, item.image_id, error))
                continue

            alt_text = shape_alt_text(outcome.text, max_chars)
            if not alt_text:
                result.failures.append(
                    ItemFailure(item.product_id, item.image_id, "Empty alt text")
                )
                continue

            upsert_alt_text_record(
                self.db,
                store_id,
                item.product_id,
                item.image_id,
                alt_text,
                status=AltTextStatus.GENERATED,
                product_name=item.product_name,
                image_url=item.image_url,
            )
            result.success_count += 1

        return result
