"""Pushing locally finalized alt text to Squarespace."""

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime

from sqlalchemy.orm import Session

from alttext.models.enums import AltTextStatus
from alttext.models.store import Store
from alttext.services.alt_text_records import get_alt_text_record
from alttext.services.errors import NoItemsError, SquarespaceError
from alttext.services.squarespace import SquarespaceClient

logger = logging.getLogger(__name__)


@dataclass
class ApplyItem:
    """An image whose stored alt text should go live."""

    product_id: str
    image_id: str


@dataclass
class ApplyResult:
    """Outcome of a bulk apply request."""

    applied_count: int = 0
    skipped_count: int = 0
    failed_image_ids: list[str] = field(default_factory=list)

    @property
    def message(self) -> str:
        return f"Applied {self.applied_count} alt texts to Squarespace."


class ApplyService:
    """Applies stored alt text to the store's images, one remote call per item.

    Applying is free. Items without local text are skipped, and a failed
    item is reported without affecting the rest.
    """

    def __init__(self, db: Session, squarespace: SquarespaceClient | None = None):
        self.db = db
        self._squarespace = squarespace

    def _client_for(self, store: Store) -> SquarespaceClient:
        return self._squarespace or SquarespaceClient(store.access_token)

    async def apply_batch(self, store: Store, items: list[ApplyItem]) -> ApplyResult:
        """Apply the final alt text of each item to Squarespace.

        Raises:
            NoItemsError: If items is empty
        """
        if not items:
            raise NoItemsError()

        client = self._client_for(store)
        result = ApplyResult()

        for item in items:
            record = get_alt_text_record(self.db, store.id, item.product_id, item.image_id)
            if record is None or not (record.final_alt_text or "").strip():
                result.skipped_count += 1
                continue

            try:
                await client.update_image_alt_text(
                    item.product_id, item.image_id, record.final_alt_text
                )
            except SquarespaceError as e:
                logger.error(f"Failed to apply alt text for image {item.image_id}: {e}")
                result.failed_image_ids.append(item.image_id)
                continue

            record.status = AltTextStatus.APPLIED.value
            record.applied_at = datetime.now(UTC)
            self.db.commit()
            result.applied_count += 1

        logger.info(
            f"Applied {result.applied_count}/{len(items)} alt texts for store {store.id} "
            f"({len(result.failed_image_ids)} failed, {result.skipped_count} skipped)"
        )
        return result
