"""Helpers for reading and writing AltTextRecord rows."""

from datetime import UTC, datetime

from sqlalchemy.orm import Session

from alttext.models.alt_text import AltTextRecord
from alttext.models.enums import AltTextStatus


def get_alt_text_record(
    db: Session, store_id: int, product_id: str, image_id: str
) -> AltTextRecord | None:
    """Get the record for one image of one product, if any."""
    return (
        db.query(AltTextRecord)
        .filter(
            AltTextRecord.store_id == store_id,
            AltTextRecord.product_id == product_id,
            AltTextRecord.image_id == image_id,
        )
        .first()
    )


def upsert_alt_text_record(
    db: Session,
    store_id: int,
    product_id: str,
    image_id: str,
    alt_text: str,
    status: AltTextStatus = AltTextStatus.GENERATED,
    product_name: str | None = None,
    image_url: str | None = None,
) -> AltTextRecord:
    """Create or overwrite the record keyed by (store, product, image).

    Sets both generated and final text. An APPLIED status stamps applied_at,
    a GENERATED one clears it. Changes are flushed, not committed.
    """
    applied_at = datetime.now(UTC) if status == AltTextStatus.APPLIED else None

    record = get_alt_text_record(db, store_id, product_id, image_id)
    if record is None:
        record = AltTextRecord(store_id=store_id, product_id=product_id, image_id=image_id)
        db.add(record)

    record.generated_alt_text = alt_text
    record.final_alt_text = alt_text
    record.status = status.value
    record.applied_at = applied_at
    if product_name is not None:
        record.product_name = product_name
    if image_url is not None:
        record.image_url = image_url
    db.flush()
    return record


def edit_alt_text(db: Session, store_id: int, product_id: str, image_id: str, text: str) -> bool:
    """Overwrite an image's alt text by hand.

    No remote call and no credits. The record goes back to GENERATED so it
    can be reviewed and applied again.

    Returns:
        Whether a record existed to edit
    """
    record = get_alt_text_record(db, store_id, product_id, image_id)
    if record is None:
        return False

    record.generated_alt_text = text
    record.final_alt_text = text
    record.status = AltTextStatus.GENERATED.value
    record.applied_at = None
    db.commit()
    return True
