"""AltTextRecord model for generated and applied image alt text."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from alttext.database import Base
from alttext.models.enums import AltTextStatus
from alttext.models.mixins import TimestampMixin


class AltTextRecord(Base, TimestampMixin):
    """Local alt text for one image of one product in a store."""

    __tablename__ = "alt_texts"
    __table_args__ = (
        UniqueConstraint(
            "store_id", "product_id", "image_id", name="uq_alt_texts_store_product_image"
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    store_id = Column(Integer, ForeignKey("stores.id"), nullable=False, index=True)
    product_id = Column(String(255), nullable=False)
    product_name = Column(String(500), nullable=True)
    image_id = Column(String(255), nullable=False)
    image_url = Column(Text, nullable=True)

    generated_alt_text = Column(Text, nullable=True)  # Last model output after shaping
    final_alt_text = Column(Text, nullable=True)  # What gets applied; may be hand-edited
    status = Column(String(20), nullable=False, default=AltTextStatus.GENERATED.value)
    applied_at = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    store = relationship("Store", backref="alt_texts")
