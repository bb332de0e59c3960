"""Usage record model, an append-only audit of credit spend."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, func

from alttext.database import Base


class UsageRecord(Base):
    """One credit charge. Written once, never updated."""

    __tablename__ = "usage_records"

    id = Column(Integer, primary_key=True, index=True)
    store_id = Column(Integer, ForeignKey("stores.id"), nullable=False, index=True)
    action = Column(String(30), nullable=False)  # UsageAction
    credits_used = Column(Integer, nullable=False, default=0)
    product_id = Column(String(255), nullable=True)
    image_id = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
