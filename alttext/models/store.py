"""Store model."""

from sqlalchemy import Boolean, CheckConstraint, Column, Integer, String, Text

from alttext.database import Base
from alttext.models.enums import AltTextStyle
from alttext.models.mixins import TimestampMixin


class Store(Base, TimestampMixin):
    """A connected Squarespace website and its credit balance.

    credits_remaining and credits_used are only written by CreditLedger.
    """

    __tablename__ = "stores"
    __table_args__ = (
        CheckConstraint("credits_remaining >= 0", name="ck_stores_credits_remaining_non_negative"),
    )

    id = Column(Integer, primary_key=True, index=True)
    site_id = Column(String(255), unique=True, nullable=False, index=True)
    site_name = Column(String(255), nullable=True)
    access_token = Column(Text, nullable=False)
    plan = Column(String(20), nullable=False, default="FREE")

    credits_remaining = Column(Integer, nullable=False, default=100)
    credits_used = Column(Integer, nullable=False, default=0)

    # Preferences
    alt_text_style = Column(String(20), nullable=False, default=AltTextStyle.BALANCED.value)
    default_language = Column(String(10), nullable=False, default="en")
    auto_process = Column(Boolean, nullable=False, default=False)
