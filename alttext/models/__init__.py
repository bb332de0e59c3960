"""SQLAlchemy models."""

from alttext.models.alt_text import AltTextRecord
from alttext.models.store import Store
from alttext.models.usage_record import UsageRecord

__all__ = [
    "Store",
    "AltTextRecord",
    "UsageRecord",
]
