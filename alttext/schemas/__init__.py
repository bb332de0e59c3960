"""Pydantic schemas for API requests and responses."""

from alttext.schemas.alt_text import (
    AltTextEditRequest,
    AltTextEditResponse,
    ApplyItemRequest,
    ApplyRequest,
    ApplyResponse,
    GenerateItemRequest,
    GenerateItemError,
    GenerateRequest,
    GenerateResponse,
)
from alttext.schemas.store import StoreSettings, StoreSettingsUpdate, StoreSummary

__all__ = [
    "GenerateItemRequest",
    "GenerateRequest",
    "GenerateItemError",
    "GenerateResponse",
    "ApplyItemRequest",
    "ApplyRequest",
    "ApplyResponse",
    "AltTextEditRequest",
    "AltTextEditResponse",
    "StoreSettings",
    "StoreSettingsUpdate",
    "StoreSummary",
]
