"""Store settings and summary schemas."""

from pydantic import BaseModel, ConfigDict, field_validator

from alttext.models.enums import AltTextStyle
from alttext.services.prompts import DEFAULT_LANGUAGE, LANGUAGE_NAMES


class StoreSettings(BaseModel):
    """Alt text preferences of a store."""

    model_config = ConfigDict(from_attributes=True)

    alt_text_style: str
    default_language: str
    auto_process: bool


class StoreSettingsUpdate(BaseModel):
    """Update store preferences. Unknown styles and languages fall back to defaults."""

    alt_text_style: str = AltTextStyle.BALANCED.value
    default_language: str = DEFAULT_LANGUAGE
    auto_process: bool = False

    @field_validator("alt_text_style", mode="before")
    @classmethod
    def fallback_style(cls, value):
        valid = {style.value for style in AltTextStyle}
        return value if value in valid else AltTextStyle.BALANCED.value

    @field_validator("default_language", mode="before")
    @classmethod
    def fallback_language(cls, value):
        return value if value in LANGUAGE_NAMES else DEFAULT_LANGUAGE


class StoreSummary(BaseModel):
    """Plan, credits, preferences and alt text counts for the dashboard."""

    site_id: str
    site_name: str | None
    plan: str
    plan_name: str
    credits_remaining: int
    credits_used: int
    total_credits: int
    settings: StoreSettings
    total_generated: int
    total_applied: int
