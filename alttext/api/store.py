"""Store summary and settings endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from alttext.api.dependencies import get_current_store
from alttext.database import get_db
from alttext.models.alt_text import AltTextRecord
from alttext.models.enums import AltTextStatus
from alttext.models.store import Store
from alttext.plans import get_plan_credits, get_plan_name
from alttext.schemas.store import StoreSettings, StoreSettingsUpdate, StoreSummary

router = APIRouter(prefix="/api/v1", tags=["store"])


@router.get("/store", response_model=StoreSummary)
async def get_store_summary(
    current_store: Annotated[Store, Depends(get_current_store)],
    db: Annotated[Session, Depends(get_db)],
):
    """Get plan, credit balance, preferences and alt text counts."""
    records = db.query(AltTextRecord).filter(AltTextRecord.store_id == current_store.id)
    total_generated = records.count()
    total_applied = records.filter(AltTextRecord.status == AltTextStatus.APPLIED.value).count()

    return StoreSummary(
        site_id=current_store.site_id,
        site_name=current_store.site_name,
        plan=current_store.plan,
        plan_name=get_plan_name(current_store.plan),
        credits_remaining=current_store.credits_remaining,
        credits_used=current_store.credits_used,
        total_credits=get_plan_credits(current_store.plan),
        settings=StoreSettings.model_validate(current_store),
        total_generated=total_generated,
        total_applied=total_applied,
    )


@router.get("/settings", response_model=StoreSettings)
async def get_store_settings(
    current_store: Annotated[Store, Depends(get_current_store)],
):
    """Get alt text preferences."""
    return current_store


@router.post("/settings", response_model=StoreSettings)
async def update_store_settings(
    settings_data: StoreSettingsUpdate,
    current_store: Annotated[Store, Depends(get_current_store)],
    db: Annotated[Session, Depends(get_db)],
):
    """Update alt text preferences."""
    current_store.alt_text_style = settings_data.alt_text_style
    current_store.default_language = settings_data.default_language
    current_store.auto_process = settings_data.auto_process
    db.commit()
    db.refresh(current_store)
    return current_store
