"""Endpoints for applying and editing alt text."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from alttext.api.dependencies import get_apply_service, get_current_store
from alttext.database import get_db
from alttext.models.store import Store
from alttext.schemas.alt_text import (
    AltTextEditRequest,
    AltTextEditResponse,
    ApplyRequest,
    ApplyResponse,
)
from alttext.services.alt_text_records import edit_alt_text
from alttext.services.apply_service import ApplyItem, ApplyService
from alttext.services.errors import NoItemsError

router = APIRouter(prefix="/api/v1/apply", tags=["apply"])


@router.post("", response_model=ApplyResponse)
async def apply_alt_texts(
    request: ApplyRequest,
    current_store: Annotated[Store, Depends(get_current_store)],
    service: Annotated[ApplyService, Depends(get_apply_service)],
):
    """Push stored alt text for the given images to Squarespace."""
    items = [ApplyItem(product_id=i.product_id, image_id=i.image_id) for i in request.items]

    try:
        result = await service.apply_batch(current_store, items)
    except NoItemsError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e

    return ApplyResponse(
        applied_count=result.applied_count,
        message=result.message,
        errors=result.failed_image_ids,
    )


@router.patch("", response_model=AltTextEditResponse)
async def edit_alt_text_locally(
    request: AltTextEditRequest,
    current_store: Annotated[Store, Depends(get_current_store)],
    db: Annotated[Session, Depends(get_db)],
):
    """Edit one image's alt text locally. Free, and not applied until requested."""
    updated = edit_alt_text(
        db, current_store.id, request.product_id, request.image_id, request.alt_text
    )
    return AltTextEditResponse(updated=updated)
