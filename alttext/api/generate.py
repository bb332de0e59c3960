"""Bulk alt text generation endpoint."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from alttext.api.dependencies import get_bulk_generation_service, get_current_store
from alttext.models.store import Store
from alttext.schemas.alt_text import GenerateItemError, GenerateRequest, GenerateResponse
from alttext.services.bulk_generation import BulkGenerationService, GenerationItem
from alttext.services.errors import BatchGenerationError, InsufficientCreditsError, NoItemsError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/generate", tags=["generate"])


@router.post("", response_model=GenerateResponse)
async def generate_alt_texts(
    request: GenerateRequest,
    current_store: Annotated[Store, Depends(get_current_store)],
    service: Annotated[BulkGenerationService, Depends(get_bulk_generation_service)],
):
    """Generate alt text for a batch of images.

    Each image costs one credit, charged only if generation succeeds. The
    whole batch must be affordable up front.
    """
    items = [GenerationItem(**item.model_dump()) for item in request.items]

    try:
        result = await service.generate_batch(current_store, items)
    except NoItemsError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except InsufficientCreditsError as e:
        raise HTTPException(
            status_code=status.HTTP_402_PAYMENT_REQUIRED,
            detail={"message": str(e), "required": e.required, "available": e.available},
        ) from e
    except BatchGenerationError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e)
        ) from e

    return GenerateResponse(
        success_count=result.success_count,
        message=result.message,
        errors=[
            GenerateItemError(product_id=f.product_id, image_id=f.image_id, error=f.error)
            for f in result.failures
        ],
    )
