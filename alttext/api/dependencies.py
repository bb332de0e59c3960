"""FastAPI dependencies for store sessions and services."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from alttext.database import get_db
from alttext.models.store import Store
from alttext.services.apply_service import ApplyService
from alttext.services.bulk_generation import BulkGenerationService
from alttext.services.session import decode_session_token
from alttext.services.vision import VisionService, get_vision_service

security = HTTPBearer()


def get_current_store(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> Store:
    """Get the connected store from the session token."""
    payload = decode_session_token(credentials.credentials)

    store_id = payload.get("sub") if payload else None
    if store_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid session",
            headers={"WWW-Authenticate": "Bearer"},
        )

    store = db.query(Store).filter(Store.id == int(store_id)).first()
    if store is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Store not found",
        )

    return store


def get_bulk_generation_service(
    db: Annotated[Session, Depends(get_db)],
    vision_service: Annotated[VisionService, Depends(get_vision_service)],
) -> BulkGenerationService:
    """Get bulk generation service with dependencies."""
    return BulkGenerationService(db, vision_service=vision_service)


def get_apply_service(
    db: Annotated[Session, Depends(get_db)],
) -> ApplyService:
    """Get apply service with dependencies."""
    return ApplyService(db)
