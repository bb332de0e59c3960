"""Celery task for webhook-triggered auto-processing."""

import asyncio
import logging

import redis
from redis.exceptions import LockNotOwnedError

from alttext.celery_app import app as celery_app
from alttext.config import get_settings
from alttext.database import SessionLocal
from alttext.services.auto_processor import AutoProcessor, ProductEvent

logger = logging.getLogger(__name__)

_redis: redis.Redis | None = None


def get_redis() -> redis.Redis:
    """Get the Redis client used for per-store locks."""
    global _redis
    if _redis is None:
        _redis = redis.from_url(get_settings().redis_url)
    return _redis


def store_lock_name(site_id: str) -> str:
    """Lock serializing auto-process runs (and their credit debits) per store."""
    return f"alttext:auto-process:{site_id}"


@celery_app.task(name="tasks.auto_process_product")
def auto_process_product(payload: dict) -> dict:
    """Generate and apply alt text for a product from a Squarespace webhook.

    Runs for one store at a time; events for other stores proceed in
    parallel on other workers.

    Args:
        payload: The webhook notification body

    Returns:
        Dict with the final state and counts
    """
    event = ProductEvent.from_payload(payload)
    if event is None:
        return {"state": "ignored", "reason": "not a product event"}

    settings = get_settings()
    lock = get_redis().lock(
        store_lock_name(event.site_id),
        timeout=settings.auto_process_lock_timeout,
        # Give up waiting well before the soft time limit
        blocking_timeout=settings.task_soft_time_limit // 2,
    )

    db = SessionLocal()
    try:
        if not lock.acquire():
            logger.warning(f"Timed out waiting for auto-process lock of site {event.site_id}")
            return {"state": "ignored", "reason": "store busy"}
        try:
            outcome = asyncio.run(AutoProcessor(db).process_event(payload))
        finally:
            try:
                lock.release()
            except LockNotOwnedError:
                logger.warning(
                    f"Auto-process lock of site {event.site_id} expired during the run"
                )

        return {
            "state": outcome.state.value,
            "reason": outcome.reason,
            "selected": outcome.selected,
            "processed": outcome.processed,
            "failed": outcome.failed,
        }

    except Exception as e:
        logger.exception(f"Error auto-processing product {event.product_id}")
        return {"state": "failed", "error": str(e)}
    finally:
        db.close()
