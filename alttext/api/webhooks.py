"""Webhook endpoint for Squarespace Commerce notifications."""

import hashlib
import hmac
import json
import logging

from fastapi import APIRouter, Request

from alttext.config import get_settings
from alttext.services.auto_processor import ProductEvent
from alttext.tasks.auto_process import auto_process_product

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/webhooks", tags=["webhooks"])

SIGNATURE_HEADER = "Squarespace-Signature"


def verify_signature(body: bytes, signature: str | None, secret: str) -> bool:
    """Check the HMAC-SHA256 signature Squarespace computes over the raw body.

    The subscription secret is hex encoded, as is the signature.
    """
    if not signature:
        return False
    expected = hmac.new(bytes.fromhex(secret), body, hashlib.sha256).hexdigest()
    return hmac.compare_digest(expected, signature.lower())


@router.post("/squarespace")
async def handle_squarespace_webhook(request: Request) -> dict:
    """Queue auto-processing for product create/update notifications.

    Always acknowledges: failures are logged, never reported to Squarespace.
    """
    try:
        body = await request.body()

        secret = get_settings().squarespace_webhook_secret
        if secret and not verify_signature(body, request.headers.get(SIGNATURE_HEADER), secret):
            logger.warning("Rejected Squarespace webhook with invalid signature")
            return {"ok": True}

        payload = json.loads(body)
        event = ProductEvent.from_payload(payload) if isinstance(payload, dict) else None
        if event is None:
            logger.info("Ignoring Squarespace webhook that is not about a product")
            return {"ok": True}

        logger.info(
            f"Received {event.topic} for product {event.product_id} on site {event.site_id}"
        )
        auto_process_product.delay(payload)

    except Exception as e:
        logger.error(f"Error handling Squarespace webhook: {e}", exc_info=True)

    return {"ok": True}
