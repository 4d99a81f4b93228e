"""
Standalone webhook endpoint (DEPRECATED - use POST /api/applications).

Kept for older frontends that post the application and the webhook URL
separately. Unlike the submission path, delivery is awaited and failures
are reported to the caller. Nothing is stored.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from app.api.dependencies import get_webhook_notifier
from app.core.exceptions import BadRequestError, UpstreamWebhookError
from app.models.application import ApplicationRecord
from app.services.webhook_notifier import WebhookNotifier

router = APIRouter()
logger = logging.getLogger(__name__)


class WebhookApplicationRequest(BaseModel):
    """Application plus the Discord webhook to notify"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    application: Optional[ApplicationRecord] = None
    webhook_url: Optional[str] = None


@router.post("/webhook/application", deprecated=True)
async def send_application_webhook(
    request: Optional[WebhookApplicationRequest] = None,
    notifier: WebhookNotifier = Depends(get_webhook_notifier)
):
    """
    Send an application to a Discord webhook and wait for the result.

    Errors:
        400 if application or webhookUrl is missing
        500 with {error, details} if Discord does not accept the message
    """
    if request is None or not request.application or not request.webhook_url:
        raise BadRequestError("Application data and webhook URL required")

    logger.warning("Deprecated endpoint /api/webhook/application called - use /api/applications")

    try:
        await notifier.send(request.application, request.webhook_url)
    except UpstreamWebhookError as e:
        logger.error(f"Webhook Error: {e.details}")
        raise

    return {"success": True, "message": "Application sent to Discord"}
