"""
Discord webhook notifications for new applications.

Posts a formatted embed with Accept/Deny buttons to a Discord incoming
webhook. Submission-triggered notifications are best-effort: failures are
logged and never reach the submitting client. Button clicks are handled by
the Discord bot side, not by this service.
"""
import asyncio
import logging
from datetime import datetime
from typing import Optional, Set

import httpx

from app.core.exceptions import UpstreamWebhookError
from app.models.application import ApplicationRecord
from app.utils.timestamps import to_iso


logger = logging.getLogger(__name__)

EMBED_TITLE = "Flight Deck Application"
EMBED_COLOR = 0xD71921  # Emirates red
FIELD_VALUE_LIMIT = 1024  # Discord embed field value limit
DEFAULT_WEBHOOK_USERNAME = "Emirates Applications"

# Discord message component constants
ACTION_ROW = 1
BUTTON = 2
BUTTON_SUCCESS = 3
BUTTON_DANGER = 4


def _as_text(value) -> str:
    """Render a JSON value as embed text (null -> empty, booleans lowercase)"""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _code_block(value) -> str:
    return f"```{_as_text(value)}```"


def _truncate(value, limit: int = FIELD_VALUE_LIMIT) -> str:
    return _as_text(value)[:limit]


def build_application_embed(
    record: ApplicationRecord,
    issued_at: Optional[datetime] = None
) -> dict:
    """
    Build the Discord embed describing an application.

    Args:
        record: The submitted application
        issued_at: Embed timestamp (defaults to now)

    Returns:
        Embed dict: title, color, seven ordered fields, thumbnail, footer and
        an ISO-8601 timestamp. Motivation and experience detail are cut to
        1024 characters before being wrapped in a code block.
    """
    experience = _as_text(record.experience)

    return {
        "title": EMBED_TITLE,
        "color": EMBED_COLOR,
        "fields": [
            {"name": "Applicant Name", "value": _code_block(record.full_name), "inline": False},
            {"name": "Position", "value": _code_block(record.position), "inline": True},
            {"name": "Experience", "value": _code_block(f"{experience} hours"), "inline": True},
            {"name": "Email", "value": _code_block(record.email), "inline": False},
            {"name": "License Number", "value": _code_block(record.license_number), "inline": False},
            {"name": "Why Emirates?", "value": _code_block(_truncate(record.motivation)), "inline": False},
            {"name": "Previous Experience", "value": _code_block(_truncate(record.experience_detail)), "inline": False},
        ],
        "thumbnail": {"url": record.user_avatar},
        "footer": {"text": f"Application ID: {record.id}"},
        "timestamp": to_iso(issued_at),
    }


def build_webhook_payload(
    record: ApplicationRecord,
    username: str = DEFAULT_WEBHOOK_USERNAME,
    issued_at: Optional[datetime] = None
) -> dict:
    """
    Build the full webhook message: embed plus an Accept/Deny button row.

    The buttons carry custom_ids accept_{id} and deny_{id}.
    """
    return {
        "username": username,
        "embeds": [build_application_embed(record, issued_at)],
        "components": [
            {
                "type": ACTION_ROW,
                "components": [
                    {
                        "type": BUTTON,
                        "style": BUTTON_SUCCESS,
                        "label": "Accept",
                        "custom_id": f"accept_{record.id}",
                        "emoji": {"name": "✅"},
                    },
                    {
                        "type": BUTTON,
                        "style": BUTTON_DANGER,
                        "label": "Deny",
                        "custom_id": f"deny_{record.id}",
                        "emoji": {"name": "❌"},
                    },
                ],
            }
        ],
    }


class WebhookNotifier:
    """
    Service for sending application notifications to Discord webhooks.

    Responsibilities:
    - Construct the webhook payload (shared by both call sites)
    - Send POST request to the caller-supplied webhook URL
    - Log success/failure (no retries)

    Usage:
        notifier = WebhookNotifier(http_client)
        await notifier.send(record, url)           # raises on failure
        notifier.notify_in_background(record, url)  # fire-and-forget
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        username: str = DEFAULT_WEBHOOK_USERNAME,
        timeout: float = 10.0
    ):
        """
        Initialize webhook notifier.

        Args:
            http_client: Async HTTP client for making webhook requests
            username: Display name the webhook message is posted under
            timeout: Per-request deadline in seconds
        """
        self.http_client = http_client
        self.username = username
        self.timeout = timeout
        self._pending: Set[asyncio.Task] = set()

    async def send(self, record: ApplicationRecord, webhook_url: str) -> None:
        """
        Deliver one notification.

        Raises:
            UpstreamWebhookError: On transport error or non-2xx response
        """
        payload = build_webhook_payload(record, username=self.username)

        logger.info(f"📤 Sending application {record.id} to Discord webhook")

        try:
            response = await self.http_client.post(
                webhook_url,
                json=payload,
                timeout=self.timeout
            )
        except httpx.HTTPError as e:
            raise UpstreamWebhookError(
                "Failed to send webhook",
                details=str(e) or e.__class__.__name__
            ) from e

        if not response.is_success:
            raise UpstreamWebhookError(
                "Failed to send webhook",
                details=f"Request failed with status code {response.status_code}"
            )

        logger.info(
            f"✅ Webhook delivered - application_id: {record.id}, status: {response.status_code}"
        )

    async def notify(self, record: ApplicationRecord, webhook_url: str) -> bool:
        """
        Best-effort delivery.

        Returns:
            True if the webhook accepted the message, False otherwise.
            Failures are logged, never raised.
        """
        try:
            await self.send(record, webhook_url)
            return True

        except UpstreamWebhookError as e:
            logger.warning(
                f"⚠️ Webhook failed - application_id: {record.id}, error: {e.details}"
            )
            return False

        except Exception as e:
            logger.error(
                f"❌ Unexpected error sending webhook - application_id: {record.id}, error: {e}",
                exc_info=True
            )
            return False

    def notify_in_background(self, record: ApplicationRecord, webhook_url: str) -> asyncio.Task:
        """
        Schedule notify() without waiting for it.

        The task is referenced until it finishes so it is not garbage
        collected mid-flight; drain() awaits whatever is still running.
        """
        task = asyncio.create_task(self.notify(record, webhook_url))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def drain(self) -> None:
        """Wait for outstanding background notifications (used on shutdown)"""
        if self._pending:
            logger.info(f"Waiting for {len(self._pending)} pending webhook notification(s)")
            await asyncio.gather(*self._pending, return_exceptions=True)
