"""
Application Service - orchestration for job-application submissions.

Keeps the route handlers thin:
- Submission stores the record, then schedules the Discord notification
- Listing and owner filtering
- Review status updates
"""

from typing import List
import logging

from app.core.interfaces import IApplicationRepository
from app.models.application import ApplicationRecord, StatusUpdate
from app.services.webhook_notifier import WebhookNotifier

logger = logging.getLogger(__name__)


class ApplicationService:
    """Use cases for application records"""

    def __init__(self, repository: IApplicationRepository, notifier: WebhookNotifier):
        self.repository = repository
        self.notifier = notifier

    async def submit(self, record: ApplicationRecord) -> ApplicationRecord:
        """
        Store an application and notify its webhook, if any.

        The notification runs as a background task: the caller gets the
        stored record back whether or not the webhook delivery succeeds.
        """
        stored = await self.repository.put(record)

        if stored.webhook_url:
            self.notifier.notify_in_background(stored, stored.webhook_url)
        else:
            logger.debug(f"No webhook URL on application {stored.id}, skipping notification")

        return stored

    async def list_all(self) -> List[ApplicationRecord]:
        return await self.repository.get_all()

    async def list_for_user(self, user_id: str) -> List[ApplicationRecord]:
        return await self.repository.get_by_owner(user_id)

    async def update_status(self, application_id: str, patch: StatusUpdate) -> ApplicationRecord:
        return await self.repository.update(application_id, patch)
