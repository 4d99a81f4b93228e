"""
In-memory application store.

WARNING: Records live only in process memory and are lost on restart.
There is no eviction and no persistence; a single asyncio.Lock serializes
writes so that put/update for an id completes before any later read.
"""
import asyncio
import logging
from typing import Dict, List, Optional

from app.core.exceptions import BadRequestError, NotFoundError
from app.core.interfaces import IApplicationRepository
from app.models.application import ApplicationRecord, StatusUpdate
from app.utils.timestamps import to_iso

logger = logging.getLogger(__name__)


class InMemoryApplicationRepository(IApplicationRepository):
    """
    Process-lifetime mapping of application id -> ApplicationRecord.

    - Last write wins: put() with an existing id replaces the record
      (no merge) and keeps its original position in listings.
    - update() is copy-on-write: the stored record is replaced by a new
      object, so records already handed out never change underneath callers.
    """

    def __init__(self):
        self._records: Dict[str, ApplicationRecord] = {}
        self._lock = asyncio.Lock()

    async def put(self, record: ApplicationRecord) -> ApplicationRecord:
        if not record.id:
            raise BadRequestError("Application ID is required")

        async with self._lock:
            replaced = record.id in self._records
            self._records[record.id] = record

        if replaced:
            logger.info(f"Replaced application {record.id}")
        else:
            logger.info(f"Stored application {record.id} for user {record.user_id}")
        return record

    async def get(self, application_id: str) -> Optional[ApplicationRecord]:
        async with self._lock:
            return self._records.get(application_id)

    async def get_all(self) -> List[ApplicationRecord]:
        async with self._lock:
            return list(self._records.values())

    async def get_by_owner(self, user_id: str) -> List[ApplicationRecord]:
        async with self._lock:
            return [
                record for record in self._records.values()
                if record.user_id == user_id
            ]

    async def update(self, application_id: str, patch: StatusUpdate) -> ApplicationRecord:
        async with self._lock:
            current = self._records.get(application_id)
            if current is None:
                raise NotFoundError("Application not found")

            updated = current.model_copy(
                update={
                    "status": patch.status,
                    "reviewed_at": to_iso(),
                    "reviewed_by": patch.reviewed_by,
                }
            )
            self._records[application_id] = updated

        logger.info(
            f"Application {application_id} marked '{patch.status}' by {patch.reviewed_by}"
        )
        return updated

    async def count(self) -> int:
        async with self._lock:
            return len(self._records)
