"""
Core interfaces for the careers relay.

The HTTP layer and ApplicationService only depend on these abstractions,
so the in-memory store can be swapped for a database-backed one.
"""
from abc import ABC, abstractmethod
from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from app.models.application import ApplicationRecord, StatusUpdate


class IApplicationRepository(ABC):
    """
    Interface for application record storage.

    Implementations must guarantee read-after-write per id: once put() or
    update() returns, every later read observes the write.
    """

    @abstractmethod
    async def put(self, record: 'ApplicationRecord') -> 'ApplicationRecord':
        """
        Insert or replace the record stored under record.id.

        Raises:
            BadRequestError: If record.id is missing
        """
        pass

    @abstractmethod
    async def get(self, application_id: str) -> Optional['ApplicationRecord']:
        """Get a record by id, or None"""
        pass

    @abstractmethod
    async def get_all(self) -> List['ApplicationRecord']:
        """Get all records in insertion order"""
        pass

    @abstractmethod
    async def get_by_owner(self, user_id: str) -> List['ApplicationRecord']:
        """Get the records whose user_id matches (empty list if none)"""
        pass

    @abstractmethod
    async def update(self, application_id: str, patch: 'StatusUpdate') -> 'ApplicationRecord':
        """
        Apply a review decision (status, reviewed_at, reviewed_by only).

        Raises:
            NotFoundError: If no record exists for application_id
        """
        pass
