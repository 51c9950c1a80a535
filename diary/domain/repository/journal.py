"""Journal repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from diary.domain.model.journal import Journal
from diary.domain.value import JournalId, UserId


class JournalRepository(ABC):
    """Repository for Journal entities."""

    @abstractmethod
    async def find_by_id(
        self, journal_id: JournalId, user_id: UserId
    ) -> Optional[Journal]:
        """Find a journal owned by the given user.

        Args:
            journal_id: Journal ID
            user_id: Owner ID

        Returns:
            The journal if it exists and belongs to the user, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_user(self, user_id: UserId) -> list[Journal]:
        """List a user's journals, oldest first."""
        pass

    @abstractmethod
    async def count_by_user(self, user_id: UserId) -> int:
        """Count a user's journals."""
        pass

    @abstractmethod
    async def count_entries(self, journal_ids: list[JournalId]) -> dict[JournalId, int]:
        """Count entries per journal.

        Args:
            journal_ids: Journals to count entries for

        Returns:
            Mapping of journal ID to entry count (journals without entries map to 0)
        """
        pass

    @abstractmethod
    async def save(self, journal: Journal) -> Journal:
        """Save a journal (create or update)."""
        pass

    @abstractmethod
    async def delete(self, journal_id: JournalId) -> None:
        """Delete a journal and detach its entries.

        Entries that referenced the journal keep existing with no journal.
        """
        pass
