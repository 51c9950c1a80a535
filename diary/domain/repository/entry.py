"""Entry repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from diary.domain.model.entry import Entry
from diary.domain.value import EntryId, JournalId, UserId


class EntryRepository(ABC):
    """Repository for Entry aggregates (including their media)."""

    @abstractmethod
    async def find_by_id(self, entry_id: EntryId, user_id: UserId) -> Optional[Entry]:
        """Find an entry owned by the given user.

        Args:
            entry_id: Entry ID
            user_id: Owner ID

        Returns:
            The entry if it exists and belongs to the user, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_user(
        self,
        user_id: UserId,
        journal_id: JournalId | None = None,
        limit: int = 10,
        offset: int = 0,
    ) -> list[Entry]:
        """List a user's entries, newest first.

        Args:
            user_id: Owner ID
            journal_id: Only return entries in this journal when given
            limit: Maximum number of entries to return
            offset: Number of entries to skip

        Returns:
            List of entries
        """
        pass

    @abstractmethod
    async def count_by_user(
        self, user_id: UserId, journal_id: JournalId | None = None
    ) -> int:
        """Count a user's entries, optionally within one journal."""
        pass

    @abstractmethod
    async def search(
        self, user_id: UserId, query: str, limit: int = 10, offset: int = 0
    ) -> tuple[list[Entry], int]:
        """Case-insensitive substring search on title and description.

        Args:
            user_id: Owner ID
            query: Text to look for
            limit: Maximum number of entries to return
            offset: Number of entries to skip

        Returns:
            Page of matching entries (newest first) and the total match count
        """
        pass

    @abstractmethod
    async def count_media(self, user_id: UserId) -> int:
        """Count media items across all of a user's entries."""
        pass

    @abstractmethod
    async def count_by_month(
        self, user_id: UserId, limit: int = 12
    ) -> list[tuple[int, int, int]]:
        """Count a user's entries per calendar month.

        Args:
            user_id: Owner ID
            limit: Number of most recent months (with entries) to return

        Returns:
            (year, month, count) tuples, most recent month first
        """
        pass

    @abstractmethod
    async def save(self, entry: Entry) -> Entry:
        """Save an entry and its media (create or update)."""
        pass

    @abstractmethod
    async def delete(self, entry_id: EntryId) -> None:
        """Delete an entry and its media records."""
        pass
