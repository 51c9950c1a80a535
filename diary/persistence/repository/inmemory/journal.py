"""In-memory journal repository for testing."""

from typing import Optional

from diary.domain.model import Journal
from diary.domain.repository import JournalRepository
from diary.domain.value import JournalId, UserId

from .entry import InMemoryEntryRepository


class InMemoryJournalRepository(JournalRepository):
    """In-memory implementation of JournalRepository for testing.

    Shares the entry store so entry counts and journal deletion behave
    like the SQL implementation.
    """

    def __init__(self, entry_repository: InMemoryEntryRepository) -> None:
        self._journals: dict[JournalId, Journal] = {}
        self._entry_repository = entry_repository

    async def find_by_id(
        self, journal_id: JournalId, user_id: UserId
    ) -> Optional[Journal]:
        """Find a journal owned by the given user."""
        journal = self._journals.get(journal_id)
        if journal and journal.user_id == user_id:
            return journal
        return None

    async def find_by_user(self, user_id: UserId) -> list[Journal]:
        """List a user's journals, oldest first."""
        journals = [j for j in self._journals.values() if j.user_id == user_id]
        return sorted(journals, key=lambda j: j.created_at)

    async def count_by_user(self, user_id: UserId) -> int:
        """Count a user's journals."""
        return len([j for j in self._journals.values() if j.user_id == user_id])

    async def count_entries(self, journal_ids: list[JournalId]) -> dict[JournalId, int]:
        """Count entries per journal."""
        counts = {journal_id: 0 for journal_id in journal_ids}
        for entry in self._entry_repository.all_entries():
            if entry.journal_id in counts:
                counts[entry.journal_id] += 1
        return counts

    async def save(self, journal: Journal) -> Journal:
        """Save or update a journal."""
        self._journals[journal.id] = journal
        return journal

    async def delete(self, journal_id: JournalId) -> None:
        """Delete a journal and detach its entries."""
        self._journals.pop(journal_id, None)
        self._entry_repository.detach_journal(journal_id)
