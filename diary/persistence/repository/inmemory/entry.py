"""In-memory entry repository for testing."""

from collections import Counter
from typing import Optional

from diary.domain.model import Entry
from diary.domain.repository import EntryRepository
from diary.domain.value import EntryId, JournalId, UserId


class InMemoryEntryRepository(EntryRepository):
    """In-memory implementation of EntryRepository for testing."""

    def __init__(self) -> None:
        self._entries: dict[EntryId, Entry] = {}

    def all_entries(self) -> list[Entry]:
        return list(self._entries.values())

    def detach_journal(self, journal_id: JournalId) -> None:
        """Clear the journal reference on every entry of a journal."""
        for entry_id, entry in list(self._entries.items()):
            if entry.journal_id == journal_id:
                self._entries[entry_id] = entry.model_copy(update={"journal_id": None})

    def _owned(self, user_id: UserId, journal_id: JournalId | None = None) -> list[Entry]:
        entries = [
            e
            for e in self._entries.values()
            if e.user_id == user_id
            and (journal_id is None or e.journal_id == journal_id)
        ]
        return sorted(entries, key=lambda e: e.created_at, reverse=True)

    async def find_by_id(self, entry_id: EntryId, user_id: UserId) -> Optional[Entry]:
        """Find an entry owned by the given user."""
        entry = self._entries.get(entry_id)
        if entry and entry.user_id == user_id:
            return entry
        return None

    async def find_by_user(
        self,
        user_id: UserId,
        journal_id: JournalId | None = None,
        limit: int = 10,
        offset: int = 0,
    ) -> list[Entry]:
        """List a user's entries, newest first."""
        return self._owned(user_id, journal_id)[offset : offset + limit]

    async def count_by_user(
        self, user_id: UserId, journal_id: JournalId | None = None
    ) -> int:
        """Count a user's entries."""
        return len(self._owned(user_id, journal_id))

    async def search(
        self, user_id: UserId, query: str, limit: int = 10, offset: int = 0
    ) -> tuple[list[Entry], int]:
        """Case-insensitive substring search on title and description."""
        needle = query.lower()
        matches = [
            e
            for e in self._owned(user_id)
            if needle in e.title.lower() or needle in e.description.lower()
        ]
        return matches[offset : offset + limit], len(matches)

    async def count_media(self, user_id: UserId) -> int:
        """Count media items across a user's entries."""
        return sum(e.media_count for e in self._owned(user_id))

    async def count_by_month(
        self, user_id: UserId, limit: int = 12
    ) -> list[tuple[int, int, int]]:
        """Count entries per calendar month, most recent first."""
        counts = Counter(
            (e.created_at.year, e.created_at.month) for e in self._owned(user_id)
        )
        months = sorted(counts, reverse=True)[:limit]
        return [(year, month, counts[(year, month)]) for year, month in months]

    async def save(self, entry: Entry) -> Entry:
        """Save or update an entry."""
        self._entries[entry.id] = entry
        return entry

    async def delete(self, entry_id: EntryId) -> None:
        """Delete an entry."""
        self._entries.pop(entry_id, None)
