"""In-memory repository implementations for testing."""

from .entry import InMemoryEntryRepository
from .journal import InMemoryJournalRepository
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryEntryRepository",
    "InMemoryJournalRepository",
    "InMemoryUserRepository",
]
