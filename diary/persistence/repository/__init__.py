"""PostgreSQL repository implementations."""

from diary.persistence.repository.entry import PostgresEntryRepository
from diary.persistence.repository.journal import PostgresJournalRepository
from diary.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresUserRepository",
    "PostgresJournalRepository",
    "PostgresEntryRepository",
]
