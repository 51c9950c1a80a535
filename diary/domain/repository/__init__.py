"""Repository interfaces for the diary domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from diary.domain.repository.entry import EntryRepository
from diary.domain.repository.journal import JournalRepository
from diary.domain.repository.user import UserMutation, UserRepository

__all__ = [
    "UserRepository",
    "UserMutation",
    "JournalRepository",
    "EntryRepository",
]
