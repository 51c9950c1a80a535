"""Domain model entities for the diary."""

from diary.domain.model.entry import Entry, Media
from diary.domain.model.journal import Journal
from diary.domain.model.user import User

__all__ = [
    "User",
    "Journal",
    "Entry",
    "Media",
]
