"""Journal response models."""

from datetime import datetime

from pydantic import BaseModel

from diary.domain.model import Journal


class JournalItem(BaseModel):
    """Journal in responses."""

    id: str
    name: str
    description: str | None
    color: str
    icon: str | None
    entry_count: int = 0
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_journal(cls, journal: Journal, entry_count: int = 0) -> "JournalItem":
        return cls(
            id=str(journal.id),
            name=journal.name,
            description=journal.description,
            color=journal.color,
            icon=journal.icon,
            entry_count=entry_count,
            created_at=journal.created_at,
            updated_at=journal.updated_at,
        )
