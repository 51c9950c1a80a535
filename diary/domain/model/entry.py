"""Entry aggregate.

An entry is a dated diary record with optional formatting, location and
attached media. It may belong to one of its owner's journals.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from diary.domain.model.common import DomainModel
from diary.domain.model.user import utcnow
from diary.domain.value import EntryId, FormatSpan, JournalId, Location, MediaId, UserId
from diary.domain.value.types import MediaType


class Media(DomainModel):
    """File attached to an entry."""

    id: MediaId
    type: MediaType
    url: str
    storage_key: str  # Key used by the media storage to delete the file
    filename: Optional[str] = None
    size: Optional[int] = Field(default=None, ge=0)
    duration: Optional[float] = Field(default=None, ge=0)


class Entry(DomainModel):
    """Diary entry owned by one user."""

    id: EntryId
    user_id: UserId
    journal_id: Optional[JournalId] = None
    title: str = Field(default="", max_length=200)
    description: str = ""
    format_spans: list[FormatSpan] = Field(default_factory=list)
    media: list[Media] = Field(default_factory=list)
    location: Location = Field(default_factory=Location)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @property
    def media_count(self) -> int:
        return len(self.media)
