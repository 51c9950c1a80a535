"""Entry response models."""

from datetime import datetime

from pydantic import BaseModel

from diary.domain.model import Entry, Media
from diary.domain.service import EntryPage
from diary.domain.value import FormatSpan, Location
from diary.domain.value.types import MediaType


class MediaItem(BaseModel):
    """Attached media in responses."""

    id: str
    type: MediaType
    url: str
    filename: str | None
    size: int | None
    duration: float | None

    @classmethod
    def from_media(cls, media: Media) -> "MediaItem":
        return cls(
            id=str(media.id),
            type=media.type,
            url=media.url,
            filename=media.filename,
            size=media.size,
            duration=media.duration,
        )


class EntryItem(BaseModel):
    """Entry in responses."""

    id: str
    journal_id: str | None
    title: str
    description: str
    format_spans: list[FormatSpan]
    media: list[MediaItem]
    location: Location
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entry(cls, entry: Entry) -> "EntryItem":
        return cls(
            id=str(entry.id),
            journal_id=str(entry.journal_id) if entry.journal_id else None,
            title=entry.title,
            description=entry.description,
            format_spans=entry.format_spans,
            media=[MediaItem.from_media(m) for m in entry.media],
            location=entry.location,
            created_at=entry.created_at,
            updated_at=entry.updated_at,
        )


class Pagination(BaseModel):
    total: int
    page: int
    limit: int
    total_pages: int


class EntryListResponse(BaseModel):
    """Page of entries."""

    entries: list[EntryItem]
    pagination: Pagination

    @classmethod
    def from_page(cls, page: EntryPage) -> "EntryListResponse":
        return cls(
            entries=[EntryItem.from_entry(e) for e in page.entries],
            pagination=Pagination(
                total=page.total,
                page=page.page,
                limit=page.limit,
                total_pages=page.total_pages,
            ),
        )
