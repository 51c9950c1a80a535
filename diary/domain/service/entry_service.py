"""Entry domain service."""

from dataclasses import dataclass
from datetime import datetime, timezone
from math import ceil
from uuid import uuid4

import logfire

from diary.domain.error import NotFoundError, ValidationError
from diary.domain.model import Entry, Media
from diary.domain.repository import EntryRepository, JournalRepository
from diary.domain.value import EntryId, JournalId, MediaId, MediaType, UserId

from .base import Service
from .storage_service import MediaStorage


@dataclass(frozen=True)
class Upload:
    """File received from a client."""

    filename: str
    content_type: str
    data: bytes


@dataclass(frozen=True)
class EntryPage:
    """One page of entries."""

    entries: list[Entry]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return ceil(self.total / self.limit) if self.limit else 0


@dataclass(frozen=True)
class MonthCount:
    year: int
    month: int
    count: int


@dataclass(frozen=True)
class EntryStats:
    """Aggregate figures about a user's entries."""

    total_entries: int
    total_media: int
    entries_by_month: list[MonthCount]


class EntryService(Service):
    """Domain service for entry operations."""

    def __init__(
        self,
        entry_repository: EntryRepository,
        journal_repository: JournalRepository,
        media_storage: MediaStorage,
    ) -> None:
        """Initialize entry service.

        Args:
            entry_repository: Entry repository
            journal_repository: Journal repository (ownership checks)
            media_storage: Storage for uploaded media
        """
        self.entry_repository = entry_repository
        self.journal_repository = journal_repository
        self.media_storage = media_storage

    async def get_entry(self, entry_id: EntryId, user_id: UserId) -> Entry:
        """Get one of a user's entries.

        Raises:
            NotFoundError: If the entry does not exist or belongs to someone else
        """
        with logfire.span("entry_service.get_entry", entry_id=str(entry_id)):
            entry = await self.entry_repository.find_by_id(entry_id, user_id)
            if not entry:
                logfire.warn("Entry not found", entry_id=str(entry_id))
                raise NotFoundError("Entry", str(entry_id))
            return entry

    async def _check_journal(self, journal_id: JournalId, user_id: UserId) -> None:
        if not await self.journal_repository.find_by_id(journal_id, user_id):
            raise NotFoundError("Journal", str(journal_id))

    async def store_uploads(self, uploads: list[Upload]) -> list[Media]:
        """Write uploaded files to media storage.

        Raises:
            ValidationError: If a file has an unsupported type
        """
        kinds = []
        for upload in uploads:
            try:
                kinds.append(MediaType.from_content_type(upload.content_type))
            except ValueError as e:
                raise ValidationError(str(e))

        media = []
        for upload, kind in zip(uploads, kinds):
            stored = await self.media_storage.store(
                upload.data, upload.filename, upload.content_type
            )
            media.append(
                Media(
                    id=MediaId(uuid4()),
                    type=kind,
                    url=stored.url,
                    storage_key=stored.key,
                    filename=upload.filename,
                    size=stored.size,
                )
            )
        return media

    async def create_entry(
        self, user_id: UserId, fields: dict, uploads: list[Upload]
    ) -> Entry:
        """Create an entry with its media.

        Args:
            user_id: Owner ID
            fields: Entry fields (title, description, journal_id, location,
                format_spans, created_at)
            uploads: Files to attach

        Raises:
            ValidationError: If title or description is missing
            NotFoundError: If the journal does not belong to the user
        """
        with logfire.span("entry_service.create_entry", user_id=str(user_id)):
            title = (fields.get("title") or "").strip()
            description = (fields.get("description") or "").strip()
            if not title or not description:
                raise ValidationError("Title and description are required")

            journal_id = fields.get("journal_id")
            if journal_id:
                await self._check_journal(journal_id, user_id)

            now = datetime.now(timezone.utc)
            media = await self.store_uploads(uploads)
            entry = Entry.model_validate(
                {
                    **{k: v for k, v in fields.items() if v is not None},
                    "id": EntryId(uuid4()),
                    "user_id": user_id,
                    "title": title,
                    "description": description,
                    "media": media,
                    "created_at": fields.get("created_at") or now,
                    "updated_at": now,
                }
            )
            saved = await self.entry_repository.save(entry)
            logfire.info(
                "Entry created", entry_id=str(saved.id), media_count=saved.media_count
            )
            return saved

    async def list_entries(
        self,
        user_id: UserId,
        journal_id: JournalId | None = None,
        page: int = 1,
        limit: int = 10,
    ) -> EntryPage:
        """List a user's entries newest first, optionally within one journal."""
        with logfire.span("entry_service.list_entries", user_id=str(user_id)):
            entries = await self.entry_repository.find_by_user(
                user_id, journal_id=journal_id, limit=limit, offset=(page - 1) * limit
            )
            total = await self.entry_repository.count_by_user(user_id, journal_id)
            return EntryPage(entries=entries, total=total, page=page, limit=limit)

    async def update_entry(
        self, entry_id: EntryId, user_id: UserId, changes: dict, uploads: list[Upload]
    ) -> Entry:
        """Apply a partial update; new uploads are appended to existing media.

        Raises:
            NotFoundError: If the entry (or a new journal) does not belong to the user
        """
        with logfire.span("entry_service.update_entry", entry_id=str(entry_id)):
            entry = await self.get_entry(entry_id, user_id)

            if changes.get("journal_id"):
                await self._check_journal(changes["journal_id"], user_id)
            for key in ("title", "description"):
                if key in changes:
                    changes[key] = (changes[key] or "").strip() or getattr(entry, key)

            new_media = await self.store_uploads(uploads)
            updated = Entry.model_validate(
                {
                    **entry.model_dump(),
                    **changes,
                    "media": [*entry.media, *new_media],
                    "updated_at": datetime.now(timezone.utc),
                }
            )
            return await self.entry_repository.save(updated)

    async def _discard(self, media: list[Media]) -> None:
        for item in media:
            try:
                await self.media_storage.delete(item.storage_key)
            except Exception as e:
                logfire.error(
                    "Failed to delete stored media", key=item.storage_key, error=str(e)
                )

    async def delete_entry(self, entry_id: EntryId, user_id: UserId) -> None:
        """Delete an entry and its stored media.

        Storage failures are logged and do not prevent the deletion.

        Raises:
            NotFoundError: If the entry does not belong to the user
        """
        with logfire.span("entry_service.delete_entry", entry_id=str(entry_id)):
            entry = await self.get_entry(entry_id, user_id)
            await self._discard(entry.media)
            await self.entry_repository.delete(entry_id)
            logfire.info("Entry deleted", entry_id=str(entry_id))

    async def delete_media(
        self, entry_id: EntryId, media_id: MediaId, user_id: UserId
    ) -> Entry:
        """Remove one media item from an entry.

        Raises:
            NotFoundError: If the entry or media item does not exist
        """
        with logfire.span(
            "entry_service.delete_media", entry_id=str(entry_id), media_id=str(media_id)
        ):
            entry = await self.get_entry(entry_id, user_id)
            item = next((m for m in entry.media if m.id == media_id), None)
            if not item:
                raise NotFoundError("Media", str(media_id))

            await self._discard([item])
            updated = entry.model_copy(
                update={
                    "media": [m for m in entry.media if m.id != media_id],
                    "updated_at": datetime.now(timezone.utc),
                }
            )
            return await self.entry_repository.save(updated)

    async def search_entries(
        self, user_id: UserId, query: str, page: int = 1, limit: int = 10
    ) -> EntryPage:
        """Search a user's entries by title or description.

        Raises:
            ValidationError: If the query is blank
        """
        query = query.strip()
        if not query:
            raise ValidationError("Search query is required")
        with logfire.span("entry_service.search_entries", user_id=str(user_id)):
            entries, total = await self.entry_repository.search(
                user_id, query, limit=limit, offset=(page - 1) * limit
            )
            return EntryPage(entries=entries, total=total, page=page, limit=limit)

    async def get_stats(self, user_id: UserId) -> EntryStats:
        """Totals and per-month counts for the 12 most recent active months."""
        with logfire.span("entry_service.get_stats", user_id=str(user_id)):
            total_entries = await self.entry_repository.count_by_user(user_id)
            total_media = await self.entry_repository.count_media(user_id)
            by_month = await self.entry_repository.count_by_month(user_id, limit=12)
            return EntryStats(
                total_entries=total_entries,
                total_media=total_media,
                entries_by_month=[MonthCount(y, m, c) for y, m, c in by_month],
            )
