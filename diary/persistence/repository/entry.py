"""PostgreSQL implementation of Entry repository."""

from collections import defaultdict
from typing import Optional
from uuid import UUID

from sqlalchemy import delete, desc, extract, func, or_, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from diary.domain.model import Entry, Media
from diary.domain.repository import EntryRepository
from diary.domain.value import EntryId, JournalId, UserId
from diary.persistence.mappers import (
    entry_to_dict,
    media_to_dict,
    row_to_entry,
    row_to_media,
)
from diary.persistence.tables import entries_table, entry_media_table


def _escape_like(query: str) -> str:
    return query.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class PostgresEntryRepository(EntryRepository):
    """PostgreSQL implementation of EntryRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def _fetch_media(self, entry_ids: list[UUID]) -> dict[UUID, list[Media]]:
        """Fetch media for multiple entries in a single query.

        Args:
            entry_ids: List of entry IDs

        Returns:
            Dict mapping entry_id -> ordered media list
        """
        if not entry_ids:
            return {}

        stmt = (
            select(entry_media_table)
            .where(entry_media_table.c.entry_id.in_(entry_ids))
            .order_by(entry_media_table.c.entry_id, entry_media_table.c.position)
        )
        result = await self.session.execute(stmt)

        media_map: dict[UUID, list[Media]] = defaultdict(list)
        for row in result.mappings():
            media_map[row["entry_id"]].append(row_to_media(dict(row)))
        return media_map

    async def _to_entries(self, rows) -> list[Entry]:
        rows = [dict(row) for row in rows]
        media_map = await self._fetch_media([row["id"] for row in rows])
        return [row_to_entry(row, media_map.get(row["id"], [])) for row in rows]

    def _owned(self, user_id: UserId, journal_id: JournalId | None = None):
        criteria = [entries_table.c.user_id == user_id]
        if journal_id is not None:
            criteria.append(entries_table.c.journal_id == journal_id)
        return criteria

    async def find_by_id(self, entry_id: EntryId, user_id: UserId) -> Optional[Entry]:
        """Find an entry owned by the given user."""
        stmt = select(entries_table).where(
            entries_table.c.id == entry_id, *self._owned(user_id)
        )
        result = await self.session.execute(stmt)
        entries = await self._to_entries(result.mappings().all())
        return entries[0] if entries else None

    async def find_by_user(
        self,
        user_id: UserId,
        journal_id: JournalId | None = None,
        limit: int = 10,
        offset: int = 0,
    ) -> list[Entry]:
        """List a user's entries, newest first."""
        stmt = (
            select(entries_table)
            .where(*self._owned(user_id, journal_id))
            .order_by(desc(entries_table.c.created_at))
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return await self._to_entries(result.mappings().all())

    async def count_by_user(
        self, user_id: UserId, journal_id: JournalId | None = None
    ) -> int:
        """Count a user's entries."""
        stmt = select(func.count()).where(*self._owned(user_id, journal_id))
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def search(
        self, user_id: UserId, query: str, limit: int = 10, offset: int = 0
    ) -> tuple[list[Entry], int]:
        """Case-insensitive substring search on title and description."""
        pattern = f"%{_escape_like(query)}%"
        criteria = [
            *self._owned(user_id),
            or_(
                entries_table.c.title.ilike(pattern, escape="\\"),
                entries_table.c.description.ilike(pattern, escape="\\"),
            ),
        ]

        stmt = (
            select(entries_table)
            .where(*criteria)
            .order_by(desc(entries_table.c.created_at))
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        entries = await self._to_entries(result.mappings().all())

        count_result = await self.session.execute(
            select(func.count()).select_from(entries_table).where(*criteria)
        )
        return entries, count_result.scalar_one()

    async def count_media(self, user_id: UserId) -> int:
        """Count media items across a user's entries."""
        stmt = (
            select(func.count())
            .select_from(
                entry_media_table.join(
                    entries_table, entry_media_table.c.entry_id == entries_table.c.id
                )
            )
            .where(entries_table.c.user_id == user_id)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def count_by_month(
        self, user_id: UserId, limit: int = 12
    ) -> list[tuple[int, int, int]]:
        """Count entries per calendar month (UTC), most recent first."""
        year = extract("year", entries_table.c.created_at).label("year")
        month = extract("month", entries_table.c.created_at).label("month")
        stmt = (
            select(year, month, func.count().label("count"))
            .where(entries_table.c.user_id == user_id)
            .group_by(year, month)
            .order_by(desc(year), desc(month))
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [(int(r.year), int(r.month), r.count) for r in result.all()]

    async def save(self, entry: Entry) -> Entry:
        """Upsert an entry and replace its media rows."""
        values = entry_to_dict(entry)
        stmt = insert(entries_table).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[entries_table.c.id],
            set_={k: v for k, v in values.items() if k not in ("id", "user_id")},
        )
        await self.session.execute(stmt)

        await self.session.execute(
            delete(entry_media_table).where(entry_media_table.c.entry_id == entry.id)
        )
        if entry.media:
            await self.session.execute(
                insert(entry_media_table),
                [
                    media_to_dict(item, entry.id, position)
                    for position, item in enumerate(entry.media)
                ],
            )

        await self.session.flush()
        return entry

    async def delete(self, entry_id: EntryId) -> None:
        """Delete an entry (media rows cascade)."""
        await self.session.execute(
            delete(entries_table).where(entries_table.c.id == entry_id)
        )
        await self.session.flush()
