"""PostgreSQL implementation of Journal repository."""

from typing import Optional

from sqlalchemy import delete, func, select, update
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from diary.domain.model import Journal
from diary.domain.repository import JournalRepository
from diary.domain.value import JournalId, UserId
from diary.persistence.mappers import journal_to_dict, row_to_journal
from diary.persistence.tables import entries_table, journals_table


class PostgresJournalRepository(JournalRepository):
    """PostgreSQL implementation of JournalRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(
        self, journal_id: JournalId, user_id: UserId
    ) -> Optional[Journal]:
        """Find a journal owned by the given user."""
        stmt = select(journals_table).where(
            journals_table.c.id == journal_id, journals_table.c.user_id == user_id
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_journal(dict(row)) if row else None

    async def find_by_user(self, user_id: UserId) -> list[Journal]:
        """List a user's journals, oldest first."""
        stmt = (
            select(journals_table)
            .where(journals_table.c.user_id == user_id)
            .order_by(journals_table.c.created_at)
        )
        result = await self.session.execute(stmt)
        return [row_to_journal(dict(row)) for row in result.mappings()]

    async def count_by_user(self, user_id: UserId) -> int:
        """Count a user's journals."""
        stmt = select(func.count()).where(journals_table.c.user_id == user_id)
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def count_entries(self, journal_ids: list[JournalId]) -> dict[JournalId, int]:
        """Count entries per journal in a single query."""
        counts: dict[JournalId, int] = {journal_id: 0 for journal_id in journal_ids}
        if not journal_ids:
            return counts

        stmt = (
            select(entries_table.c.journal_id, func.count())
            .where(entries_table.c.journal_id.in_(journal_ids))
            .group_by(entries_table.c.journal_id)
        )
        result = await self.session.execute(stmt)
        for journal_id, count in result.all():
            counts[JournalId(journal_id)] = count
        return counts

    async def save(self, journal: Journal) -> Journal:
        """Save a journal (upsert)."""
        values = journal_to_dict(journal)
        stmt = insert(journals_table).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[journals_table.c.id],
            set_={k: v for k, v in values.items() if k not in ("id", "user_id", "created_at")},
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return journal

    async def delete(self, journal_id: JournalId) -> None:
        """Delete a journal after detaching its entries."""
        await self.session.execute(
            update(entries_table)
            .where(entries_table.c.journal_id == journal_id)
            .values(journal_id=None)
        )
        await self.session.execute(
            delete(journals_table).where(journals_table.c.id == journal_id)
        )
        await self.session.flush()
