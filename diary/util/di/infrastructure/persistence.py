"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

import logfire
from dishka import Scope, provide
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from diary.config import Settings
from diary.domain.repository import EntryRepository, JournalRepository, UserRepository
from diary.persistence.database import create_engine, create_session_factory
from diary.persistence.repository import (
    PostgresEntryRepository,
    PostgresJournalRepository,
    PostgresUserRepository,
)
from diary.util.di.base import ProviderBase
from diary.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    async def get_engine(self, settings: Settings) -> AsyncIterator[AsyncEngine]:
        """Provide database engine, disposed when the container closes."""
        engine = create_engine(settings)
        instrument_sqlalchemy(engine)
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Provide database session for request scope.

        The session is committed at the end of the request if no exception
        occurred, or rolled back if an exception was raised.
        """
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception as e:
                logfire.warn("Session rollback", error=str(e))
                await session.rollback()
                raise

    @provide(scope=Scope.APP)
    def get_user_repository(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> UserRepository:
        """Provide User repository.

        User writes commit in their own short transactions, independent of
        the request session.
        """
        return PostgresUserRepository(session_factory)

    @provide(scope=Scope.REQUEST)
    def get_journal_repository(self, session: AsyncSession) -> JournalRepository:
        """Provide Journal repository."""
        return PostgresJournalRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_entry_repository(self, session: AsyncSession) -> EntryRepository:
        """Provide Entry repository."""
        return PostgresEntryRepository(session)
