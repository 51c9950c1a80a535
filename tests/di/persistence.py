"""Mock persistence providers for testing."""

from dishka import Scope, provide

from diary.domain.repository import EntryRepository, JournalRepository, UserRepository
from diary.persistence.repository.inmemory import (
    InMemoryEntryRepository,
    InMemoryJournalRepository,
    InMemoryUserRepository,
)
from diary.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    Repositories are APP-scoped so state survives across requests made
    against one container; each test builds its own container.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_user_repository(self) -> UserRepository:
        """Provide in-memory user repository."""
        return InMemoryUserRepository()

    @provide(scope=Scope.APP)
    def get_inmemory_entry_repository(self) -> InMemoryEntryRepository:
        return InMemoryEntryRepository()

    @provide(scope=Scope.APP)
    def get_entry_repository(
        self, entries: InMemoryEntryRepository
    ) -> EntryRepository:
        """Provide in-memory entry repository."""
        return entries

    @provide(scope=Scope.APP)
    def get_journal_repository(
        self, entries: InMemoryEntryRepository
    ) -> JournalRepository:
        """Provide in-memory journal repository sharing the entry store."""
        return InMemoryJournalRepository(entries)
