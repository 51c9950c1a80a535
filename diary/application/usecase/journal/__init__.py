"""Journal use cases."""

from .create_journal import CreateJournalUseCase
from .delete_journal import DeleteJournalUseCase
from .get_journal import GetJournalUseCase
from .list_journals import ListJournalsUseCase
from .update_journal import UpdateJournalUseCase

__all__ = [
    "CreateJournalUseCase",
    "DeleteJournalUseCase",
    "GetJournalUseCase",
    "ListJournalsUseCase",
    "UpdateJournalUseCase",
]
