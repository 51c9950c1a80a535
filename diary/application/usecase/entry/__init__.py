"""Entry use cases."""

from .create_entry import CreateEntryUseCase
from .delete_entry import DeleteEntryUseCase, DeleteMediaUseCase
from .entry_stats import EntryStatsUseCase
from .get_entry import GetEntryUseCase
from .list_entries import ListEntriesUseCase
from .search_entries import SearchEntriesUseCase
from .update_entry import UpdateEntryUseCase

__all__ = [
    "CreateEntryUseCase",
    "DeleteEntryUseCase",
    "DeleteMediaUseCase",
    "EntryStatsUseCase",
    "GetEntryUseCase",
    "ListEntriesUseCase",
    "SearchEntriesUseCase",
    "UpdateEntryUseCase",
]
