"""Get entry use case."""

from diary.domain.service import EntryService
from diary.domain.value import EntryId, UserId

from .common import EntryItem


class GetEntryUseCase:
    """Use case for reading one entry."""

    def __init__(self, entry_service: EntryService) -> None:
        self.entry_service = entry_service

    async def execute(self, entry_id: EntryId, user_id: UserId) -> EntryItem:
        entry = await self.entry_service.get_entry(entry_id, user_id)
        return EntryItem.from_entry(entry)
