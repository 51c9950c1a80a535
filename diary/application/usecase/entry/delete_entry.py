"""Delete entry use cases."""

from diary.domain.service import EntryService
from diary.domain.value import EntryId, MediaId, UserId

from .common import EntryItem


class DeleteEntryUseCase:
    """Use case for deleting an entry and its stored media."""

    def __init__(self, entry_service: EntryService) -> None:
        self.entry_service = entry_service

    async def execute(self, entry_id: EntryId, user_id: UserId) -> None:
        await self.entry_service.delete_entry(entry_id, user_id)


class DeleteMediaUseCase:
    """Use case for removing a single media item from an entry."""

    def __init__(self, entry_service: EntryService) -> None:
        self.entry_service = entry_service

    async def execute(
        self, entry_id: EntryId, media_id: MediaId, user_id: UserId
    ) -> EntryItem:
        """Remove the media item and return the updated entry.

        Raises:
            NotFoundError: If the entry or media item does not exist
        """
        entry = await self.entry_service.delete_media(entry_id, media_id, user_id)
        return EntryItem.from_entry(entry)
