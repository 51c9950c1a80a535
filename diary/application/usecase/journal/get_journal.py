"""Get journal use case."""

from diary.domain.service import JournalService
from diary.domain.value import JournalId, UserId

from .common import JournalItem


class GetJournalUseCase:
    """Use case for reading one journal."""

    def __init__(self, journal_service: JournalService) -> None:
        self.journal_service = journal_service

    async def execute(self, journal_id: JournalId, user_id: UserId) -> JournalItem:
        """Get a journal with its entry count.

        Raises:
            NotFoundError: If the journal does not belong to the user
        """
        journal = await self.journal_service.get_journal(journal_id, user_id)
        counts = await self.journal_service.entry_counts([journal])
        return JournalItem.from_journal(journal, counts.get(journal.id, 0))
