"""Delete journal use case."""

from diary.domain.service import JournalService
from diary.domain.value import JournalId, UserId


class DeleteJournalUseCase:
    """Use case for deleting a journal. Its entries are kept, unassigned."""

    def __init__(self, journal_service: JournalService) -> None:
        self.journal_service = journal_service

    async def execute(self, journal_id: JournalId, user_id: UserId) -> None:
        await self.journal_service.delete_journal(journal_id, user_id)
