"""List journals use case."""

import logfire
from pydantic import BaseModel

from diary.domain.service import JournalService
from diary.domain.value import UserId

from .common import JournalItem


class ListJournalsResponse(BaseModel):
    """List journals response."""

    journals: list[JournalItem]


class ListJournalsUseCase:
    """Use case for listing a user's journals with their entry counts."""

    def __init__(self, journal_service: JournalService) -> None:
        """Initialize list journals use case.

        Args:
            journal_service: Journal domain service
        """
        self.journal_service = journal_service

    async def execute(self, user_id: UserId) -> ListJournalsResponse:
        """Execute list journals flow.

        Args:
            user_id: Owner ID

        Returns:
            Journals oldest first
        """
        with logfire.span("list_journals.execute", user_id=str(user_id)):
            journals = await self.journal_service.list_journals(user_id)
            counts = await self.journal_service.entry_counts(journals)
            return ListJournalsResponse(
                journals=[
                    JournalItem.from_journal(j, counts.get(j.id, 0)) for j in journals
                ]
            )
