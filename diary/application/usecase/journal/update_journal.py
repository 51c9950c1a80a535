"""Update journal use case."""

from pydantic import BaseModel, Field

from diary.domain.service import JournalService
from diary.domain.value import JournalId, UserId

from .common import JournalItem
from .create_journal import HEX_COLOR


class UpdateJournalRequest(BaseModel):
    """Partial journal update; omitted fields are left unchanged."""

    name: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    color: str | None = Field(default=None, pattern=HEX_COLOR)
    icon: str | None = Field(default=None, max_length=50)


class UpdateJournalUseCase:
    """Use case for renaming or restyling a journal."""

    def __init__(self, journal_service: JournalService) -> None:
        self.journal_service = journal_service

    async def execute(
        self, journal_id: JournalId, user_id: UserId, request: UpdateJournalRequest
    ) -> JournalItem:
        """Apply the fields present in the request.

        Raises:
            NotFoundError: If the journal does not belong to the user
        """
        changes = request.model_dump(exclude_unset=True)
        # name and color cannot be cleared
        for key in ("name", "color"):
            if key in changes and changes[key] is None:
                del changes[key]

        journal = await self.journal_service.update_journal(journal_id, user_id, changes)
        counts = await self.journal_service.entry_counts([journal])
        return JournalItem.from_journal(journal, counts.get(journal.id, 0))
