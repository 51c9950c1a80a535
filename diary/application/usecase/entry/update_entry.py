"""Update entry use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from diary.domain.service import EntryService, Upload
from diary.domain.value import EntryId, FormatSpan, Location, UserId

from .common import EntryItem


class UpdateEntryRequest(BaseModel):
    """Partial entry update; omitted fields are left unchanged.

    An explicit ``journal_id`` of ``None`` removes the entry from its journal.
    """

    title: str | None = Field(default=None, max_length=200)
    description: str | None = None
    journal_id: UUID | None = None
    location: Location | None = None
    format_spans: list[FormatSpan] | None = None
    created_at: datetime | None = None


class UpdateEntryUseCase:
    """Use case for editing an entry and appending media."""

    def __init__(self, entry_service: EntryService) -> None:
        self.entry_service = entry_service

    async def execute(
        self,
        entry_id: EntryId,
        user_id: UserId,
        request: UpdateEntryRequest,
        uploads: list[Upload],
    ) -> EntryItem:
        """Apply the fields present in the request and attach new files.

        Raises:
            NotFoundError: If the entry or the target journal does not belong
                to the user
            ValidationError: If a file type is unsupported
        """
        changes = {
            key: value
            for key, value in request.model_dump(exclude_unset=True).items()
            if value is not None or key == "journal_id"
        }
        entry = await self.entry_service.update_entry(
            entry_id, user_id, changes, uploads
        )
        return EntryItem.from_entry(entry)
