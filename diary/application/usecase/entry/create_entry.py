"""Create entry use case."""

from datetime import datetime
from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from diary.domain.service import EntryService, Upload
from diary.domain.value import FormatSpan, Location, UserId

from .common import EntryItem


class CreateEntryRequest(BaseModel):
    """Create entry request (form fields of the multipart body)."""

    title: str = Field(max_length=200)
    description: str
    journal_id: UUID | None = None
    location: Location | None = None
    format_spans: list[FormatSpan] = []
    created_at: datetime | None = None  # Back-dated entries


class CreateEntryUseCase:
    """Use case for writing a new entry with attached media."""

    def __init__(self, entry_service: EntryService) -> None:
        """Initialize create entry use case.

        Args:
            entry_service: Entry domain service
        """
        self.entry_service = entry_service

    async def execute(
        self, user_id: UserId, request: CreateEntryRequest, uploads: list[Upload]
    ) -> EntryItem:
        """Execute create entry flow.

        Args:
            user_id: Author ID
            request: Entry fields
            uploads: Files to attach

        Returns:
            Created entry

        Raises:
            ValidationError: If title or description is blank or a file type
                is unsupported
            NotFoundError: If the journal does not belong to the user
        """
        with logfire.span("create_entry.execute", uploads=len(uploads)):
            entry = await self.entry_service.create_entry(
                user_id, request.model_dump(exclude_none=True), uploads
            )
            return EntryItem.from_entry(entry)
