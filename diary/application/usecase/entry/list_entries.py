"""List entries use case."""

from uuid import UUID

from pydantic import BaseModel, Field

from diary.domain.service import EntryService
from diary.domain.value import UserId

from .common import EntryListResponse


class ListEntriesRequest(BaseModel):
    """List entries request."""

    journal_id: UUID | None = None
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1, le=100)


class ListEntriesUseCase:
    """Use case for paging through a user's entries, newest first."""

    def __init__(self, entry_service: EntryService) -> None:
        self.entry_service = entry_service

    async def execute(
        self, user_id: UserId, request: ListEntriesRequest
    ) -> EntryListResponse:
        page = await self.entry_service.list_entries(
            user_id, journal_id=request.journal_id, page=request.page, limit=request.limit
        )
        return EntryListResponse.from_page(page)
