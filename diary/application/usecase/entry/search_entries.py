"""Search entries use case."""

from pydantic import BaseModel, Field

from diary.domain.service import EntryService
from diary.domain.value import UserId

from .common import EntryListResponse


class SearchEntriesRequest(BaseModel):
    """Search request; matches title or description, case-insensitively."""

    q: str = Field(max_length=200)
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1, le=100)


class SearchEntriesUseCase:
    """Use case for full-text-ish search over a user's entries."""

    def __init__(self, entry_service: EntryService) -> None:
        self.entry_service = entry_service

    async def execute(
        self, user_id: UserId, request: SearchEntriesRequest
    ) -> EntryListResponse:
        """Search entries.

        Raises:
            ValidationError: If the query is blank
        """
        page = await self.entry_service.search_entries(
            user_id, request.q, page=request.page, limit=request.limit
        )
        return EntryListResponse.from_page(page)
