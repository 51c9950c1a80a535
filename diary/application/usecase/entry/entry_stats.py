"""Entry statistics use case."""

from pydantic import BaseModel

from diary.domain.service import EntryService
from diary.domain.value import UserId


class MonthStat(BaseModel):
    year: int
    month: int
    count: int


class EntryStatsResponse(BaseModel):
    """Entry statistics response."""

    total_entries: int
    total_media: int
    entries_by_month: list[MonthStat]


class EntryStatsUseCase:
    """Use case for the statistics screen."""

    def __init__(self, entry_service: EntryService) -> None:
        self.entry_service = entry_service

    async def execute(self, user_id: UserId) -> EntryStatsResponse:
        """Totals plus entries per month for the 12 most recent months with entries."""
        stats = await self.entry_service.get_stats(user_id)
        return EntryStatsResponse(
            total_entries=stats.total_entries,
            total_media=stats.total_media,
            entries_by_month=[
                MonthStat(year=m.year, month=m.month, count=m.count)
                for m in stats.entries_by_month
            ],
        )
