"""Create journal use case."""

from pydantic import BaseModel, Field

from diary.domain.service import JournalService, UserService
from diary.domain.value import UserId

from .common import JournalItem

HEX_COLOR = r"^#[0-9A-Fa-f]{6}$"


class CreateJournalRequest(BaseModel):
    """Create journal request."""

    name: str = Field(min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    color: str | None = Field(default=None, pattern=HEX_COLOR)
    icon: str | None = Field(default=None, max_length=50)


class CreateJournalUseCase:
    """Use case for creating a journal."""

    def __init__(
        self, journal_service: JournalService, user_service: UserService
    ) -> None:
        """Initialize create journal use case.

        Args:
            journal_service: Journal domain service
            user_service: User domain service (premium status)
        """
        self.journal_service = journal_service
        self.user_service = user_service

    async def execute(self, user_id: UserId, request: CreateJournalRequest) -> JournalItem:
        """Create a journal for the user.

        Raises:
            BusinessRuleViolationError: If a free user is at the journal limit
        """
        user = await self.user_service.get_by_id(user_id)
        journal = await self.journal_service.create_journal(
            user,
            name=request.name,
            description=request.description,
            color=request.color,
            icon=request.icon,
        )
        return JournalItem.from_journal(journal)
