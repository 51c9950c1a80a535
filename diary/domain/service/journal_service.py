"""Journal domain service."""

from datetime import datetime, timezone
from uuid import uuid4

import logfire

from diary.domain.error import BusinessRuleViolationError, NotFoundError
from diary.domain.model import Journal, User
from diary.domain.repository import JournalRepository
from diary.domain.value import JournalId, UserId

from .base import Service


class JournalService(Service):
    """Domain service for journal operations."""

    def __init__(
        self, journal_repository: JournalRepository, free_journal_limit: int
    ) -> None:
        """Initialize journal service.

        Args:
            journal_repository: Journal repository
            free_journal_limit: Number of journals a non-premium user may own
        """
        self.journal_repository = journal_repository
        self.free_journal_limit = free_journal_limit

    async def get_journal(self, journal_id: JournalId, user_id: UserId) -> Journal:
        """Get one of a user's journals.

        Raises:
            NotFoundError: If the journal does not exist or belongs to someone else
        """
        with logfire.span("journal_service.get_journal", journal_id=str(journal_id)):
            journal = await self.journal_repository.find_by_id(journal_id, user_id)
            if not journal:
                logfire.warn("Journal not found", journal_id=str(journal_id))
                raise NotFoundError("Journal", str(journal_id))
            return journal

    async def list_journals(self, user_id: UserId) -> list[Journal]:
        """List a user's journals, oldest first."""
        with logfire.span("journal_service.list_journals", user_id=str(user_id)):
            return await self.journal_repository.find_by_user(user_id)

    async def entry_counts(self, journals: list[Journal]) -> dict[JournalId, int]:
        """Count entries for each journal."""
        if not journals:
            return {}
        return await self.journal_repository.count_entries([j.id for j in journals])

    async def create_journal(
        self,
        user: User,
        name: str,
        description: str | None = None,
        color: str | None = None,
        icon: str | None = None,
    ) -> Journal:
        """Create a journal, enforcing the free tier limit.

        Raises:
            BusinessRuleViolationError: If a free user already has the maximum
        """
        with logfire.span("journal_service.create_journal", user_id=str(user.id)):
            if not user.is_premium:
                count = await self.journal_repository.count_by_user(user.id)
                if count >= self.free_journal_limit:
                    logfire.info("Free journal limit reached", user_id=str(user.id))
                    raise BusinessRuleViolationError(
                        f"Free users can create maximum {self.free_journal_limit} journals. "
                        "Upgrade to premium for unlimited journals."
                    )

            now = datetime.now(timezone.utc)
            journal = Journal(
                id=JournalId(uuid4()),
                user_id=user.id,
                name=name.strip(),
                description=description.strip() if description else None,
                color=color or "#3B9EFF",
                icon=icon,
                created_at=now,
                updated_at=now,
            )
            saved = await self.journal_repository.save(journal)
            logfire.info("Journal created", journal_id=str(saved.id))
            return saved

    async def update_journal(
        self, journal_id: JournalId, user_id: UserId, changes: dict
    ) -> Journal:
        """Apply a partial update to a journal.

        Args:
            journal_id: Journal ID
            user_id: Owner ID
            changes: Fields to change (name, description, color, icon)

        Raises:
            NotFoundError: If the journal does not exist or belongs to someone else
        """
        with logfire.span("journal_service.update_journal", journal_id=str(journal_id)):
            journal = await self.get_journal(journal_id, user_id)
            if "name" in changes and changes["name"] is not None:
                changes["name"] = changes["name"].strip()
            if changes.get("description"):
                changes["description"] = changes["description"].strip()
            updated = Journal.model_validate(
                {
                    **journal.model_dump(),
                    **changes,
                    "updated_at": datetime.now(timezone.utc),
                }
            )
            return await self.journal_repository.save(updated)

    async def delete_journal(self, journal_id: JournalId, user_id: UserId) -> None:
        """Delete a journal, keeping its entries without a journal.

        Raises:
            NotFoundError: If the journal does not exist or belongs to someone else
        """
        with logfire.span("journal_service.delete_journal", journal_id=str(journal_id)):
            await self.get_journal(journal_id, user_id)
            await self.journal_repository.delete(journal_id)
            logfire.info("Journal deleted", journal_id=str(journal_id))
