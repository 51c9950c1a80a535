"""Journal entity.

Journals group entries. Each journal is owned by exactly one user.
"""

from datetime import datetime

from pydantic import Field

from diary.domain.model.common import DomainModel
from diary.domain.model.user import utcnow
from diary.domain.value import JournalId, UserId


class Journal(DomainModel):
    """Named collection of entries owned by one user."""

    id: JournalId
    user_id: UserId
    name: str = Field(min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    color: str = "#3B9EFF"
    icon: str | None = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
