"""Strongly typed identifiers for diary domain entities.

Using NewType keeps user, journal and entry IDs from being mixed up.
"""

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", UUID)
JournalId = NewType("JournalId", UUID)
EntryId = NewType("EntryId", UUID)
MediaId = NewType("MediaId", UUID)
