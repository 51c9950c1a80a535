"""Domain value objects for the diary."""

from diary.domain.value.identifiers import EntryId, JournalId, MediaId, UserId
from diary.domain.value.types import (
    AuthMethod,
    FormatSpan,
    Location,
    MediaType,
    OAuthIdentity,
    Platform,
)

__all__ = [
    # Identifiers
    "UserId",
    "JournalId",
    "EntryId",
    "MediaId",
    # Types
    "AuthMethod",
    "FormatSpan",
    "Location",
    "MediaType",
    "OAuthIdentity",
    "Platform",
]
