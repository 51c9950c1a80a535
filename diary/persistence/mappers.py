"""Mappers for converting between database rows and domain models.

Domain models are immutable pydantic models, so rows are mapped by hand
instead of with SQLAlchemy's ORM mapping.
"""

from typing import Any, Dict
from uuid import UUID

from diary.domain.model import Entry, Journal, Media, User
from diary.domain.value import (
    AuthMethod,
    EntryId,
    FormatSpan,
    JournalId,
    Location,
    MediaId,
    MediaType,
    UserId,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    return User(
        id=UserId(_uuid(row["id"])),
        email=row["email"],
        name=row["name"],
        avatar_url=row.get("avatar_url"),
        password_hash=row.get("password_hash"),
        google_id=row.get("google_id"),
        apple_id=row.get("apple_id"),
        auth_methods=frozenset(AuthMethod(m) for m in row["auth_methods"]),
        is_email_verified=row["is_email_verified"],
        email_otp_hash=row.get("email_otp_hash"),
        email_otp_expires_at=row.get("email_otp_expires_at"),
        otp_attempts=row["otp_attempts"],
        password_reset_token_hash=row.get("password_reset_token_hash"),
        password_reset_expires_at=row.get("password_reset_expires_at"),
        login_attempts=row["login_attempts"],
        is_locked=row["is_locked"],
        lock_until=row.get("lock_until"),
        last_login_at=row.get("last_login_at"),
        is_premium=row["is_premium"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict.

    Args:
        user: User domain model

    Returns:
        Dict suitable for database insertion/update
    """
    data = user.model_dump()
    data["auth_methods"] = sorted(m.value for m in user.auth_methods)
    return data


def row_to_journal(row: Dict[str, Any]) -> Journal:
    """Convert database row to Journal domain model."""
    return Journal(
        id=JournalId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])),
        name=row["name"],
        description=row.get("description"),
        color=row["color"],
        icon=row.get("icon"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def journal_to_dict(journal: Journal) -> Dict[str, Any]:
    """Convert Journal domain model to database dict."""
    return journal.model_dump()


def row_to_media(row: Dict[str, Any]) -> Media:
    """Convert database row to Media domain model."""
    return Media(
        id=MediaId(_uuid(row["id"])),
        type=MediaType(row["type"]),
        url=row["url"],
        storage_key=row["storage_key"],
        filename=row.get("filename"),
        size=row.get("size"),
        duration=row.get("duration"),
    )


def media_to_dict(media: Media, entry_id: EntryId, position: int) -> Dict[str, Any]:
    """Convert Media domain model to database dict."""
    data = media.model_dump(mode="json")
    data["id"] = media.id
    data["entry_id"] = entry_id
    data["position"] = position
    return data


def row_to_entry(row: Dict[str, Any], media: list[Media]) -> Entry:
    """Convert database row plus its media to Entry domain model.

    Args:
        row: Entry row as dict
        media: Media items, already in display order

    Returns:
        Entry domain model
    """
    journal_id = row.get("journal_id")
    return Entry(
        id=EntryId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])),
        journal_id=JournalId(_uuid(journal_id)) if journal_id else None,
        title=row["title"],
        description=row["description"],
        format_spans=[FormatSpan.model_validate(s) for s in row["format_spans"] or []],
        media=media,
        location=Location(
            latitude=row["latitude"],
            longitude=row["longitude"],
            address=row["address"] or "",
        ),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def entry_to_dict(entry: Entry) -> Dict[str, Any]:
    """Convert Entry domain model to an entries-table dict (media excluded)."""
    return {
        "id": entry.id,
        "user_id": entry.user_id,
        "journal_id": entry.journal_id,
        "title": entry.title,
        "description": entry.description,
        "format_spans": [span.model_dump() for span in entry.format_spans],
        "latitude": entry.location.latitude,
        "longitude": entry.location.longitude,
        "address": entry.location.address,
        "created_at": entry.created_at,
        "updated_at": entry.updated_at,
    }
