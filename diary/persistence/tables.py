"""SQLAlchemy table definitions for the diary.

These table definitions are used with SQLAlchemy Core.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    BigInteger,
    Boolean,
    CheckConstraint,
    Column,
    Float,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
)
from sqlalchemy.dialects.postgresql import ARRAY, JSONB, TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# USERS TABLE
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("email", String(320), nullable=False, unique=True),  # Lower-cased
    Column("name", String(100), nullable=False),
    Column("avatar_url", Text, nullable=True),
    # Credentials
    Column("password_hash", String(60), nullable=True),  # bcrypt
    Column("google_id", String(255), nullable=True, unique=True),
    Column("apple_id", String(255), nullable=True, unique=True),
    Column("auth_methods", ARRAY(String(20)), nullable=False),
    # Email verification
    Column("is_email_verified", Boolean, nullable=False, server_default="false"),
    Column("email_otp_hash", String(64), nullable=True),  # SHA-256 hex
    Column("email_otp_expires_at", TIMESTAMP(timezone=True), nullable=True),
    Column("otp_attempts", Integer, nullable=False, server_default="0"),
    # Password recovery
    Column("password_reset_token_hash", String(64), nullable=True, unique=True),
    Column("password_reset_expires_at", TIMESTAMP(timezone=True), nullable=True),
    # Login throttling
    Column("login_attempts", Integer, nullable=False, server_default="0"),
    Column("is_locked", Boolean, nullable=False, server_default="false"),
    Column("lock_until", TIMESTAMP(timezone=True), nullable=True),
    Column("last_login_at", TIMESTAMP(timezone=True), nullable=True),
    Column("is_premium", Boolean, nullable=False, server_default="false"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("cardinality(auth_methods) > 0", name="ck_users_auth_methods"),
)

# ============================================================================
# JOURNALS TABLE
# ============================================================================
journals_table = Table(
    "journals",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("name", String(100), nullable=False),
    Column("description", String(500), nullable=True),
    Column("color", String(20), nullable=False, server_default="#3B9EFF"),
    Column("icon", String(100), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_journals_user_created", journals_table.c.user_id, journals_table.c.created_at)

# ============================================================================
# ENTRIES TABLE
# ============================================================================
entries_table = Table(
    "entries",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column(
        "journal_id",
        UUID,
        ForeignKey("journals.id", ondelete="SET NULL"),
        nullable=True,
    ),
    Column("title", String(200), nullable=False, server_default=""),
    Column("description", Text, nullable=False, server_default=""),
    Column("format_spans", JSONB, nullable=False, server_default="[]"),
    Column("latitude", Float, nullable=False, server_default="0"),
    Column("longitude", Float, nullable=False, server_default="0"),
    Column("address", Text, nullable=False, server_default=""),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_entries_user_created", entries_table.c.user_id, entries_table.c.created_at)
Index("idx_entries_journal", entries_table.c.journal_id)

# ============================================================================
# ENTRY MEDIA TABLE
# ============================================================================
entry_media_table = Table(
    "entry_media",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "entry_id", UUID, ForeignKey("entries.id", ondelete="CASCADE"), nullable=False
    ),
    Column("position", Integer, nullable=False),  # Order within the entry
    Column("type", String(20), nullable=False),  # 'image', 'video', 'audio', 'pdf'
    Column("url", Text, nullable=False),
    Column("storage_key", Text, nullable=False),
    Column("filename", Text, nullable=True),
    Column("size", BigInteger, nullable=True),
    Column("duration", Float, nullable=True),
)

Index("idx_entry_media_entry", entry_media_table.c.entry_id, entry_media_table.c.position)
