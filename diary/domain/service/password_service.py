"""Password hashing domain service."""

import hashlib
import re
import secrets

import bcrypt
import logfire

from diary.config import AuthSettings
from diary.domain.error import ValidationError

from .base import Service

_BCRYPT_HASH_RE = re.compile(r"^\$2[aby]\$\d{2}\$[./A-Za-z0-9]{53}$")

# bcrypt ignores everything past the 72nd byte
_BCRYPT_MAX_BYTES = 72


class PasswordService(Service):
    """Hashes and verifies passwords with bcrypt.

    Also issues the single-use secrets that stand in for a password during
    recovery (reset tokens and temporary passwords).
    """

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize password service.

        Args:
            auth_settings: Authentication settings (bcrypt cost, reset TTL)
        """
        self.auth_settings = auth_settings

    @staticmethod
    def is_hash(value: str) -> bool:
        """Check whether a value is already a bcrypt hash."""
        return bool(_BCRYPT_HASH_RE.match(value))

    def hash(self, password: str) -> str:
        """Hash a plaintext password with a fresh salt.

        Args:
            password: Plaintext password

        Returns:
            bcrypt hash string

        Raises:
            ValidationError: If the password is empty or longer than bcrypt accepts
        """
        encoded = password.encode("utf-8")
        if not encoded:
            raise ValidationError("Password must not be empty")
        if len(encoded) > _BCRYPT_MAX_BYTES:
            raise ValidationError(
                f"Password must be at most {_BCRYPT_MAX_BYTES} bytes long"
            )

        salt = bcrypt.gensalt(rounds=self.auth_settings.bcrypt_rounds)
        return bcrypt.hashpw(encoded, salt).decode("utf-8")

    def hash_if_needed(self, value: str) -> str:
        """Hash a password unless it is already a bcrypt hash.

        Args:
            value: Plaintext password or existing bcrypt hash

        Returns:
            bcrypt hash string
        """
        if self.is_hash(value):
            return value
        return self.hash(value)

    def verify(self, password: str, password_hash: str | None) -> bool:
        """Check a plaintext password against a stored hash.

        Never raises: malformed or missing hashes simply do not match.

        Args:
            password: Plaintext password
            password_hash: Stored bcrypt hash

        Returns:
            True if the password matches
        """
        if not password_hash or not password:
            return False
        try:
            return bcrypt.checkpw(
                password.encode("utf-8"), password_hash.encode("utf-8")
            )
        except (ValueError, TypeError) as e:
            logfire.warn("Password hash could not be checked", error=str(e))
            return False

    def generate_temporary_password(self) -> str:
        """Generate a numeric temporary password (no leading zero)."""
        length = self.auth_settings.temporary_password_length
        low = 10 ** (length - 1)
        return str(low + secrets.randbelow(9 * low))

    def generate_reset_token(self) -> tuple[str, str]:
        """Generate a password reset token.

        Returns:
            Tuple of (token sent to the user, digest to store)
        """
        token = secrets.token_urlsafe(32)
        return token, self.hash_token(token)

    @staticmethod
    def hash_token(token: str) -> str:
        """Digest a reset token for storage and lookup."""
        return hashlib.sha256(token.encode("utf-8")).hexdigest()
