"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class ConflictError(DomainError):
    """Raised when a resource already exists or collides with another."""

    pass


class BusinessRuleViolationError(DomainError):
    """Business rule violation error."""

    pass


class AuthenticationError(DomainError):
    """Raised when credentials cannot be accepted.

    The ``reason`` code tells the client what to do next without
    disclosing more than the account owner would need:

    - ``invalid_credentials``: wrong email/password or the account is locked
    - ``requires_verification``: password matched but email is unverified
    - ``use_oauth``: the account has no password, sign in with a provider
    - ``invalid_token``: a reset or provider token was rejected
    """

    INVALID_CREDENTIALS = "invalid_credentials"
    REQUIRES_VERIFICATION = "requires_verification"
    USE_OAUTH = "use_oauth"
    INVALID_TOKEN = "invalid_token"

    def __init__(self, message: str, reason: str = INVALID_CREDENTIALS, **extra):
        self.reason = reason
        self.extra = extra
        super().__init__(message)


class OtpError(DomainError):
    """Base class for one-time passcode failures."""

    code = "otp_error"


class NoOtpPending(OtpError):
    """Raised when no passcode has been issued (or it was already used)."""

    code = "no_otp_pending"

    def __init__(self) -> None:
        super().__init__("No verification code pending. Please request a new one")


class OtpExpired(OtpError):
    """Raised when the passcode is past its expiry."""

    code = "otp_expired"

    def __init__(self) -> None:
        super().__init__("Verification code has expired. Please request a new one")


class TooManyOtpAttempts(OtpError):
    """Raised once the attempt budget for a passcode is exhausted."""

    code = "too_many_attempts"

    def __init__(self) -> None:
        super().__init__("Too many failed attempts. Please request a new code")


class OtpMismatch(OtpError):
    """Raised when the submitted passcode does not match."""

    code = "otp_mismatch"

    def __init__(self, attempts_remaining: int):
        self.attempts_remaining = attempts_remaining
        super().__init__(
            f"Invalid verification code. {attempts_remaining} attempts remaining"
        )


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class DependencyError(DomainError):
    """Raised when an external collaborator (email, storage, provider) fails."""

    pass


class InternalError(DomainError):
    """Raised when an internal invariant is broken."""

    pass
