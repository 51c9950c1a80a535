"""Account linking domain service.

Reconciles every way of signing in (email/password, Google, Apple) against
a single user record. Decisions, first match wins:

===========================  ==================  =================================
Existing match               Incoming            Action
===========================  ==================  =================================
none                         email/password      create unverified user, issue OTP
email, no email method       email/password      set password, issue OTP to link
email, email method present  email/password      ConflictError
provider id                  OAuth               record login
email only                   OAuth               add provider, mark verified
none                         OAuth               create verified user
===========================  ==================  =================================
"""

from dataclasses import dataclass
from uuid import uuid4

import logfire

from diary.domain.error import ConflictError, ValidationError
from diary.domain.model import User
from diary.domain.model.user import utcnow
from diary.domain.value import AuthMethod, OAuthIdentity, UserId

from .base import Service
from .otp_service import OtpService
from .password_service import PasswordService
from .user_service import UserService

_PROVIDER_ID_FIELD = {
    AuthMethod.GOOGLE: "google_id",
    AuthMethod.APPLE: "apple_id",
}


@dataclass(frozen=True)
class Registration:
    """Outcome of an email/password registration."""

    user: User
    otp_code: str
    linking: bool  # True when a password is being added to an OAuth account


@dataclass(frozen=True)
class OAuthLogin:
    """Outcome of an OAuth sign-in."""

    user: User
    created: bool = False
    linked: bool = False


class AccountLinker(Service):
    """Domain service resolving sign-ins to a single user account."""

    def __init__(
        self,
        user_service: UserService,
        password_service: PasswordService,
        otp_service: OtpService,
    ) -> None:
        """Initialize account linker.

        Args:
            user_service: User domain service
            password_service: Password hashing service
            otp_service: OTP service
        """
        self.user_service = user_service
        self.password_service = password_service
        self.otp_service = otp_service

    async def register_with_password(
        self, name: str, email: str, password: str
    ) -> Registration:
        """Register an email/password account or add a password to an OAuth one.

        Args:
            name: Display name
            email: Normalized email
            password: Plaintext password

        Returns:
            Registration with the stored user and the OTP to deliver

        Raises:
            ConflictError: If an email/password account already exists
        """
        with logfire.span("account_linker.register_with_password"):
            password_hash = self.password_service.hash_if_needed(password)

            for attempt in range(2):
                existing = await self.user_service.get_user_by_email(email)
                if existing:
                    return await self._link_password(existing, password_hash)

                now = utcnow()
                user = User(
                    id=UserId(uuid4()),
                    email=email,
                    name=name,
                    password_hash=password_hash,
                    auth_methods=frozenset({AuthMethod.EMAIL}),
                    is_email_verified=False,
                    created_at=now,
                    updated_at=now,
                )
                user, code = self.otp_service.issue(user, now)
                try:
                    created = await self.user_service.create(user)
                except ConflictError:
                    if attempt:
                        raise
                    logfire.warn("Registration lost a create race, retrying lookup")
                    continue
                return Registration(user=created, otp_code=code, linking=False)

            raise ConflictError("Account already exists with this email")

    async def _link_password(self, existing: User, password_hash: str) -> Registration:
        if existing.has_method(AuthMethod.EMAIL):
            logfire.info("Registration for existing account", user_id=str(existing.id))
            raise ConflictError("Account already exists with this email")

        code = ""
        already_linked = False

        def apply(current: User) -> User:
            nonlocal code, already_linked
            if current.has_method(AuthMethod.EMAIL):
                already_linked = True
                return current
            current = current.model_copy(update={"password_hash": password_hash})
            current, code = self.otp_service.issue(current, utcnow())
            return current

        user = await self.user_service.update(existing.id, apply)
        if already_linked:
            raise ConflictError("Account already exists with this email")

        logfire.info("Password link started for OAuth account", user_id=str(user.id))
        return Registration(user=user, otp_code=code, linking=True)

    async def sign_in_with_provider(self, identity: OAuthIdentity) -> OAuthLogin:
        """Resolve an OAuth identity to a user, creating or linking as needed.

        Args:
            identity: Identity verified by the provider adapter

        Returns:
            OAuthLogin with the user and whether it was created or linked

        Raises:
            ValidationError: If the identity has no email and matches no user,
                or an unverified provider email would be linked to an account
            ConflictError: If the email's account is bound to another
                identity on the same provider
        """
        provider = identity.provider
        if provider not in _PROVIDER_ID_FIELD:
            raise ValidationError(f"Unsupported provider: {provider.value}")

        with logfire.span("account_linker.sign_in_with_provider", provider=provider.value):
            for attempt in range(2):
                result = await self._resolve_provider_user(identity)
                if result is not None:
                    return result

                user = self._new_oauth_user(identity)
                try:
                    created = await self.user_service.create(user)
                except ConflictError:
                    if attempt:
                        raise
                    logfire.warn("OAuth sign-up lost a create race, retrying lookup")
                    continue
                return OAuthLogin(user=created, created=True)

            raise ConflictError("Account could not be created")

    async def _resolve_provider_user(self, identity: OAuthIdentity) -> OAuthLogin | None:
        provider = identity.provider
        field = _PROVIDER_ID_FIELD[provider]
        now = utcnow()

        by_id = await self.user_service.get_user_by_provider_id(
            provider, identity.provider_user_id
        )
        if by_id:
            user = await self.user_service.update(
                by_id.id, lambda u: u.model_copy(update={"last_login_at": now})
            )
            logfire.info("Provider login", user_id=str(user.id), provider=provider.value)
            return OAuthLogin(user=user)

        if not identity.email:
            raise ValidationError(
                f"{provider.value.title()} did not share an email address"
            )

        by_email = await self.user_service.get_user_by_email(identity.email.lower())
        if not by_email:
            return None

        if not identity.email_verified:
            raise ValidationError(
                f"{provider.value.title()} email address is not verified"
            )

        def link(current: User) -> User:
            bound = getattr(current, field)
            if bound is not None and bound != identity.provider_user_id:
                raise ConflictError(
                    f"This email is already linked to a different {provider.value.title()} account"
                )
            methods = current.auth_methods
            unconfirmed = {}
            if not current.is_email_verified:
                # A password never confirmed by OTP does not survive the link
                methods = methods - {AuthMethod.EMAIL}
                unconfirmed = {
                    "password_hash": None,
                    "email_otp_hash": None,
                    "email_otp_expires_at": None,
                    "otp_attempts": 0,
                }
            return current.model_copy(
                update={
                    **unconfirmed,
                    field: identity.provider_user_id,
                    "auth_methods": methods | {provider},
                    "is_email_verified": True,
                    "avatar_url": current.avatar_url or identity.avatar_url,
                    "last_login_at": now,
                }
            )

        user = await self.user_service.update(by_email.id, link)
        logfire.info("Provider linked by email", user_id=str(user.id), provider=provider.value)
        return OAuthLogin(user=user, linked=True)

    def _new_oauth_user(self, identity: OAuthIdentity) -> User:
        now = utcnow()
        email = (identity.email or "").lower()
        name = (identity.name or "").strip() or email.split("@")[0] or "Diary user"
        return User(
            id=UserId(uuid4()),
            email=email,
            name=name[:100],
            avatar_url=identity.avatar_url,
            auth_methods=frozenset({identity.provider}),
            is_email_verified=True,
            last_login_at=now,
            created_at=now,
            updated_at=now,
            **{_PROVIDER_ID_FIELD[identity.provider]: identity.provider_user_id},
        )
