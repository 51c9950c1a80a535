"""Domain layer DI providers."""

from dishka import Scope, provide

from diary.config import AuthSettings, Settings
from diary.domain.repository import EntryRepository, JournalRepository, UserRepository
from diary.domain.service import (
    AccountLinker,
    AuthService,
    EmailClient,
    EmailService,
    EntryService,
    JournalService,
    JWTService,
    LoginGuard,
    MediaStorage,
    OAuthClient,
    OtpService,
    PasswordService,
    PurchaseService,
    ReceiptVerifier,
    UserService,
)
from diary.domain.value import AuthMethod
from diary.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    """

    scope = Scope.REQUEST

    @provide
    def get_auth_service(
        self, oauth_clients: dict[AuthMethod, OAuthClient]
    ) -> AuthService:
        """Provide multi-provider authentication domain service.

        Args:
            oauth_clients: Dictionary mapping providers to their OAuth clients

        Returns:
            AuthService configured with all available OAuth clients
        """
        return AuthService(oauth_clients=oauth_clients)

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_password_service(self, auth_settings: AuthSettings) -> PasswordService:
        return PasswordService(auth_settings=auth_settings)

    @provide
    def get_otp_service(self, auth_settings: AuthSettings) -> OtpService:
        return OtpService(auth_settings=auth_settings)

    @provide
    def get_user_service(self, user_repository: UserRepository) -> UserService:
        """Provide user domain service."""
        return UserService(user_repository=user_repository)

    @provide
    def get_login_guard(
        self,
        user_service: UserService,
        password_service: PasswordService,
        auth_settings: AuthSettings,
    ) -> LoginGuard:
        """Provide password login guard."""
        return LoginGuard(
            user_service=user_service,
            password_service=password_service,
            auth_settings=auth_settings,
        )

    @provide
    def get_account_linker(
        self,
        user_service: UserService,
        password_service: PasswordService,
        otp_service: OtpService,
    ) -> AccountLinker:
        """Provide account linking domain service."""
        return AccountLinker(
            user_service=user_service,
            password_service=password_service,
            otp_service=otp_service,
        )

    @provide
    def get_email_service(
        self, email_client: EmailClient, settings: Settings
    ) -> EmailService:
        """Provide email domain service."""
        return EmailService(
            email_client=email_client,
            support_address=settings.email.support_email or settings.email.from_email,
            client_url=settings.api.client_url,
        )

    @provide
    def get_journal_service(
        self, journal_repository: JournalRepository, settings: Settings
    ) -> JournalService:
        """Provide journal domain service."""
        return JournalService(
            journal_repository=journal_repository,
            free_journal_limit=settings.premium.free_journal_limit,
        )

    @provide
    def get_entry_service(
        self,
        entry_repository: EntryRepository,
        journal_repository: JournalRepository,
        media_storage: MediaStorage,
    ) -> EntryService:
        """Provide entry domain service."""
        return EntryService(
            entry_repository=entry_repository,
            journal_repository=journal_repository,
            media_storage=media_storage,
        )

    @provide
    def get_purchase_service(
        self,
        user_service: UserService,
        receipt_verifier: ReceiptVerifier,
        settings: Settings,
    ) -> PurchaseService:
        """Provide purchase domain service."""
        return PurchaseService(
            user_service=user_service,
            receipt_verifier=receipt_verifier,
            product_ids=settings.premium.product_ids,
        )
