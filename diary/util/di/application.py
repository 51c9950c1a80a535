"""Application layer DI providers."""

from dishka import Scope, provide

from diary.application.usecase.auth import (
    ChangePasswordUseCase,
    ForgotPasswordTemporaryUseCase,
    ForgotPasswordUseCase,
    GetCurrentUserUseCase,
    IdTokenLoginUseCase,
    InitiateOAuthLoginUseCase,
    LoginUseCase,
    OAuthCallbackUseCase,
    RegisterUseCase,
    ResendOtpUseCase,
    ResetPasswordUseCase,
    UpdateProfileUseCase,
    VerifyOtpUseCase,
)
from diary.application.usecase.entry import (
    CreateEntryUseCase,
    DeleteEntryUseCase,
    DeleteMediaUseCase,
    EntryStatsUseCase,
    GetEntryUseCase,
    ListEntriesUseCase,
    SearchEntriesUseCase,
    UpdateEntryUseCase,
)
from diary.application.usecase.journal import (
    CreateJournalUseCase,
    DeleteJournalUseCase,
    GetJournalUseCase,
    ListJournalsUseCase,
    UpdateJournalUseCase,
)
from diary.application.usecase.purchase import VerifyPurchaseUseCase
from diary.application.usecase.support import SendSupportEmailUseCase
from diary.config import AuthSettings, Settings
from diary.domain.service import (
    AccountLinker,
    AuthService,
    EmailService,
    EntryService,
    JournalService,
    JWTService,
    LoginGuard,
    MediaStorage,
    OtpService,
    PasswordService,
    PurchaseService,
    UserService,
)
from diary.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    scope = Scope.REQUEST

    # Auth use cases
    @provide
    def get_register_use_case(
        self,
        account_linker: AccountLinker,
        email_service: EmailService,
        auth_settings: AuthSettings,
    ) -> RegisterUseCase:
        """Provide register use case."""
        return RegisterUseCase(
            account_linker=account_linker,
            email_service=email_service,
            auth_settings=auth_settings,
        )

    @provide
    def get_verify_otp_use_case(
        self,
        user_service: UserService,
        otp_service: OtpService,
        jwt_service: JWTService,
    ) -> VerifyOtpUseCase:
        """Provide verify OTP use case."""
        return VerifyOtpUseCase(
            user_service=user_service, otp_service=otp_service, jwt_service=jwt_service
        )

    @provide
    def get_resend_otp_use_case(
        self,
        user_service: UserService,
        otp_service: OtpService,
        email_service: EmailService,
        auth_settings: AuthSettings,
    ) -> ResendOtpUseCase:
        """Provide resend OTP use case."""
        return ResendOtpUseCase(
            user_service=user_service,
            otp_service=otp_service,
            email_service=email_service,
            auth_settings=auth_settings,
        )

    @provide
    def get_login_use_case(
        self, login_guard: LoginGuard, jwt_service: JWTService
    ) -> LoginUseCase:
        """Provide login use case."""
        return LoginUseCase(login_guard=login_guard, jwt_service=jwt_service)

    @provide
    def get_forgot_password_use_case(
        self,
        user_service: UserService,
        password_service: PasswordService,
        email_service: EmailService,
        auth_settings: AuthSettings,
    ) -> ForgotPasswordUseCase:
        """Provide forgot password (setup link) use case."""
        return ForgotPasswordUseCase(
            user_service=user_service,
            password_service=password_service,
            email_service=email_service,
            auth_settings=auth_settings,
        )

    @provide
    def get_forgot_password_temporary_use_case(
        self,
        user_service: UserService,
        password_service: PasswordService,
        email_service: EmailService,
    ) -> ForgotPasswordTemporaryUseCase:
        """Provide forgot password (temporary password) use case."""
        return ForgotPasswordTemporaryUseCase(
            user_service=user_service,
            password_service=password_service,
            email_service=email_service,
        )

    @provide
    def get_reset_password_use_case(
        self,
        user_service: UserService,
        password_service: PasswordService,
        jwt_service: JWTService,
    ) -> ResetPasswordUseCase:
        """Provide reset password use case."""
        return ResetPasswordUseCase(
            user_service=user_service,
            password_service=password_service,
            jwt_service=jwt_service,
        )

    @provide
    def get_change_password_use_case(
        self, user_service: UserService, password_service: PasswordService
    ) -> ChangePasswordUseCase:
        """Provide change password use case."""
        return ChangePasswordUseCase(
            user_service=user_service, password_service=password_service
        )

    @provide
    def get_current_user_use_case(
        self, user_service: UserService
    ) -> GetCurrentUserUseCase:
        """Provide get current user use case."""
        return GetCurrentUserUseCase(user_service=user_service)

    @provide
    def get_update_profile_use_case(
        self, user_service: UserService, media_storage: MediaStorage
    ) -> UpdateProfileUseCase:
        """Provide update profile use case."""
        return UpdateProfileUseCase(
            user_service=user_service, media_storage=media_storage
        )

    @provide
    def get_initiate_oauth_login_use_case(
        self, auth_service: AuthService
    ) -> InitiateOAuthLoginUseCase:
        """Provide OAuth redirect use case."""
        return InitiateOAuthLoginUseCase(auth_service=auth_service)

    @provide
    def get_oauth_callback_use_case(
        self,
        auth_service: AuthService,
        account_linker: AccountLinker,
        jwt_service: JWTService,
        settings: Settings,
    ) -> OAuthCallbackUseCase:
        """Provide OAuth callback use case."""
        return OAuthCallbackUseCase(
            auth_service=auth_service,
            account_linker=account_linker,
            jwt_service=jwt_service,
            settings=settings,
        )

    @provide
    def get_id_token_login_use_case(
        self,
        auth_service: AuthService,
        account_linker: AccountLinker,
        jwt_service: JWTService,
    ) -> IdTokenLoginUseCase:
        """Provide native ID token login use case."""
        return IdTokenLoginUseCase(
            auth_service=auth_service,
            account_linker=account_linker,
            jwt_service=jwt_service,
        )

    # Journal use cases
    @provide
    def get_list_journals_use_case(
        self, journal_service: JournalService
    ) -> ListJournalsUseCase:
        """Provide list journals use case."""
        return ListJournalsUseCase(journal_service=journal_service)

    @provide
    def get_get_journal_use_case(
        self, journal_service: JournalService
    ) -> GetJournalUseCase:
        """Provide get journal use case."""
        return GetJournalUseCase(journal_service=journal_service)

    @provide
    def get_create_journal_use_case(
        self, journal_service: JournalService, user_service: UserService
    ) -> CreateJournalUseCase:
        """Provide create journal use case."""
        return CreateJournalUseCase(
            journal_service=journal_service, user_service=user_service
        )

    @provide
    def get_update_journal_use_case(
        self, journal_service: JournalService
    ) -> UpdateJournalUseCase:
        """Provide update journal use case."""
        return UpdateJournalUseCase(journal_service=journal_service)

    @provide
    def get_delete_journal_use_case(
        self, journal_service: JournalService
    ) -> DeleteJournalUseCase:
        """Provide delete journal use case."""
        return DeleteJournalUseCase(journal_service=journal_service)

    # Entry use cases
    @provide
    def get_create_entry_use_case(self, entry_service: EntryService) -> CreateEntryUseCase:
        """Provide create entry use case."""
        return CreateEntryUseCase(entry_service=entry_service)

    @provide
    def get_list_entries_use_case(self, entry_service: EntryService) -> ListEntriesUseCase:
        """Provide list entries use case."""
        return ListEntriesUseCase(entry_service=entry_service)

    @provide
    def get_get_entry_use_case(self, entry_service: EntryService) -> GetEntryUseCase:
        """Provide get entry use case."""
        return GetEntryUseCase(entry_service=entry_service)

    @provide
    def get_update_entry_use_case(self, entry_service: EntryService) -> UpdateEntryUseCase:
        """Provide update entry use case."""
        return UpdateEntryUseCase(entry_service=entry_service)

    @provide
    def get_delete_entry_use_case(self, entry_service: EntryService) -> DeleteEntryUseCase:
        """Provide delete entry use case."""
        return DeleteEntryUseCase(entry_service=entry_service)

    @provide
    def get_delete_media_use_case(self, entry_service: EntryService) -> DeleteMediaUseCase:
        """Provide delete media use case."""
        return DeleteMediaUseCase(entry_service=entry_service)

    @provide
    def get_search_entries_use_case(
        self, entry_service: EntryService
    ) -> SearchEntriesUseCase:
        """Provide search entries use case."""
        return SearchEntriesUseCase(entry_service=entry_service)

    @provide
    def get_entry_stats_use_case(self, entry_service: EntryService) -> EntryStatsUseCase:
        """Provide entry statistics use case."""
        return EntryStatsUseCase(entry_service=entry_service)

    # Purchase and support use cases
    @provide
    def get_verify_purchase_use_case(
        self, purchase_service: PurchaseService
    ) -> VerifyPurchaseUseCase:
        """Provide verify purchase use case."""
        return VerifyPurchaseUseCase(purchase_service=purchase_service)

    @provide
    def get_send_support_email_use_case(
        self, user_service: UserService, email_service: EmailService
    ) -> SendSupportEmailUseCase:
        """Provide support email use case."""
        return SendSupportEmailUseCase(
            user_service=user_service, email_service=email_service
        )
