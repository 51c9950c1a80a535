"""Domain services."""

from .account_linker import AccountLinker, OAuthLogin, Registration
from .auth_service import AuthService, OAuthClient
from .base import Service
from .email_service import EmailClient, EmailService
from .entry_service import EntryPage, EntryService, EntryStats, MonthCount, Upload
from .journal_service import JournalService
from .jwt_service import JWTService
from .login_guard import LoginGuard
from .otp_service import OtpCheck, OtpService
from .password_service import PasswordService
from .purchase_service import PurchaseService, ReceiptVerifier
from .storage_service import MediaStorage, StoredFile
from .user_service import UserService

__all__ = [
    "AccountLinker",
    "AuthService",
    "EmailClient",
    "EmailService",
    "EntryPage",
    "EntryService",
    "EntryStats",
    "JWTService",
    "JournalService",
    "LoginGuard",
    "MediaStorage",
    "MonthCount",
    "OAuthClient",
    "OAuthLogin",
    "OtpCheck",
    "OtpService",
    "PasswordService",
    "PurchaseService",
    "ReceiptVerifier",
    "Registration",
    "Service",
    "StoredFile",
    "Upload",
    "UserService",
]
