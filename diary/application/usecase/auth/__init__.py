"""Authentication use cases."""

from .change_password import ChangePasswordUseCase
from .forgot_password import ForgotPasswordTemporaryUseCase, ForgotPasswordUseCase
from .get_current_user import GetCurrentUserUseCase
from .login import LoginUseCase
from .oauth_login import (
    IdTokenLoginUseCase,
    InitiateOAuthLoginUseCase,
    OAuthCallbackUseCase,
)
from .register import RegisterUseCase
from .resend_otp import ResendOtpUseCase
from .reset_password import ResetPasswordUseCase
from .update_profile import UpdateProfileUseCase
from .verify_otp import VerifyOtpUseCase

__all__ = [
    "ChangePasswordUseCase",
    "ForgotPasswordTemporaryUseCase",
    "ForgotPasswordUseCase",
    "GetCurrentUserUseCase",
    "IdTokenLoginUseCase",
    "InitiateOAuthLoginUseCase",
    "LoginUseCase",
    "OAuthCallbackUseCase",
    "RegisterUseCase",
    "ResendOtpUseCase",
    "ResetPasswordUseCase",
    "UpdateProfileUseCase",
    "VerifyOtpUseCase",
]
