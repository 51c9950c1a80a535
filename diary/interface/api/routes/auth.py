"""Email/password authentication and profile routes."""

import logging

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, File, Form, Response, UploadFile, status
from fastapi.security import HTTPAuthorizationCredentials

from diary.application.usecase.auth import (
    ChangePasswordUseCase,
    ForgotPasswordTemporaryUseCase,
    ForgotPasswordUseCase,
    GetCurrentUserUseCase,
    LoginUseCase,
    RegisterUseCase,
    ResendOtpUseCase,
    ResetPasswordUseCase,
    UpdateProfileUseCase,
    VerifyOtpUseCase,
)
from diary.application.usecase.auth.change_password import ChangePasswordRequest
from diary.application.usecase.auth.common import (
    AuthTokenResponse,
    MessageResponse,
    UserInfo,
)
from diary.application.usecase.auth.forgot_password import ForgotPasswordRequest
from diary.application.usecase.auth.login import LoginRequest
from diary.application.usecase.auth.register import RegisterRequest, RegisterResponse
from diary.application.usecase.auth.resend_otp import ResendOtpRequest
from diary.application.usecase.auth.reset_password import ResetPasswordRequest
from diary.application.usecase.auth.update_profile import UpdateProfileRequest
from diary.application.usecase.auth.verify_otp import VerifyOtpRequest
from diary.config import Settings
from diary.domain.service import JWTService
from diary.interface.api.security import bearer_scheme, require_user_id
from diary.interface.api.uploads import read_upload

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"], route_class=DishkaRoute)


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(
    request: RegisterRequest,
    response: Response,
    register_use_case: FromDishka[RegisterUseCase],
) -> RegisterResponse:
    """Register with email and password.

    Answers 201 for a new account. When the email belongs to a Google or
    Apple account the password is attached pending OTP confirmation and
    the answer is 200 with ``linking_account: true``.
    """
    result = await register_use_case.execute(request)
    if result.linking_account:
        response.status_code = status.HTTP_200_OK
    logger.info(f"Registration accepted (linking={result.linking_account})")
    return result


@router.post("/verify-otp", response_model=AuthTokenResponse)
async def verify_otp(
    request: VerifyOtpRequest,
    verify_otp_use_case: FromDishka[VerifyOtpUseCase],
) -> AuthTokenResponse:
    """Confirm the email address with the emailed code and sign in."""
    return await verify_otp_use_case.execute(request)


@router.post("/resend-otp", response_model=MessageResponse)
async def resend_otp(
    request: ResendOtpRequest,
    resend_otp_use_case: FromDishka[ResendOtpUseCase],
) -> MessageResponse:
    """Send a fresh verification code if the account needs one."""
    return await resend_otp_use_case.execute(request)


@router.post("/login", response_model=AuthTokenResponse)
async def login(
    request: LoginRequest,
    login_use_case: FromDishka[LoginUseCase],
) -> AuthTokenResponse:
    """Sign in with email and password.

    Errors carry a ``code`` telling the client what to do next:
    ``invalid_credentials``, ``requires_verification`` or ``use_oauth``.
    """
    return await login_use_case.execute(request)


@router.post("/forgot-password", response_model=MessageResponse)
async def forgot_password(
    request: ForgotPasswordRequest,
    forgot_password_use_case: FromDishka[ForgotPasswordUseCase],
) -> MessageResponse:
    """Email a password setup link to a Google/Apple-only account."""
    return await forgot_password_use_case.execute(request)


@router.post("/forgot-password/temporary", response_model=MessageResponse)
async def forgot_password_temporary(
    request: ForgotPasswordRequest,
    forgot_password_temporary_use_case: FromDishka[ForgotPasswordTemporaryUseCase],
) -> MessageResponse:
    """Replace a forgotten password with an emailed temporary one."""
    return await forgot_password_temporary_use_case.execute(request)


@router.post("/reset-password", response_model=AuthTokenResponse)
async def reset_password(
    request: ResetPasswordRequest,
    reset_password_use_case: FromDishka[ResetPasswordUseCase],
) -> AuthTokenResponse:
    """Set a password from an emailed setup link token."""
    return await reset_password_use_case.execute(request)


@router.post("/change-password", response_model=MessageResponse)
async def change_password(
    request: ChangePasswordRequest,
    change_password_use_case: FromDishka[ChangePasswordUseCase],
    jwt_service: FromDishka[JWTService],
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> MessageResponse:
    """Change the password of the signed-in user."""
    user_id = require_user_id(credentials, jwt_service)
    return await change_password_use_case.execute(user_id, request)


@router.get("/me", response_model=UserInfo)
async def get_me(
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    jwt_service: FromDishka[JWTService],
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> UserInfo:
    """Get the signed-in user."""
    user_id = require_user_id(credentials, jwt_service)
    return await get_current_user_use_case.execute(user_id)


@router.patch("/me", response_model=UserInfo)
async def update_me(
    update_profile_use_case: FromDishka[UpdateProfileUseCase],
    jwt_service: FromDishka[JWTService],
    settings: FromDishka[Settings],
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    name: str | None = Form(default=None),
    avatar: UploadFile | None = File(default=None),
) -> UserInfo:
    """Update name and/or avatar (multipart form)."""
    user_id = require_user_id(credentials, jwt_service)
    upload = None
    if avatar is not None and avatar.filename:
        upload = await read_upload(avatar, settings.storage.max_upload_bytes)
    return await update_profile_use_case.execute(
        user_id, UpdateProfileRequest(name=name), upload
    )
