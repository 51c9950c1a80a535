"""Google and Apple sign-in routes.

Web clients use the redirect flow (``GET /auth/{provider}`` then the
callback, which redirects to the client with a token). Native clients
post a provider ID token and receive the token as JSON.
"""

import json
import logging
from urllib.parse import urlencode

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Form, status
from fastapi.responses import RedirectResponse

from diary.adapter.error import AdapterError
from diary.application.usecase.auth import (
    IdTokenLoginUseCase,
    InitiateOAuthLoginUseCase,
    OAuthCallbackUseCase,
)
from diary.application.usecase.auth.common import AuthTokenResponse
from diary.application.usecase.auth.oauth_login import (
    IdTokenLoginRequest,
    OAuthCallbackRequest,
)
from diary.config import Settings
from diary.domain.error import DomainError
from diary.domain.value import AuthMethod

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["oauth"], route_class=DishkaRoute)


def _error_redirect(settings: Settings, error: str, message: str) -> RedirectResponse:
    query = urlencode({"error": error, "message": message})
    return RedirectResponse(
        url=f"{settings.api.client_url}/auth/error?{query}",
        status_code=status.HTTP_302_FOUND,
    )


async def _handle_callback(
    provider: AuthMethod,
    code: str | None,
    state: str | None,
    error: str | None,
    name: str | None,
    oauth_callback_use_case: OAuthCallbackUseCase,
    settings: Settings,
) -> RedirectResponse:
    """Shared OAuth callback handler for all providers."""
    logger.info(f"OAuth callback received: provider={provider.value}")

    if error or not code or not state:
        logger.warning(f"OAuth callback without code: provider={provider.value}, error={error}")
        return _error_redirect(settings, "auth_cancelled", error or "Missing authorization code")

    try:
        redirect_url = await oauth_callback_use_case.execute(
            OAuthCallbackRequest(provider=provider, code=code, state=state, name=name)
        )
    except DomainError as e:
        logger.warning(f"OAuth login rejected: provider={provider.value}, error={e}")
        return _error_redirect(settings, "auth_failed", str(e))
    except AdapterError as e:
        logger.error(f"OAuth provider error: provider={provider.value}, error={e}")
        return _error_redirect(settings, "provider_error", "Sign-in could not be completed")

    return RedirectResponse(url=redirect_url, status_code=status.HTTP_302_FOUND)


def _apple_user_name(user: str | None) -> str | None:
    """Extract the display name from Apple's first-login ``user`` form field."""
    if not user:
        return None
    try:
        name = json.loads(user).get("name") or {}
    except (ValueError, AttributeError):
        logger.warning("Apple user payload could not be parsed")
        return None
    full = " ".join(p for p in (name.get("firstName"), name.get("lastName")) if p)
    return full or None


@router.get("/google")
async def google_login(
    initiate_use_case: FromDishka[InitiateOAuthLoginUseCase],
) -> RedirectResponse:
    """Redirect to Google's consent screen."""
    url = await initiate_use_case.execute(AuthMethod.GOOGLE)
    return RedirectResponse(url=url, status_code=status.HTTP_302_FOUND)


@router.get("/google/callback")
async def google_callback(
    oauth_callback_use_case: FromDishka[OAuthCallbackUseCase],
    settings: FromDishka[Settings],
    code: str | None = None,
    state: str | None = None,
    error: str | None = None,
) -> RedirectResponse:
    """Finish Google sign-in and redirect to the client with a token.

    Google-only accounts get ``action=set-password`` so the client can
    offer to add a password.
    """
    return await _handle_callback(
        AuthMethod.GOOGLE, code, state, error, None, oauth_callback_use_case, settings
    )


@router.post("/google", response_model=AuthTokenResponse)
async def google_id_token_login(
    request: IdTokenLoginRequest,
    id_token_login_use_case: FromDishka[IdTokenLoginUseCase],
) -> AuthTokenResponse:
    """Sign in with a Google ID token obtained by a native client."""
    return await id_token_login_use_case.execute(AuthMethod.GOOGLE, request)


@router.get("/apple")
async def apple_login(
    initiate_use_case: FromDishka[InitiateOAuthLoginUseCase],
) -> RedirectResponse:
    """Redirect to Sign in with Apple."""
    url = await initiate_use_case.execute(AuthMethod.APPLE)
    return RedirectResponse(url=url, status_code=status.HTTP_302_FOUND)


@router.get("/apple/callback")
async def apple_callback_get(
    oauth_callback_use_case: FromDishka[OAuthCallbackUseCase],
    settings: FromDishka[Settings],
    code: str | None = None,
    state: str | None = None,
    error: str | None = None,
) -> RedirectResponse:
    """Finish Apple sign-in (query response mode)."""
    return await _handle_callback(
        AuthMethod.APPLE, code, state, error, None, oauth_callback_use_case, settings
    )


@router.post("/apple/callback")
async def apple_callback_post(
    oauth_callback_use_case: FromDishka[OAuthCallbackUseCase],
    settings: FromDishka[Settings],
    code: str | None = Form(default=None),
    state: str | None = Form(default=None),
    error: str | None = Form(default=None),
    user: str | None = Form(default=None),
) -> RedirectResponse:
    """Finish Apple sign-in (form_post response mode).

    Apple posts the user's name only on the first authorization.
    """
    return await _handle_callback(
        AuthMethod.APPLE,
        code,
        state,
        error,
        _apple_user_name(user),
        oauth_callback_use_case,
        settings,
    )


@router.post("/apple", response_model=AuthTokenResponse)
async def apple_id_token_login(
    request: IdTokenLoginRequest,
    id_token_login_use_case: FromDishka[IdTokenLoginUseCase],
) -> AuthTokenResponse:
    """Sign in with an Apple ID token obtained by a native client.

    Native clients pass ``name`` on first sign-in since Apple leaves it
    out of the token.
    """
    return await id_token_login_use_case.execute(AuthMethod.APPLE, request)
