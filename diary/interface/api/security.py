"""Bearer token authentication for routes."""

from uuid import UUID

from fastapi import HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from diary.domain.service import JWTService
from diary.domain.value import UserId
from diary.util.jwt import JWTError

bearer_scheme = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def require_user_id(
    credentials: HTTPAuthorizationCredentials | None, jwt_service: JWTService
) -> UserId:
    """Resolve the signed-in user from an ``Authorization: Bearer`` header.

    Args:
        credentials: Parsed header (None when absent)
        jwt_service: JWT token domain service

    Returns:
        ID of the authenticated user

    Raises:
        HTTPException: 401 if the token is missing, invalid or expired
    """
    if credentials is None or not credentials.credentials:
        raise _unauthorized("Authentication required")

    try:
        payload = jwt_service.verify_token(credentials.credentials)
        return UserId(UUID(payload.user_id))
    except JWTError as e:
        raise _unauthorized(str(e))
    except ValueError:
        raise _unauthorized("Invalid token")
