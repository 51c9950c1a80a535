"""Support routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends
from fastapi.security import HTTPAuthorizationCredentials

from diary.application.usecase.support import SendSupportEmailUseCase
from diary.application.usecase.support.send_support_email import (
    SupportEmailRequest,
    SupportEmailResponse,
)
from diary.domain.service import JWTService
from diary.interface.api.security import bearer_scheme, require_user_id

router = APIRouter(prefix="/support", tags=["support"], route_class=DishkaRoute)


@router.post("/send-email", response_model=SupportEmailResponse)
async def send_support_email(
    request: SupportEmailRequest,
    send_support_email_use_case: FromDishka[SendSupportEmailUseCase],
    jwt_service: FromDishka[JWTService],
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> SupportEmailResponse:
    """Send a message to the support inbox."""
    user_id = require_user_id(credentials, jwt_service)
    return await send_support_email_use_case.execute(user_id, request)
