"""Purchase routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends
from fastapi.security import HTTPAuthorizationCredentials

from diary.application.usecase.purchase import VerifyPurchaseUseCase
from diary.application.usecase.purchase.verify_purchase import (
    VerifyPurchaseRequest,
    VerifyPurchaseResponse,
)
from diary.domain.service import JWTService
from diary.interface.api.security import bearer_scheme, require_user_id

router = APIRouter(prefix="/purchase", tags=["purchase"], route_class=DishkaRoute)


@router.post("/verify", response_model=VerifyPurchaseResponse)
async def verify_purchase(
    request: VerifyPurchaseRequest,
    verify_purchase_use_case: FromDishka[VerifyPurchaseUseCase],
    jwt_service: FromDishka[JWTService],
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> VerifyPurchaseResponse:
    """Verify a Google Play / App Store purchase and grant premium."""
    user_id = require_user_id(credentials, jwt_service)
    return await verify_purchase_use_case.execute(user_id, request)
