"""Journal routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, status
from fastapi.security import HTTPAuthorizationCredentials

from diary.application.usecase.journal import (
    CreateJournalUseCase,
    DeleteJournalUseCase,
    GetJournalUseCase,
    ListJournalsUseCase,
    UpdateJournalUseCase,
)
from diary.application.usecase.journal.common import JournalItem
from diary.application.usecase.journal.create_journal import CreateJournalRequest
from diary.application.usecase.journal.list_journals import ListJournalsResponse
from diary.application.usecase.journal.update_journal import UpdateJournalRequest
from diary.domain.service import JWTService
from diary.domain.value import JournalId
from diary.interface.api.security import bearer_scheme, require_user_id

router = APIRouter(prefix="/journals", tags=["journals"], route_class=DishkaRoute)


@router.get("", response_model=ListJournalsResponse)
async def list_journals(
    list_journals_use_case: FromDishka[ListJournalsUseCase],
    jwt_service: FromDishka[JWTService],
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> ListJournalsResponse:
    """List the user's journals, oldest first, with entry counts."""
    user_id = require_user_id(credentials, jwt_service)
    return await list_journals_use_case.execute(user_id)


@router.post("", response_model=JournalItem, status_code=status.HTTP_201_CREATED)
async def create_journal(
    request: CreateJournalRequest,
    create_journal_use_case: FromDishka[CreateJournalUseCase],
    jwt_service: FromDishka[JWTService],
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> JournalItem:
    """Create a journal. Free accounts are limited; 403 past the limit."""
    user_id = require_user_id(credentials, jwt_service)
    return await create_journal_use_case.execute(user_id, request)


@router.get("/{journal_id}", response_model=JournalItem)
async def get_journal(
    journal_id: UUID,
    get_journal_use_case: FromDishka[GetJournalUseCase],
    jwt_service: FromDishka[JWTService],
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> JournalItem:
    user_id = require_user_id(credentials, jwt_service)
    return await get_journal_use_case.execute(JournalId(journal_id), user_id)


@router.put("/{journal_id}", response_model=JournalItem)
async def update_journal(
    journal_id: UUID,
    request: UpdateJournalRequest,
    update_journal_use_case: FromDishka[UpdateJournalUseCase],
    jwt_service: FromDishka[JWTService],
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> JournalItem:
    user_id = require_user_id(credentials, jwt_service)
    return await update_journal_use_case.execute(JournalId(journal_id), user_id, request)


@router.delete("/{journal_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_journal(
    journal_id: UUID,
    delete_journal_use_case: FromDishka[DeleteJournalUseCase],
    jwt_service: FromDishka[JWTService],
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> None:
    """Delete a journal; its entries remain without a journal."""
    user_id = require_user_id(credentials, jwt_service)
    await delete_journal_use_case.execute(JournalId(journal_id), user_id)
