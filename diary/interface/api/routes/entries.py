"""Entry routes.

Create and update take multipart forms so media can be uploaded with the
entry. ``location`` and ``format_spans`` are sent as JSON strings.
"""

import json
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from fastapi.security import HTTPAuthorizationCredentials

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
from diary.application.usecase.entry.common import EntryItem, EntryListResponse
from diary.application.usecase.entry.create_entry import CreateEntryRequest
from diary.application.usecase.entry.entry_stats import EntryStatsResponse
from diary.application.usecase.entry.list_entries import ListEntriesRequest
from diary.application.usecase.entry.search_entries import SearchEntriesRequest
from diary.application.usecase.entry.update_entry import UpdateEntryRequest
from diary.config import Settings
from diary.domain.error import ValidationError
from diary.domain.service import JWTService
from diary.domain.value import EntryId, MediaId
from diary.interface.api.security import bearer_scheme, require_user_id
from diary.interface.api.uploads import read_uploads

router = APIRouter(prefix="/entries", tags=["entries"], route_class=DishkaRoute)


def _parse_json(field: str, value: str):
    try:
        return json.loads(value)
    except ValueError:
        raise ValidationError(f"{field} must be valid JSON")


def _form_fields(**fields: str | None) -> dict:
    """Collect the form fields that were sent, decoding the JSON ones."""
    data = {}
    for key, value in fields.items():
        if value is None:
            continue
        if key in ("location", "format_spans"):
            data[key] = _parse_json(key, value) if value else None
        elif key == "journal_id" and value in ("", "null"):
            data[key] = None
        else:
            data[key] = value
    return data


@router.post("", response_model=EntryItem, status_code=status.HTTP_201_CREATED)
async def create_entry(
    create_entry_use_case: FromDishka[CreateEntryUseCase],
    jwt_service: FromDishka[JWTService],
    settings: FromDishka[Settings],
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    title: str = Form(default=""),
    description: str = Form(default=""),
    journal_id: str | None = Form(default=None),
    location: str | None = Form(default=None),
    format_spans: str | None = Form(default=None),
    created_at: str | None = Form(default=None),
    media: list[UploadFile] | None = File(default=None),
) -> EntryItem:
    """Create an entry with optional media files."""
    user_id = require_user_id(credentials, jwt_service)
    request = CreateEntryRequest.model_validate(
        _form_fields(
            title=title,
            description=description,
            journal_id=journal_id,
            location=location,
            format_spans=format_spans,
            created_at=created_at,
        )
    )
    uploads = await read_uploads(media, settings.storage.max_upload_bytes)
    return await create_entry_use_case.execute(user_id, request, uploads)


@router.get("", response_model=EntryListResponse)
async def list_entries(
    list_entries_use_case: FromDishka[ListEntriesUseCase],
    jwt_service: FromDishka[JWTService],
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    journal_id: UUID | None = Query(default=None),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
) -> EntryListResponse:
    """List entries newest first, optionally for one journal."""
    user_id = require_user_id(credentials, jwt_service)
    return await list_entries_use_case.execute(
        user_id, ListEntriesRequest(journal_id=journal_id, page=page, limit=limit)
    )


@router.get("/search", response_model=EntryListResponse)
async def search_entries(
    search_entries_use_case: FromDishka[SearchEntriesUseCase],
    jwt_service: FromDishka[JWTService],
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    q: str = Query(default=""),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
) -> EntryListResponse:
    """Search titles and descriptions (case-insensitive)."""
    user_id = require_user_id(credentials, jwt_service)
    return await search_entries_use_case.execute(
        user_id, SearchEntriesRequest(q=q, page=page, limit=limit)
    )


@router.get("/stats", response_model=EntryStatsResponse)
async def entry_stats(
    entry_stats_use_case: FromDishka[EntryStatsUseCase],
    jwt_service: FromDishka[JWTService],
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> EntryStatsResponse:
    user_id = require_user_id(credentials, jwt_service)
    return await entry_stats_use_case.execute(user_id)


@router.get("/{entry_id}", response_model=EntryItem)
async def get_entry(
    entry_id: UUID,
    get_entry_use_case: FromDishka[GetEntryUseCase],
    jwt_service: FromDishka[JWTService],
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> EntryItem:
    user_id = require_user_id(credentials, jwt_service)
    return await get_entry_use_case.execute(EntryId(entry_id), user_id)


@router.put("/{entry_id}", response_model=EntryItem)
async def update_entry(
    entry_id: UUID,
    update_entry_use_case: FromDishka[UpdateEntryUseCase],
    jwt_service: FromDishka[JWTService],
    settings: FromDishka[Settings],
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    title: str | None = Form(default=None),
    description: str | None = Form(default=None),
    journal_id: str | None = Form(default=None),
    location: str | None = Form(default=None),
    format_spans: str | None = Form(default=None),
    created_at: str | None = Form(default=None),
    media: list[UploadFile] | None = File(default=None),
) -> EntryItem:
    """Update the sent fields; uploaded files are appended to the media."""
    user_id = require_user_id(credentials, jwt_service)
    request = UpdateEntryRequest.model_validate(
        _form_fields(
            title=title,
            description=description,
            journal_id=journal_id,
            location=location,
            format_spans=format_spans,
            created_at=created_at,
        )
    )
    uploads = await read_uploads(media, settings.storage.max_upload_bytes)
    return await update_entry_use_case.execute(
        EntryId(entry_id), user_id, request, uploads
    )


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_entry(
    entry_id: UUID,
    delete_entry_use_case: FromDishka[DeleteEntryUseCase],
    jwt_service: FromDishka[JWTService],
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> None:
    user_id = require_user_id(credentials, jwt_service)
    await delete_entry_use_case.execute(EntryId(entry_id), user_id)


@router.delete("/{entry_id}/media/{media_id}", response_model=EntryItem)
async def delete_media(
    entry_id: UUID,
    media_id: UUID,
    delete_media_use_case: FromDishka[DeleteMediaUseCase],
    jwt_service: FromDishka[JWTService],
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> EntryItem:
    """Remove one media item from an entry."""
    user_id = require_user_id(credentials, jwt_service)
    return await delete_media_use_case.execute(
        EntryId(entry_id), MediaId(media_id), user_id
    )
