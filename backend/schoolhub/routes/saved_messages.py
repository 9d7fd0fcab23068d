"""
SchoolHub Backend — Saved Messages Route Handlers
===================================================

What:  Bookmark / un-bookmark messages and list a user's bookmarks.
How:   Validates path and query parameters, delegates to
       SavedMessageService, serializes ids through id_to_string.
Who:   Called by the frontend messaging center and its "Saved" table.

Routes:
    PUT    /api/users/{user_id}/saved-messages/{message_id}   save (201 / 404 / 409)
    DELETE /api/users/{user_id}/saved-messages/{message_id}   unsave (204, idempotent)
    GET    /api/users/{user_id}/saved-messages                list
    GET    /api/users/{user_id}/saved-messages/table          rendered table page

Unknown `sort` values are rejected by the service with 400; malformed UUIDs
in the path are rejected by FastAPI with 422.
"""

import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from schoolhub.config import settings
from schoolhub.database import get_db_session
from schoolhub.exceptions import NotFoundError
from schoolhub.models.message import Message
from schoolhub.models.user import User
from schoolhub.schemas.saved_message import (
    ErrorResponse,
    SavedMessageListResponse,
    SavedMessageResponse,
    TablePageResponse,
)
from schoolhub.services.saved_message_service import SavedMessageEntry, saved_message_service
from schoolhub.utils.ids import id_to_string
from schoolhub.utils.table import ColumnDef, GenericTable

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users/{user_id}/saved-messages", tags=["Saved Messages"])

PREVIEW_LENGTH = 80


def _preview(content: str) -> str:
    text = " ".join((content or "").split())
    if len(text) <= PREVIEW_LENGTH:
        return text
    return text[:PREVIEW_LENGTH - 1].rstrip() + "…"


# Columns of the "Saved Messages" table, in display order
SAVED_MESSAGE_COLUMNS: List[ColumnDef[SavedMessageEntry]] = [
    ColumnDef("Message", lambda entry: _preview(entry.message.content)),
    ColumnDef("From", lambda entry: id_to_string(entry.message.sender_id)),
    ColumnDef(
        "Saved at",
        lambda entry: entry.saved.created_at.isoformat() if entry.saved.created_at else "",
    ),
]


@router.put(
    "/{message_id}",
    status_code=status.HTTP_201_CREATED,
    response_model=SavedMessageResponse,
    responses={
        404: {"description": "User or message not found", "model": ErrorResponse},
        409: {"description": "Message already saved by this user", "model": ErrorResponse},
    },
    summary="Save a message",
)
async def save_message(
    user_id: UUID,
    message_id: UUID,
    db: AsyncSession = Depends(get_db_session),
) -> SavedMessageResponse:
    """
    Bookmark a message for a user.

    The user and the message must exist (404 otherwise). Saving the same message twice
    answers 409 Conflict; the first bookmark is left untouched.
    """
    if await db.get(User, user_id) is None:
        raise NotFoundError(resource="user", resource_id=id_to_string(user_id))

    message = await db.get(Message, message_id)
    if message is None:
        raise NotFoundError(resource="message", resource_id=id_to_string(message_id))

    record = await saved_message_service.create(db, user_id=user_id, message_id=message_id)
    return SavedMessageResponse.from_record(record)


@router.delete(
    "/{message_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove a saved message",
)
async def unsave_message(
    user_id: UUID,
    message_id: UUID,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    """Remove a bookmark. Answers 204 whether or not the bookmark existed."""
    await saved_message_service.delete(db, user_id=user_id, message_id=message_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "",
    response_model=SavedMessageListResponse,
    responses={400: {"description": "Invalid sort", "model": ErrorResponse}},
    summary="List a user's saved messages",
)
async def list_saved_messages(
    user_id: UUID,
    response: Response,
    sort: str = Query(
        default="created_at_asc",
        description="created_at_asc (saved order) or created_at_desc (newest first)",
    ),
    q: str | None = Query(default=None, max_length=200, description="Search in message text"),
    db: AsyncSession = Depends(get_db_session),
) -> SavedMessageListResponse:
    """
    All bookmarks of a user, in saved order by default.

    With `q`, only bookmarks whose message text contains `q` (case-insensitive).
    The count is also sent as X-Total-Count.
    """
    if q and q.strip():
        entries = await saved_message_service.list_entries(db, user_id=user_id, search=q, sort=sort)
        records = [entry.saved for entry in entries]
    else:
        records = await saved_message_service.find_by_user(db, user_id=user_id, sort=sort)

    response.headers["X-Total-Count"] = str(len(records))
    return SavedMessageListResponse(
        saved_messages=[SavedMessageResponse.from_record(r) for r in records],
        total_count=len(records),
    )


@router.get(
    "/table",
    response_model=TablePageResponse,
    responses={400: {"description": "Invalid sort", "model": ErrorResponse}},
    summary="Render one page of a user's saved messages as a table",
)
async def saved_messages_table(
    user_id: UUID,
    page: int = Query(default=0, description="Zero-based page; out-of-range values are clamped"),
    rows_per_page: int | None = Query(default=None, ge=1, le=100),
    sort: str = Query(default="created_at_asc"),
    q: str | None = Query(default=None, max_length=200),
    db: AsyncSession = Depends(get_db_session),
) -> TablePageResponse:
    entries = await saved_message_service.list_entries(db, user_id=user_id, search=q, sort=sort)
    table = GenericTable(
        data=entries,
        columns=SAVED_MESSAGE_COLUMNS,
        rows_per_page=rows_per_page or settings.table_rows_per_page,
        page=page,
    )
    return TablePageResponse.from_rendered(table.render())
