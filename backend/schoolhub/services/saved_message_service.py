"""
SchoolHub Backend — Saved Message Service
===========================================

What:  Persists and queries the user → message "save" relationship.
How:   Plain SQLAlchemy statements against `saved_messages`; the database's
       composite unique constraint is the only duplicate check.
Who:   Called by the saved-messages route handlers.
When:  On every bookmark, un-bookmark and saved-list request.

Operations:
    create(user, message)   INSERT; DuplicateKeyError if the pair exists
    find_by_user(user)      all bookmarks, oldest first by default
    delete(user, message)   idempotent DELETE; missing rows are a no-op
    is_saved(user, message) existence probe
    list_entries(user)      bookmarks joined with their messages, searchable

NOTE: SavedMessageService never checks that the user or message exists.
That is the caller's job (the route answers 404 for unknown users and messages) and
the database's (foreign keys with ON DELETE CASCADE).
"""

import logging
from typing import List, NamedTuple, Optional
from uuid import UUID

from sqlalchemy import asc, delete, desc, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from schoolhub.exceptions import DatabaseError, DuplicateKeyError, ValidationError
from schoolhub.models.message import Message
from schoolhub.models.saved_message import UNIQUE_USER_MESSAGE, SavedMessage
from schoolhub.schemas.saved_message import SORT_OPTIONS
from schoolhub.utils.ids import id_to_string

logger = logging.getLogger(__name__)

# SQLSTATE for unique_violation (PostgreSQL / asyncpg)
UNIQUE_VIOLATION = "23505"


class SavedMessageEntry(NamedTuple):
    """A bookmark together with the message it points at."""

    saved: SavedMessage
    message: Message


def is_unique_violation(exc: IntegrityError) -> bool:
    """
    True when an IntegrityError comes from a unique constraint.

    asyncpg exposes the SQLSTATE on the wrapped driver error; SQLite only
    reports it in the message text ("UNIQUE constraint failed: ...").
    Foreign-key and NOT NULL failures are also IntegrityErrors and must not
    be reported as duplicates.
    """
    orig = getattr(exc, "orig", None)
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate:
        return sqlstate == UNIQUE_VIOLATION
    text = str(orig if orig is not None else exc).lower()
    return "unique constraint" in text or "duplicate key" in text


class SavedMessageService:
    """
    Stateless store for saved-message bookmarks.

    Every method takes the request's AsyncSession. Writes are flushed, not
    committed; `get_db_session` commits when the request succeeds.
    """

    async def create(self, db: AsyncSession, user_id: UUID, message_id: UUID) -> SavedMessage:
        """
        Bookmark `message_id` for `user_id`.

        Returns:
            The new SavedMessage with `id` and `created_at` assigned.

        Raises:
            DuplicateKeyError: the user already saved this message (→ 409)
            DatabaseError: any other database failure (→ 500)
        """
        record = SavedMessage(user_id=user_id, message_id=message_id)
        try:
            # Savepoint: a failed insert is undone without touching earlier
            # uncommitted work in the caller's transaction
            async with db.begin_nested():
                db.add(record)
                await db.flush()
        except IntegrityError as e:
            if is_unique_violation(e):
                logger.info(
                    "Duplicate save rejected: user=%s message=%s",
                    id_to_string(user_id), id_to_string(message_id),
                )
                raise DuplicateKeyError(
                    message="Message is already saved",
                    constraint=UNIQUE_USER_MESSAGE,
                    key={
                        "user_id": id_to_string(user_id),
                        "message_id": id_to_string(message_id),
                    },
                ) from e
            logger.error("Integrity error saving message: %s", str(e.orig))
            raise DatabaseError(
                message="Could not save the message. Please try again.",
                context={"error_type": type(e.orig).__name__},
            ) from e
        except SQLAlchemyError as e:
            logger.error("Database error saving message: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not save the message. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e

        logger.info(
            "Saved message %s for user %s (bookmark %s)",
            id_to_string(message_id), id_to_string(user_id), id_to_string(record.id),
        )
        return record

    async def find_by_user(
        self,
        db: AsyncSession,
        user_id: UUID,
        sort: str = "created_at_asc",
    ) -> List[SavedMessage]:
        """
        All bookmarks of `user_id`.

        Default order is oldest first (created_at, then id); pass
        sort="created_at_desc" for newest first.
        """
        query = (
            select(SavedMessage)
            .where(SavedMessage.user_id == user_id)
            .order_by(*self._ordering(sort))
        )
        try:
            result = await db.execute(query)
        except SQLAlchemyError as e:
            logger.error("Database error listing saved messages: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve saved messages. Please try again.",
                context={"user_id": id_to_string(user_id)},
            ) from e
        return list(result.scalars().all())

    async def delete(self, db: AsyncSession, user_id: UUID, message_id: UUID) -> bool:
        """
        Remove the bookmark if present. Returns True if a row was deleted.

        Deleting a bookmark that does not exist is not an error; calling this
        twice leaves the same state as calling it once.
        """
        statement = delete(SavedMessage).where(
            SavedMessage.user_id == user_id,
            SavedMessage.message_id == message_id,
        )
        try:
            result = await db.execute(statement)
        except SQLAlchemyError as e:
            logger.error("Database error removing saved message: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not remove the saved message. Please try again.",
                context={"user_id": id_to_string(user_id), "message_id": id_to_string(message_id)},
            ) from e

        removed = (result.rowcount or 0) > 0
        if removed:
            logger.info(
                "Removed saved message %s for user %s",
                id_to_string(message_id), id_to_string(user_id),
            )
        return removed

    async def is_saved(self, db: AsyncSession, user_id: UUID, message_id: UUID) -> bool:
        query = select(func.count()).select_from(SavedMessage).where(
            SavedMessage.user_id == user_id,
            SavedMessage.message_id == message_id,
        )
        result = await db.execute(query)
        return (result.scalar() or 0) > 0

    async def list_entries(
        self,
        db: AsyncSession,
        user_id: UUID,
        search: Optional[str] = None,
        sort: str = "created_at_asc",
    ) -> List[SavedMessageEntry]:
        """
        Bookmarks of `user_id` joined with their messages.

        `search` filters on a case-insensitive substring of the message text.
        Blank searches are ignored.
        """
        query = (
            select(SavedMessage, Message)
            .join(Message, Message.id == SavedMessage.message_id)
            .where(SavedMessage.user_id == user_id)
        )

        term = (search or "").strip()
        if term:
            escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
            query = query.where(Message.content.ilike(f"%{escaped}%", escape="\\"))

        query = query.order_by(*self._ordering(sort))

        try:
            result = await db.execute(query)
        except SQLAlchemyError as e:
            logger.error("Database error listing saved entries: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve saved messages. Please try again.",
                context={"user_id": id_to_string(user_id)},
            ) from e

        return [SavedMessageEntry(saved=saved, message=message) for saved, message in result.all()]

    @staticmethod
    def _ordering(sort: str):
        if sort not in SORT_OPTIONS:
            raise ValidationError(
                message=f"Invalid sort '{sort}'. Must be one of: {', '.join(SORT_OPTIONS)}",
                field="sort",
            )
        direction = desc if sort == "created_at_desc" else asc
        # id only makes the order total; rows with equal timestamps are not
        # guaranteed to come back in insertion order
        return direction(SavedMessage.created_at), direction(SavedMessage.id)


# ── Singleton Instance ────────────────────────────────────────────────────
saved_message_service = SavedMessageService()
