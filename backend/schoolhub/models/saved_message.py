"""
SchoolHub Backend — SavedMessage SQLAlchemy Model
===================================================

What:  ORM model for the `saved_messages` table: a user's bookmark of a message.
How:   Two non-owning foreign keys plus a creation timestamp. A composite
       unique constraint allows at most one bookmark per (user, message).
Who:   Written and read by SavedMessageService; tracked by Alembic.

Lifecycle:
    1. Created when a user bookmarks a message
    2. Never updated (no updated_at column)
    3. Deleted when the user removes the bookmark, or by the database when
       the referenced user or message is deleted (ON DELETE CASCADE)

Concurrency:
    Two concurrent requests saving the same pair both issue a plain INSERT.
    The unique constraint lets exactly one of them commit; the other gets an
    IntegrityError that the service turns into DuplicateKeyError. There is
    no check-then-insert step that could race.

Query Patterns:
    - Bookmarks of a user, oldest first:
      SELECT ... WHERE user_id = :uid ORDER BY created_at
      → idx_saved_messages_user_id
    - Is this message saved by this user?
      SELECT ... WHERE user_id = :uid AND message_id = :mid
      → uq_saved_messages_user_message (unique index)
    - Who saved this message? (cascade / cleanup)
      → idx_saved_messages_message_id
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Index, UniqueConstraint, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from schoolhub.database import Base

UNIQUE_USER_MESSAGE = "uq_saved_messages_user_message"


class SavedMessage(Base):
    """A single (user, message) bookmark. Immutable after creation."""

    __tablename__ = "saved_messages"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    message_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("messages.id", ondelete="CASCADE"),
        nullable=False,
    )

    # UTC; set once at insert
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    __table_args__ = (
        UniqueConstraint("user_id", "message_id", name=UNIQUE_USER_MESSAGE),
        Index("idx_saved_messages_user_id", "user_id"),
        Index("idx_saved_messages_message_id", "message_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<SavedMessage(id={self.id}, user_id={self.user_id}, "
            f"message_id={self.message_id}, created_at='{self.created_at}')>"
        )
