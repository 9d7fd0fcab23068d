"""
SchoolHub Backend — User SQLAlchemy Model
===========================================

Thin account record. Registration, authentication and profile management
live outside this service; the row exists so messages and saved-message
bookmarks have something to reference.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, String, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from schoolhub.database import Base

USER_ROLES = ("admin", "head", "teacher", "student")


class User(Base):
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    # Stored lowercase; unique across all accounts
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)

    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)

    # One of USER_ROLES
    role: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default="teacher",
        server_default=text("'teacher'"),
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"
