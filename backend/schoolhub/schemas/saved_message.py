"""
SchoolHub Backend — Pydantic Request/Response Schemas
=======================================================

What:  Pydantic models defining the API contract between frontend and backend.
How:   FastAPI serializes these as JSON responses and documents them in OpenAPI.
       Every identifier is passed through `id_to_string` before it lands in a
       schema, so ids always cross the boundary as plain strings.
"""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, Field

from schoolhub.utils.ids import id_to_string
from schoolhub.utils.table import RenderedTable

SORT_OPTIONS = ("created_at_asc", "created_at_desc")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class SavedMessageResponse(BaseModel):
    """A single saved-message bookmark."""

    id: str = Field(description="Bookmark identifier")
    user_id: str = Field(description="User who saved the message")
    message_id: str = Field(description="Saved message")
    created_at: datetime = Field(description="When the message was saved (UTC)")

    @classmethod
    def from_record(cls, record: Any) -> "SavedMessageResponse":
        return cls(
            id=id_to_string(record.id),
            user_id=id_to_string(record.user_id),
            message_id=id_to_string(record.message_id),
            created_at=record.created_at,
        )


class SavedMessageListResponse(BaseModel):
    """All bookmarks of a user. The count is repeated in the X-Total-Count header."""

    saved_messages: List[SavedMessageResponse] = Field(description="Bookmarks in requested order")
    total_count: int = Field(description="Number of bookmarks returned")


class TablePageResponse(BaseModel):
    """
    One rendered page of a table.

    Mirrors `RenderedTable`: headers in column order, the current page's rows
    as strings, and the pagination state a client needs for Prev/Next
    controls. `page` is zero-based; `label` is the 1-based display string.
    """

    headers: List[str]
    rows: List[List[str]]
    page: int = Field(ge=0)
    page_count: int = Field(ge=0)
    rows_per_page: int = Field(ge=1)
    total_rows: int = Field(ge=0)
    has_previous: bool
    has_next: bool
    label: str

    @classmethod
    def from_rendered(cls, rendered: RenderedTable) -> "TablePageResponse":
        return cls(
            headers=rendered.headers,
            rows=[["" if cell is None else str(cell) for cell in row] for row in rendered.rows],
            page=rendered.page,
            page_count=rendered.page_count,
            rows_per_page=rendered.rows_per_page,
            total_rows=rendered.total_rows,
            has_previous=rendered.has_previous,
            has_next=rendered.has_next,
            label=rendered.label,
        )


# ══════════════════════════════════════════════════════════════════════════
# Error / Health Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    Standardized error body for all API errors.

    Example:
        {
            "error": "conflict",
            "message": "Message is already saved",
            "details": {"constraint": "uq_saved_messages_user_message"},
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
