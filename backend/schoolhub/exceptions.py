"""
SchoolHub Backend — Custom Exception Hierarchy
================================================

What:  Application-specific exceptions for the different error scenarios.
How:   Each exception carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with the matching status code.
Who:   Raised by services and routes; caught by global handlers.

Exception Hierarchy:
    SchoolHubError (base)
    ├── ValidationError      → 400 Bad Request
    ├── NotFoundError        → 404 Not Found
    ├── DuplicateKeyError    → 409 Conflict
    └── DatabaseError        → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class SchoolHubError(Exception):
    """
    Base exception for all SchoolHub application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, only returned for client errors)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(SchoolHubError):
    """
    Raised when client input fails a business rule.

    Schema-level problems (malformed UUIDs, wrong types) are rejected by
    FastAPI with 422 before reaching the services; this covers the rest,
    e.g. an unknown sort order.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(SchoolHubError):
    """Raised when a requested resource does not exist (→ 404)."""

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DuplicateKeyError(SchoolHubError):
    """
    Raised when an insert violates a unique constraint.

    What:    The database rejected a row whose key combination already exists,
             e.g. a user saving the same message twice.
    HTTP:    409 Conflict
    Retry:   Never. Repeating the same insert can only fail again.

    Attributes:
        constraint: Name of the violated constraint, when known
        key:        The conflicting key values, stringified
    """

    def __init__(
        self,
        message: str = "A record with the same key already exists",
        constraint: Optional[str] = None,
        key: Optional[Dict[str, str]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if constraint:
            ctx["constraint"] = constraint
        if key:
            ctx["key"] = key
        super().__init__(message=message, context=ctx)
        self.constraint = constraint
        self.key = key or {}


class DatabaseError(SchoolHubError):
    """
    Raised when database operations fail unexpectedly.

    The message returned to the client is always generic. Driver error text,
    constraint names and queries are logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
