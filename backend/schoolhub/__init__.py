"""
SchoolHub Backend — Application Package
=========================================

Layered layout:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← bookmarks, duplicate handling
    ├─────────────────────────────────────┤
    │  Models & Schemas (Data) │  Utils   │  ← SQLAlchemy + Pydantic │ ids, tables
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
