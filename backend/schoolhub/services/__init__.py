"""
SchoolHub Backend — Services Layer
====================================

Business logic between routes (HTTP) and models (persistence).

Service Inventory:
    - SavedMessageService: save / unsave / list bookmarks, duplicate detection
"""
