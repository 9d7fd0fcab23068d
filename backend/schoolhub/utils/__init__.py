"""
SchoolHub Backend — Utilities
===============================

Pure helpers with no database or HTTP dependencies:
    - ids.py:    id_to_string, canonical identifier strings for API payloads
    - table.py:  GenericTable, paginated rendering of in-memory records
"""
