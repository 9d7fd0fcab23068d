"""
Identifier normalization for serialization boundaries.

Store identifiers reach the API layer as `uuid.UUID` objects, as strings
(path parameters, JSON bodies, cached payloads) or occasionally as `None`.
`id_to_string` folds all of them into one canonical string form so responses,
log lines and comparisons never mix representations.
"""

import uuid
from numbers import Number
from typing import Any


def id_to_string(value: Any) -> str:
    """
    Return the canonical string form of an identifier.

    - None, False, NaN, and empty non-numeric values such as ``[]`` → ``""``
    - str → returned unchanged
    - uuid.UUID → canonical hyphenated hex form
    - anything else (including 0) → ``str(value)``

    Never raises; if ``str()`` itself fails the default object repr is used.
    """
    match value:
        case None:
            return ""
        case str():
            return value
        case uuid.UUID():
            return str(value)
        case bool():
            return str(value) if value else ""
        case Number():
            # NaN is the one empty number
            return "" if value != value else str(value)
        case _:
            try:
                if not value:
                    return ""
                return str(value)
            except Exception:
                return object.__repr__(value)
