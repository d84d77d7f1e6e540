# storefront/core/ids.py
"""
Entity identity at the domain boundary.

Ids are opaque: on the wire they are always strings, and two ids are the
same entity iff their string forms are equal. Callers never branch on the
runtime type of an id (int, str, uuid.UUID or a populated sub-document).
"""

import uuid
from typing import Any

from storefront.core.errors import NotFound


def normalize_id(value: Any) -> str:
    """
    Return the canonical string form of an id.

    - None -> ""
    - populated sub-document (dict) -> its "id" (or "_id") normalized
    - anything else -> str(value)
    """
    if value is None:
        return ""
    if isinstance(value, dict):
        return normalize_id(value.get("id", value.get("_id")))
    return str(value)


def ids_equal(a: Any, b: Any) -> bool:
    """String-coerced id equality: 42 == "42"."""
    left = normalize_id(a)
    return bool(left) and left == normalize_id(b)


def parse_id(value: Any, what: str = "Resource") -> uuid.UUID:
    """
    Convert a wire id to the storage key.

    Ids that cannot name a stored entity are reported as `NotFound` rather
    than as a server error.
    """
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(normalize_id(value))
    except ValueError:
        raise NotFound(f"{what} not found")
