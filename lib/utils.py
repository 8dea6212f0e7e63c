# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application.
# =============================================================================

import re
import unicodedata
from datetime import datetime, timezone
from typing import Any

from bson import ObjectId
from bson.errors import InvalidId


# =============================================================================
# ObjectId Utilities
# =============================================================================

def to_object_id(value: str | ObjectId) -> ObjectId | None:
    """
    Parse a 24-hex string into an ObjectId.

    Returns None for malformed ids so callers can report "not found"
    instead of leaking a driver error.

    Example:
        to_object_id("5d713995b721c3bb38c1f5d0")  # ObjectId(...)
        to_object_id("not-an-id")                 # None
    """
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(str(value))
    except (InvalidId, TypeError):
        return None


def serialize_document(doc: Any) -> Any:
    """
    Convert a MongoDB document into JSON-friendly data.

    - `_id` becomes `id`
    - ObjectId values become hex strings
    - nested dicts and lists are converted recursively

    Example:
        serialize_document({"_id": ObjectId("..."), "user": ObjectId("...")})
        # {"id": "...", "user": "..."}
    """
    if isinstance(doc, ObjectId):
        return str(doc)
    if isinstance(doc, list):
        return [serialize_document(item) for item in doc]
    if isinstance(doc, dict):
        result = {}
        for key, value in doc.items():
            if key == "_id":
                result["id"] = serialize_document(value)
            else:
                result[key] = serialize_document(value)
        return result
    return doc


# =============================================================================
# Text Utilities
# =============================================================================

def slugify(value: str) -> str:
    """
    Build a lowercase URL slug.

    Example:
        slugify("Devworks Bootcamp")  # "devworks-bootcamp"
    """
    normalized = unicodedata.normalize("NFKD", value).encode("ascii", "ignore").decode("ascii")
    normalized = re.sub(r"[^\w\s-]", "", normalized).strip().lower()
    return re.sub(r"[-\s_]+", "-", normalized)


# =============================================================================
# Time Utilities
# =============================================================================

def utcnow() -> datetime:
    """Timezone-aware current time."""
    return datetime.now(timezone.utc)
