# =============================================================================
# core/models/review.py - Review Schemas
# =============================================================================

from bson import ObjectId
from pydantic import Field

from .base import CamelModel

REVIEW_FILTER_FIELDS: dict[str, type] = {
    "title": str,
    "rating": int,
    "bootcamp": ObjectId,
    "user": ObjectId,
}


class ReviewBase(CamelModel):
    """A review of a bootcamp; rating is 1-10."""

    title: str = Field(..., min_length=1, max_length=100)
    text: str = Field(..., min_length=1)
    rating: int = Field(..., ge=1, le=10)


class ReviewUpdate(CamelModel):
    """Partial review update."""

    title: str | None = None
    text: str | None = None
    rating: int | None = None
