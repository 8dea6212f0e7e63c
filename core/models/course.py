# =============================================================================
# core/models/course.py - Course Schemas
# =============================================================================

from typing import Literal

from bson import ObjectId
from pydantic import Field

from .base import CamelModel

MinimumSkill = Literal["beginner", "intermediate", "advanced"]

COURSE_FILTER_FIELDS: dict[str, type] = {
    "title": str,
    "weeks": int,
    "tuition": float,
    "minimumSkill": str,
    "scholarshipAvailable": bool,
    "bootcamp": ObjectId,
    "user": ObjectId,
}


class CourseBase(CamelModel):
    """
    Schema for a course.

    Example:
        {
            "title": "Front End Web Development",
            "description": "HTML, CSS and JavaScript",
            "weeks": 8,
            "tuition": 8000,
            "minimumSkill": "beginner"
        }
    """

    title: str = Field(..., min_length=1, description="Course title")
    description: str = Field(..., min_length=1)
    weeks: int = Field(..., ge=1, description="Number of weeks")
    tuition: float = Field(..., ge=0, description="Tuition cost")
    minimum_skill: MinimumSkill
    scholarship_available: bool = False


class CourseUpdate(CamelModel):
    """Partial course update."""

    title: str | None = None
    description: str | None = None
    weeks: int | None = None
    tuition: float | None = None
    minimum_skill: str | None = None
    scholarship_available: bool | None = None
