# =============================================================================
# core/models/bootcamp.py - Bootcamp Schemas
# =============================================================================
# - BootcampBase: every user-editable field with its validation rules
# - BootcampCreate: input for POST /bootcamps (address required)
# - BootcampUpdate: partial input for PUT /bootcamps/{id}
#
# Server-managed fields (slug, location, averageCost, averageRating, photo,
# user, createdAt) are never accepted from the request body.
# =============================================================================

from typing import Literal

from pydantic import EmailStr, Field, HttpUrl, TypeAdapter, ValidationError, field_validator

from .base import CamelModel

Career = Literal[
    "Web Development",
    "Mobile Development",
    "UI/UX",
    "Data Science",
    "Business",
    "Other",
]

# Fields a client may filter bootcamp lists on, with the type used to
# coerce query string values.
BOOTCAMP_FILTER_FIELDS: dict[str, type] = {
    "name": str,
    "slug": str,
    "careers": str,
    "averageCost": float,
    "averageRating": float,
    "housing": bool,
    "jobAssistance": bool,
    "jobGuarantee": bool,
    "acceptGi": bool,
    "location.city": str,
    "location.state": str,
    "location.zipcode": str,
}

_HTTP_URL = TypeAdapter(HttpUrl)


class BootcampBase(CamelModel):
    """Editable bootcamp fields; also used to re-validate merged updates."""

    name: str = Field(..., min_length=1, max_length=50, description="Unique bootcamp name")
    description: str = Field(..., min_length=1, max_length=500)
    website: str | None = Field(default=None, description="Must use HTTP or HTTPS")
    phone: str | None = Field(default=None, max_length=20)
    email: EmailStr | None = None
    address: str | None = Field(default=None, min_length=1)
    careers: list[Career] = Field(..., min_length=1)
    housing: bool = False
    job_assistance: bool = False
    job_guarantee: bool = False
    accept_gi: bool = False

    @field_validator("website")
    @classmethod
    def validate_website(cls, value: str | None) -> str | None:
        """Check the URL but keep it exactly as sent."""
        if value is None:
            return value
        try:
            _HTTP_URL.validate_python(value)
        except ValidationError:
            raise ValueError("Please use a valid URL with HTTP or HTTPS")
        return value


class BootcampCreate(BootcampBase):
    """
    Schema for creating a bootcamp.

    Example:
        {
            "name": "Devworks Bootcamp",
            "description": "Full stack web development",
            "address": "233 Bay State Rd Boston MA 02215",
            "careers": ["Web Development", "UI/UX"]
        }
    """

    address: str = Field(..., min_length=1, description="Geocoded into location")


class BootcampUpdate(CamelModel):
    """Partial bootcamp update. Only fields that are sent are changed."""

    name: str | None = None
    description: str | None = None
    website: str | None = None
    phone: str | None = None
    email: str | None = None
    address: str | None = None
    careers: list[str] | None = None
    housing: bool | None = None
    job_assistance: bool | None = None
    job_guarantee: bool | None = None
    accept_gi: bool | None = None
