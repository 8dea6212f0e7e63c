# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for request validation:
# - base.py: CamelModel (camelCase aliases, whitespace trimming)
# - bootcamp.py: Bootcamp create/update schemas and filterable fields
# - course.py: Course schemas
# - review.py: Review schemas
# - user.py: User, login and account schemas
#
# These models define the "contract" between API and clients.
# =============================================================================

from .base import CamelModel

# -----------------------------------------------------------------------------
# Bootcamp Models
# -----------------------------------------------------------------------------
from .bootcamp import (
    BOOTCAMP_FILTER_FIELDS,
    BootcampBase,
    BootcampCreate,
    BootcampUpdate,
    Career,
)

# -----------------------------------------------------------------------------
# Course and Review Models
# -----------------------------------------------------------------------------
from .course import COURSE_FILTER_FIELDS, CourseBase, CourseUpdate
from .review import REVIEW_FILTER_FIELDS, ReviewBase, ReviewUpdate

# -----------------------------------------------------------------------------
# User Models
# -----------------------------------------------------------------------------
from .user import (
    HIDDEN_USER_FIELDS,
    USER_FILTER_FIELDS,
    ForgotPasswordRequest,
    LoginRequest,
    RegisterRequest,
    ResetPasswordRequest,
    Role,
    UpdateDetailsRequest,
    UpdatePasswordRequest,
    UserBase,
    UserCreate,
    UserUpdate,
)

__all__ = [
    "CamelModel",
    # Bootcamp
    "BOOTCAMP_FILTER_FIELDS",
    "BootcampBase",
    "BootcampCreate",
    "BootcampUpdate",
    "Career",
    # Course
    "COURSE_FILTER_FIELDS",
    "CourseBase",
    "CourseUpdate",
    # Review
    "REVIEW_FILTER_FIELDS",
    "ReviewBase",
    "ReviewUpdate",
    # User
    "HIDDEN_USER_FIELDS",
    "USER_FILTER_FIELDS",
    "ForgotPasswordRequest",
    "LoginRequest",
    "RegisterRequest",
    "ResetPasswordRequest",
    "Role",
    "UpdateDetailsRequest",
    "UpdatePasswordRequest",
    "UserBase",
    "UserCreate",
    "UserUpdate",
]
