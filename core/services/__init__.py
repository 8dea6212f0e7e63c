# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .query import AdvancedQuery, Populate
from .auth_service import AuthService
from .bootcamp_service import BootcampService
from .course_service import CourseService
from .review_service import ReviewService
from .user_service import UserService

__all__ = [
    "AdvancedQuery",
    "Populate",
    "AuthService",
    "BootcampService",
    "CourseService",
    "ReviewService",
    "UserService",
]
