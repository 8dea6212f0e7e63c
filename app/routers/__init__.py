# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by resource:
# - health.py: Health check endpoints
# - bootcamps.py: Bootcamp CRUD, radius search, photo upload
# - courses.py: Courses (flat and nested under bootcamps)
# - reviews.py: Reviews (flat and nested under bootcamps)
# - users.py: Admin user management
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import bootcamps
from . import courses
from . import reviews
from . import users

__all__ = [
    "health",
    "bootcamps",
    "courses",
    "reviews",
    "users",
]
