# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for the application context and services.
# These are injected into route handlers using Depends().
# =============================================================================

from typing import Annotated

from fastapi import Depends, Request

from app.context import AppContext
from core.services.auth_service import AuthService
from core.services.bootcamp_service import BootcampService
from core.services.course_service import CourseService
from core.services.review_service import ReviewService
from core.services.user_service import UserService


def get_context(request: Request) -> AppContext:
    """Return the context the running application was built with."""
    return request.app.state.context


ContextDep = Annotated[AppContext, Depends(get_context)]


def get_bootcamp_service(ctx: ContextDep) -> BootcampService:
    return BootcampService(ctx.db, ctx.geocoder)


def get_course_service(ctx: ContextDep) -> CourseService:
    return CourseService(ctx.db)


def get_review_service(ctx: ContextDep) -> ReviewService:
    return ReviewService(ctx.db)


def get_user_service(ctx: ContextDep) -> UserService:
    return UserService(ctx.db)


def get_auth_service(ctx: ContextDep) -> AuthService:
    return AuthService(ctx.db, ctx.settings, ctx.mailer)


# Type aliases for dependency injection
BootcampServiceDep = Annotated[BootcampService, Depends(get_bootcamp_service)]
CourseServiceDep = Annotated[CourseService, Depends(get_course_service)]
ReviewServiceDep = Annotated[ReviewService, Depends(get_review_service)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]
AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
