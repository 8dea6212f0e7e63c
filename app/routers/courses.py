# =============================================================================
# app/routers/courses.py - Course Endpoints
# =============================================================================
# Mounted at /api/v1 so it serves both the flat /courses routes and the
# nested /bootcamps/{bootcamp_id}/courses routes.
# =============================================================================

from fastapi import APIRouter, Depends, Request

from app.auth.dependencies import authorize
from app.auth.models import AuthUser
from app.dependencies import CourseServiceDep
from core.models.course import CourseBase, CourseUpdate
from lib.utils import serialize_document

router = APIRouter()

publisher_or_admin = authorize("publisher", "admin")


@router.get("/courses")
def list_courses(request: Request, service: CourseServiceDep):
    """All courses, with advanced results and bootcamp name/description."""
    return service.list_courses(request.query_params)


@router.get("/bootcamps/{bootcamp_id}/courses")
def list_bootcamp_courses(bootcamp_id: str, service: CourseServiceDep):
    courses = service.list_bootcamp_courses(bootcamp_id)
    return {"success": True, "count": len(courses), "data": serialize_document(courses)}


@router.get("/courses/{course_id}")
def get_course(course_id: str, service: CourseServiceDep):
    return {"success": True, "data": serialize_document(service.get_course(course_id))}


@router.post("/bootcamps/{bootcamp_id}/courses", status_code=201)
def create_course(
    bootcamp_id: str,
    payload: CourseBase,
    service: CourseServiceDep,
    user: AuthUser = Depends(publisher_or_admin),
):
    """Add a course to a bootcamp owned by the current user."""
    course = service.create_course(bootcamp_id, payload, user)
    return {"success": True, "data": serialize_document(course)}


@router.put("/courses/{course_id}")
def update_course(
    course_id: str,
    payload: CourseUpdate,
    service: CourseServiceDep,
    user: AuthUser = Depends(publisher_or_admin),
):
    course = service.update_course(course_id, payload, user)
    return {"success": True, "data": serialize_document(course)}


@router.delete("/courses/{course_id}")
def delete_course(
    course_id: str,
    service: CourseServiceDep,
    user: AuthUser = Depends(publisher_or_admin),
):
    service.delete_course(course_id, user)
    return {"success": True, "data": {}}
