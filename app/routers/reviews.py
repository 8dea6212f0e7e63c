# =============================================================================
# app/routers/reviews.py - Review Endpoints
# =============================================================================
# Mounted at /api/v1 for both /reviews and /bootcamps/{bootcamp_id}/reviews.
# Writing reviews is limited to the user and admin roles.
# =============================================================================

from fastapi import APIRouter, Depends, Request

from app.auth.dependencies import authorize
from app.auth.models import AuthUser
from app.dependencies import ReviewServiceDep
from core.models.review import ReviewBase, ReviewUpdate
from lib.utils import serialize_document

router = APIRouter()

user_or_admin = authorize("user", "admin")


@router.get("/reviews")
def list_reviews(request: Request, service: ReviewServiceDep):
    return service.list_reviews(request.query_params)


@router.get("/bootcamps/{bootcamp_id}/reviews")
def list_bootcamp_reviews(bootcamp_id: str, service: ReviewServiceDep):
    reviews = service.list_bootcamp_reviews(bootcamp_id)
    return {"success": True, "count": len(reviews), "data": serialize_document(reviews)}


@router.get("/reviews/{review_id}")
def get_review(review_id: str, service: ReviewServiceDep):
    return {"success": True, "data": serialize_document(service.get_review(review_id))}


@router.post("/bootcamps/{bootcamp_id}/reviews", status_code=201)
def create_review(
    bootcamp_id: str,
    payload: ReviewBase,
    service: ReviewServiceDep,
    user: AuthUser = Depends(user_or_admin),
):
    """Review a bootcamp. Each user may review a bootcamp once."""
    review = service.create_review(bootcamp_id, payload, user)
    return {"success": True, "data": serialize_document(review)}


@router.put("/reviews/{review_id}")
def update_review(
    review_id: str,
    payload: ReviewUpdate,
    service: ReviewServiceDep,
    user: AuthUser = Depends(user_or_admin),
):
    review = service.update_review(review_id, payload, user)
    return {"success": True, "data": serialize_document(review)}


@router.delete("/reviews/{review_id}")
def delete_review(
    review_id: str,
    service: ReviewServiceDep,
    user: AuthUser = Depends(user_or_admin),
):
    service.delete_review(review_id, user)
    return {"success": True, "data": {}}
