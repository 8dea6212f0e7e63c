# =============================================================================
# app/routers/bootcamps.py - Bootcamp Endpoints
# =============================================================================
# CRUD, radius search and photo upload. Reads are public; writes need the
# publisher or admin role, and updates/deletes need ownership (or admin).
# Courses and reviews nested under a bootcamp live in courses.py/reviews.py.
# =============================================================================

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, File, Path, Request, UploadFile

from app.auth.dependencies import authorize
from app.auth.models import AuthUser
from app.dependencies import BootcampServiceDep, ContextDep
from app.exceptions import UploadError
from core.models.bootcamp import BootcampCreate, BootcampUpdate
from lib.utils import serialize_document

logger = logging.getLogger(__name__)

router = APIRouter()

publisher_or_admin = authorize("publisher", "admin")


@router.get("")
def list_bootcamps(request: Request, service: BootcampServiceDep):
    """
    List bootcamps with filtering, selection, sorting and pagination.

    Examples:
        /bootcamps?careers[in]=Business&averageCost[lte]=10000
        /bootcamps?select=name,description&sort=-averageCost&page=2&limit=10
    """
    return service.list_bootcamps(request.query_params)


@router.get("/radius/{zipcode}/{distance}")
def bootcamps_in_radius(
    zipcode: str,
    distance: Annotated[float, Path(gt=0, description="Distance in miles")],
    service: BootcampServiceDep,
):
    """Bootcamps within `distance` miles of a postal code."""
    bootcamps = service.bootcamps_in_radius(zipcode, distance)
    return {
        "success": True,
        "count": len(bootcamps),
        "data": serialize_document(bootcamps),
    }


@router.get("/{bootcamp_id}")
def get_bootcamp(bootcamp_id: str, service: BootcampServiceDep):
    return {"success": True, "data": serialize_document(service.get_bootcamp(bootcamp_id))}


@router.post("", status_code=201)
def create_bootcamp(
    payload: BootcampCreate,
    service: BootcampServiceDep,
    user: AuthUser = Depends(publisher_or_admin),
):
    """
    Create a bootcamp owned by the current user.

    Publishers may own a single bootcamp; admins are not limited.
    """
    bootcamp = service.create_bootcamp(payload, user)
    return {"success": True, "data": serialize_document(bootcamp)}


@router.put("/{bootcamp_id}")
def update_bootcamp(
    bootcamp_id: str,
    payload: BootcampUpdate,
    service: BootcampServiceDep,
    user: AuthUser = Depends(publisher_or_admin),
):
    bootcamp = service.update_bootcamp(bootcamp_id, payload, user)
    return {"success": True, "data": serialize_document(bootcamp)}


@router.delete("/{bootcamp_id}")
def delete_bootcamp(
    bootcamp_id: str,
    service: BootcampServiceDep,
    user: AuthUser = Depends(publisher_or_admin),
):
    """Delete a bootcamp and its courses and reviews."""
    service.delete_bootcamp(bootcamp_id, user)
    return {"success": True, "data": {}}


@router.put("/{bootcamp_id}/photo")
def upload_bootcamp_photo(
    bootcamp_id: str,
    service: BootcampServiceDep,
    ctx: ContextDep,
    file: Annotated[UploadFile | None, File(description="Image file")] = None,
    user: AuthUser = Depends(publisher_or_admin),
):
    """
    Upload a bootcamp photo.

    The file must have an image/* content type and be no larger than
    MAX_FILE_UPLOAD bytes. It is stored as photo_<bootcamp id><ext>.
    """
    if file is None:
        raise UploadError("Please upload a file")

    # Read one byte past the limit so oversize files are detected without
    # buffering them whole
    content = file.file.read(ctx.settings.MAX_FILE_UPLOAD + 1)

    stored_name = service.upload_photo(
        bootcamp_id,
        user,
        filename=file.filename or "photo",
        content_type=file.content_type,
        content=content,
        upload_dir=ctx.settings.FILE_UPLOAD_PATH,
        max_bytes=ctx.settings.MAX_FILE_UPLOAD,
    )
    return {"success": True, "data": stored_name}
