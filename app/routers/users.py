# =============================================================================
# app/routers/users.py - User Administration Endpoints
# =============================================================================
# Every route requires an admin token (applied at the router level).
# =============================================================================

from fastapi import APIRouter, Depends, Request

from app.auth.dependencies import authorize
from app.dependencies import UserServiceDep
from core.models.user import UserCreate, UserUpdate
from lib.utils import serialize_document

router = APIRouter(dependencies=[Depends(authorize("admin"))])


@router.get("")
def list_users(request: Request, service: UserServiceDep):
    return service.list_users(request.query_params)


@router.get("/{user_id}")
def get_user(user_id: str, service: UserServiceDep):
    return {"success": True, "data": serialize_document(service.get_user(user_id))}


@router.post("", status_code=201)
def create_user(payload: UserCreate, service: UserServiceDep):
    return {"success": True, "data": serialize_document(service.create_user(payload))}


@router.put("/{user_id}")
def update_user(user_id: str, payload: UserUpdate, service: UserServiceDep):
    return {"success": True, "data": serialize_document(service.update_user(user_id, payload))}


@router.delete("/{user_id}")
def delete_user(user_id: str, service: UserServiceDep):
    service.delete_user(user_id)
    return {"success": True, "data": {}}
