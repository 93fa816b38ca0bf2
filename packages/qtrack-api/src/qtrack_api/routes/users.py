"""User management endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from qtrack.models import UserCreate, UserUpdate
from qtrack_api.deps import Container, get_container

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("")
async def list_users(
    role: str | None = None,
    is_active: bool | None = Query(default=None, alias="isActive"),
    container: Container = Depends(get_container),
):
    users = await container.users.list_users(role=role, is_active=is_active)
    return {"users": users, "total": len(users)}


@router.post("", status_code=201)
async def create_user(body: UserCreate, container: Container = Depends(get_container)):
    return {"user": await container.users.create_user(body)}


@router.get("/{user_id}")
async def get_user(user_id: str, container: Container = Depends(get_container)):
    return {"user": await container.users.get_user(user_id)}


@router.put("/{user_id}")
async def update_user(user_id: str, body: UserUpdate, container: Container = Depends(get_container)):
    return {"user": await container.users.update_user(user_id, body)}


@router.post("/{user_id}/activate")
async def activate_user(user_id: str, container: Container = Depends(get_container)):
    return {"user": await container.users.activate_user(user_id)}


@router.post("/{user_id}/deactivate")
async def deactivate_user(user_id: str, container: Container = Depends(get_container)):
    return {"user": await container.users.deactivate_user(user_id)}


@router.get("/{user_id}/permissions")
async def user_permissions(user_id: str, container: Container = Depends(get_container)):
    user = await container.users.get_user(user_id)
    permissions = await container.users.permissions_for(user_id)
    return {"userId": user.id, "role": user.role, "permissions": permissions}
