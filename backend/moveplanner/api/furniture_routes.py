"""Furniture routes — category catalog and per-room inventory.

Every mutation here also refreshes the owning room's volume (see RoomManager).
"""
from fastapi import APIRouter, Depends, Response, status
from moveplanner.api.deps import get_current_user, get_room_manager
from moveplanner.models.orm_models import User
from moveplanner.models.schemas import (
    FurnitureCreate, FurnitureUpdate, FurnitureRead, FurnitureCategoryRead,
)
from moveplanner.services.room_manager import RoomManager

router = APIRouter(prefix="/api/furniture", tags=["Furniture"])


@router.get("/categories", response_model=list[FurnitureCategoryRead])
async def list_categories(
    current_user: User = Depends(get_current_user),
    manager: RoomManager = Depends(get_room_manager),
):
    return await manager.list_furniture_categories()


@router.get("/room/{room_id}", response_model=list[FurnitureRead])
async def list_furniture(
    room_id: str,
    current_user: User = Depends(get_current_user),
    manager: RoomManager = Depends(get_room_manager),
):
    return await manager.list_furniture(current_user.id, room_id)


@router.post("", response_model=FurnitureRead, status_code=status.HTTP_201_CREATED)
async def create_furniture(
    body: FurnitureCreate,
    current_user: User = Depends(get_current_user),
    manager: RoomManager = Depends(get_room_manager),
):
    attrs = body.model_dump(exclude={"room_id"})
    return await manager.create_furniture(current_user.id, body.room_id, attrs)


@router.put("/{furniture_id}", response_model=FurnitureRead)
async def update_furniture(
    furniture_id: str,
    body: FurnitureUpdate,
    current_user: User = Depends(get_current_user),
    manager: RoomManager = Depends(get_room_manager),
):
    return await manager.update_furniture(current_user.id, furniture_id, body.model_dump())


@router.delete("/{furniture_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_furniture(
    furniture_id: str,
    current_user: User = Depends(get_current_user),
    manager: RoomManager = Depends(get_room_manager),
):
    await manager.delete_furniture(current_user.id, furniture_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
