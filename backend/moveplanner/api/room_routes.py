"""Room routes — room-type catalog and room CRUD within a move."""
from fastapi import APIRouter, Depends, Response, status
from moveplanner.api.deps import get_current_user, get_room_manager
from moveplanner.models.orm_models import User
from moveplanner.models.schemas import RoomCreate, RoomUpdate, RoomRead, RoomTypeRead
from moveplanner.services.room_manager import RoomManager

router = APIRouter(prefix="/api/rooms", tags=["Rooms"])


@router.get("/types", response_model=list[RoomTypeRead])
async def list_room_types(
    current_user: User = Depends(get_current_user),
    manager: RoomManager = Depends(get_room_manager),
):
    return await manager.list_room_types()


@router.get("/move/{move_id}", response_model=list[RoomRead])
async def list_rooms(
    move_id: str,
    current_user: User = Depends(get_current_user),
    manager: RoomManager = Depends(get_room_manager),
):
    return await manager.list_rooms(current_user.id, move_id)


@router.post("", response_model=RoomRead, status_code=status.HTTP_201_CREATED)
async def create_room(
    body: RoomCreate,
    current_user: User = Depends(get_current_user),
    manager: RoomManager = Depends(get_room_manager),
):
    return await manager.create_room(current_user.id, body.move_id, body.name, body.room_type)


@router.put("/{room_id}", response_model=RoomRead)
async def update_room(
    room_id: str,
    body: RoomUpdate,
    current_user: User = Depends(get_current_user),
    manager: RoomManager = Depends(get_room_manager),
):
    return await manager.update_room(current_user.id, room_id, body.name, body.room_type)


@router.delete("/{room_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_room(
    room_id: str,
    current_user: User = Depends(get_current_user),
    manager: RoomManager = Depends(get_room_manager),
):
    await manager.delete_room(current_user.id, room_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
