"""Move routes — CRUD of a customer's moves plus standard-room seeding."""
import logging
from fastapi import APIRouter, Depends, status
from moveplanner.api.deps import get_current_user, get_move_manager
from moveplanner.models.orm_models import User
from moveplanner.models.schemas import (
    MoveCreate, MoveUpdate, MoveRead, MoveCreatedResponse,
    RoomRead, StandardRoomsResponse, MessageResponse,
)
from moveplanner.services.move_manager import MoveManager

router = APIRouter(prefix="/api/moves", tags=["Moves"])
logger = logging.getLogger("moveplanner-api")


@router.post("", response_model=MoveCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_move(
    body: MoveCreate,
    current_user: User = Depends(get_current_user),
    manager: MoveManager = Depends(get_move_manager),
):
    move, seeded = await manager.create_move(current_user.id, body.model_dump())
    return MoveCreatedResponse(
        message="Move created",
        move=MoveRead.model_validate(move),
        rooms_added=seeded.added_count,
    )


@router.get("", response_model=list[MoveRead])
async def list_moves(
    current_user: User = Depends(get_current_user),
    manager: MoveManager = Depends(get_move_manager),
):
    return await manager.list_moves(current_user.id)


@router.get("/{move_id}", response_model=MoveRead)
async def get_move(
    move_id: str,
    current_user: User = Depends(get_current_user),
    manager: MoveManager = Depends(get_move_manager),
):
    return await manager.get_move(current_user.id, move_id)


@router.put("/{move_id}", response_model=MoveRead)
async def update_move(
    move_id: str,
    body: MoveUpdate,
    current_user: User = Depends(get_current_user),
    manager: MoveManager = Depends(get_move_manager),
):
    return await manager.update_move(current_user.id, move_id, body.changes())


@router.delete("/{move_id}", response_model=MessageResponse)
async def delete_move(
    move_id: str,
    current_user: User = Depends(get_current_user),
    manager: MoveManager = Depends(get_move_manager),
):
    await manager.delete_move(current_user.id, move_id)
    return MessageResponse(message="Move deleted")


@router.post("/{move_id}/rooms/standard", response_model=StandardRoomsResponse)
async def add_standard_rooms(
    move_id: str,
    current_user: User = Depends(get_current_user),
    manager: MoveManager = Depends(get_move_manager),
):
    rooms = await manager.add_standard_rooms(current_user.id, move_id)
    return StandardRoomsResponse(
        message=f"{len(rooms)} standard rooms added",
        rooms=[RoomRead.model_validate(r) for r in rooms],
    )
