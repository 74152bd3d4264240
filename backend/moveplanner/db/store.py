"""
MoveStore — storage access for the move aggregate.

One instance wraps one AsyncSession (one request). Managers receive it
explicitly, so tests can hand them an in-memory substitute with the same
methods instead.

Every sub-resource lookup that takes an owner_id joins up to moves.user_id;
a row owned by someone else comes back as None, exactly like a missing row.
Any SQLAlchemyError surfaces as StorageError.
"""
import functools
import logging
from typing import Optional
from sqlalchemy import select, update, delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from moveplanner.models.orm_models import (
    Move, Room, Furniture, Service, Material, RoomType, FurnitureCategory, utcnow,
)
from moveplanner.services.errors import StorageError
from moveplanner.services.volume import room_volume

logger = logging.getLogger("moveplanner-db.store")


def storage_op(func):
    """Translate driver/ORM failures into StorageError, logging the detail server-side."""
    @functools.wraps(func)
    async def wrapper(self, *args, **kwargs):
        try:
            return await func(self, *args, **kwargs)
        except SQLAlchemyError as e:
            logger.error(f"Storage operation {func.__name__} failed: {e}", exc_info=True)
            raise StorageError() from e
    return wrapper


class MoveStore:
    def __init__(self, session: AsyncSession):
        self.session = session

    @storage_op
    async def commit(self) -> None:
        await self.session.commit()

    # ── Reference catalogs ───────────────────────────────────────────────────

    @storage_op
    async def list_room_types(self) -> list[RoomType]:
        result = await self.session.execute(select(RoomType).order_by(RoomType.name))
        return list(result.scalars().all())

    @storage_op
    async def room_type_exists(self, name: str) -> bool:
        result = await self.session.execute(select(RoomType.id).where(RoomType.name == name))
        return result.first() is not None

    @storage_op
    async def list_furniture_categories(self) -> list[FurnitureCategory]:
        result = await self.session.execute(
            select(FurnitureCategory).order_by(FurnitureCategory.name, FurnitureCategory.room_type)
        )
        return list(result.scalars().all())

    # ── Moves ────────────────────────────────────────────────────────────────

    @storage_op
    async def reference_exists(self, reference: str) -> bool:
        result = await self.session.execute(select(Move.id).where(Move.reference == reference))
        return result.first() is not None

    @storage_op
    async def insert_move(self, owner_id: str, reference: str, fields: dict) -> Move:
        move = Move(user_id=owner_id, reference=reference, status="draft", **fields)
        self.session.add(move)
        await self.session.flush()
        return move

    @storage_op
    async def list_moves(self, owner_id: str) -> list[Move]:
        result = await self.session.execute(
            select(Move)
            .where(Move.user_id == owner_id)
            .order_by(Move.created_at.desc(), Move.id)
        )
        return list(result.scalars().all())

    @storage_op
    async def get_move(self, owner_id: str, move_id: str) -> Optional[Move]:
        result = await self.session.execute(
            select(Move).where(Move.id == move_id, Move.user_id == owner_id)
        )
        return result.scalar_one_or_none()

    @storage_op
    async def update_move(self, owner_id: str, move_id: str, changes: dict) -> int:
        """Write only the given columns plus updated_at. Returns the number of rows matched."""
        result = await self.session.execute(
            update(Move)
            .where(Move.id == move_id, Move.user_id == owner_id)
            .values(**changes, updated_at=utcnow())
        )
        return result.rowcount

    @storage_op
    async def delete_move(self, owner_id: str, move_id: str) -> int:
        # rooms, furniture, services and materials go with it via ON DELETE CASCADE
        result = await self.session.execute(
            delete(Move).where(Move.id == move_id, Move.user_id == owner_id)
        )
        return result.rowcount

    # ── Rooms ────────────────────────────────────────────────────────────────

    @storage_op
    async def insert_room(self, move_id: str, name: str, room_type: str) -> Room:
        room = Room(move_id=move_id, name=name, room_type=room_type, volume=0.0)
        # Own savepoint, so one failed insert does not poison the surrounding transaction
        async with self.session.begin_nested():
            self.session.add(room)
        return room

    @storage_op
    async def list_rooms(self, move_id: str) -> list[Room]:
        result = await self.session.execute(
            select(Room).where(Room.move_id == move_id).order_by(Room.name, Room.created_at)
        )
        return list(result.scalars().all())

    @storage_op
    async def get_owned_room(self, owner_id: str, room_id: str) -> Optional[Room]:
        result = await self.session.execute(
            select(Room)
            .join(Move, Room.move_id == Move.id)
            .where(Room.id == room_id, Move.user_id == owner_id)
        )
        return result.scalar_one_or_none()

    @storage_op
    async def update_room(self, room: Room, name: str, room_type: str) -> Room:
        room.name = name
        room.room_type = room_type
        await self.session.flush()
        return room

    @storage_op
    async def delete_room(self, room_id: str) -> None:
        # Explicit furniture delete first, even though the FK cascades as well
        await self.session.execute(delete(Furniture).where(Furniture.room_id == room_id))
        await self.session.execute(delete(Room).where(Room.id == room_id))

    @storage_op
    async def refresh_room_volume(self, room_id: str) -> Optional[float]:
        """
        room.volume := Σ furniture.volume for the room (0 when empty).

        Re-aggregates from scratch rather than applying a delta, so any earlier
        inconsistency is healed. Returns None when the room no longer exists.
        """
        volumes = await self.session.scalars(
            select(Furniture.volume).where(Furniture.room_id == room_id)
        )
        total = room_volume(v or 0.0 for v in volumes)
        result = await self.session.execute(
            update(Room).where(Room.id == room_id).values(volume=total)
        )
        if result.rowcount == 0:
            return None
        return total

    # ── Furniture ────────────────────────────────────────────────────────────

    @storage_op
    async def list_furniture(self, room_id: str) -> list[Furniture]:
        result = await self.session.execute(
            select(Furniture).where(Furniture.room_id == room_id).order_by(Furniture.name, Furniture.created_at)
        )
        return list(result.scalars().all())

    @storage_op
    async def get_owned_furniture(self, owner_id: str, furniture_id: str) -> Optional[Furniture]:
        result = await self.session.execute(
            select(Furniture)
            .join(Room, Furniture.room_id == Room.id)
            .join(Move, Room.move_id == Move.id)
            .where(Furniture.id == furniture_id, Move.user_id == owner_id)
        )
        return result.scalar_one_or_none()

    @storage_op
    async def insert_furniture(self, room_id: str, fields: dict) -> Furniture:
        item = Furniture(room_id=room_id, **fields)
        self.session.add(item)
        await self.session.flush()
        return item

    @storage_op
    async def update_furniture(self, item: Furniture, fields: dict) -> Furniture:
        for key, value in fields.items():
            setattr(item, key, value)
        await self.session.flush()
        return item

    @storage_op
    async def delete_furniture(self, item: Furniture) -> None:
        await self.session.execute(delete(Furniture).where(Furniture.id == item.id))

    # ── Services ─────────────────────────────────────────────────────────────

    @storage_op
    async def list_services(self, move_id: str) -> list[Service]:
        result = await self.session.execute(
            select(Service).where(Service.move_id == move_id).order_by(Service.created_at)
        )
        return list(result.scalars().all())

    @storage_op
    async def insert_service(self, move_id: str, fields: dict) -> Service:
        service = Service(move_id=move_id, **fields)
        self.session.add(service)
        await self.session.flush()
        return service

    @storage_op
    async def get_owned_service(self, owner_id: str, service_id: str) -> Optional[Service]:
        result = await self.session.execute(
            select(Service)
            .join(Move, Service.move_id == Move.id)
            .where(Service.id == service_id, Move.user_id == owner_id)
        )
        return result.scalar_one_or_none()

    @storage_op
    async def update_service(self, service: Service, changes: dict) -> Service:
        for key, value in changes.items():
            setattr(service, key, value)
        await self.session.flush()
        return service

    @storage_op
    async def delete_service(self, service: Service) -> None:
        await self.session.execute(delete(Service).where(Service.id == service.id))

    # ── Materials ────────────────────────────────────────────────────────────

    @storage_op
    async def list_materials(self, move_id: str) -> list[Material]:
        result = await self.session.execute(
            select(Material).where(Material.move_id == move_id).order_by(Material.created_at)
        )
        return list(result.scalars().all())

    @storage_op
    async def insert_material(self, move_id: str, fields: dict) -> Material:
        material = Material(move_id=move_id, **fields)
        self.session.add(material)
        await self.session.flush()
        return material
