"""
Room & furniture manager.

Keeps Room.volume equal to the sum of its furniture volumes: every furniture
insert, update and delete is followed by a full re-aggregation of the
affected room before the request returns.
"""
import logging
from moveplanner.services.errors import NotFoundError, ValidationError
from moveplanner.services.volume import furniture_volume

logger = logging.getLogger("moveplanner-rooms")

FURNITURE_REQUIRED_FIELDS = ("name", "category", "length", "width", "height", "quantity")


def _furniture_fields(attrs: dict) -> dict:
    return {
        "name": attrs["name"],
        "category": attrs["category"],
        "length": attrs["length"],
        "width": attrs["width"],
        "height": attrs["height"],
        "quantity": attrs["quantity"],
        "weight": attrs.get("weight") or 0.0,
        "is_custom": bool(attrs.get("is_custom", False)),
        "volume": furniture_volume(attrs["length"], attrs["width"], attrs["height"], attrs["quantity"]),
    }


class RoomManager:
    def __init__(self, store):
        self.store = store

    # ── Catalogs ─────────────────────────────────────────────────────────────

    async def list_room_types(self) -> list:
        return await self.store.list_room_types()

    async def list_furniture_categories(self) -> list:
        return await self.store.list_furniture_categories()

    # ── Rooms ────────────────────────────────────────────────────────────────

    async def _owned_move(self, owner_id: str, move_id: str):
        move = await self.store.get_move(owner_id, move_id)
        if move is None:
            raise NotFoundError("Move not found")
        return move

    async def _owned_room(self, owner_id: str, room_id: str):
        room = await self.store.get_owned_room(owner_id, room_id)
        if room is None:
            raise NotFoundError("Room not found")
        return room

    async def _check_room_type(self, room_type: str) -> None:
        # Free text; catalog membership is advisory only
        if not await self.store.room_type_exists(room_type):
            logger.info(f"Room type '{room_type}' is not in the catalog, accepting as free text")

    async def list_rooms(self, owner_id: str, move_id: str) -> list:
        await self._owned_move(owner_id, move_id)
        return await self.store.list_rooms(move_id)

    async def create_room(self, owner_id: str, move_id: str, name: str, room_type: str):
        await self._owned_move(owner_id, move_id)
        await self._check_room_type(room_type)
        room = await self.store.insert_room(move_id, name, room_type)
        await self.store.commit()
        logger.info(f"Room {room.id} ({name}) added to move {move_id}", extra={"move_id": move_id})
        return room

    async def update_room(self, owner_id: str, room_id: str, name: str, room_type: str):
        room = await self._owned_room(owner_id, room_id)
        await self._check_room_type(room_type)
        room = await self.store.update_room(room, name, room_type)
        await self.store.commit()
        return room

    async def delete_room(self, owner_id: str, room_id: str) -> None:
        room = await self._owned_room(owner_id, room_id)
        await self.store.delete_room(room.id)
        await self.store.commit()
        logger.info(f"Room {room_id} deleted with its furniture", extra={"move_id": room.move_id})

    # ── Furniture ────────────────────────────────────────────────────────────

    async def list_furniture(self, owner_id: str, room_id: str) -> list:
        await self._owned_room(owner_id, room_id)
        return await self.store.list_furniture(room_id)

    async def create_furniture(self, owner_id: str, room_id: str, attrs: dict):
        missing = [f for f in FURNITURE_REQUIRED_FIELDS if not attrs.get(f)]
        if missing:
            raise ValidationError("Missing required fields", details={"missing": missing})

        room = await self._owned_room(owner_id, room_id)
        item = await self.store.insert_furniture(room_id, _furniture_fields(attrs))
        total = await self.store.refresh_room_volume(room_id)
        await self.store.commit()
        logger.info(
            f"Furniture {item.id} added to room {room_id}, room volume now {total} m³",
            extra={"move_id": room.move_id},
        )
        return item

    async def update_furniture(self, owner_id: str, furniture_id: str, attrs: dict):
        """Full replacement of the dimension fields; volume is recomputed from them."""
        item = await self.store.get_owned_furniture(owner_id, furniture_id)
        if item is None:
            raise NotFoundError("Furniture not found")

        item = await self.store.update_furniture(item, _furniture_fields(attrs))
        await self.store.refresh_room_volume(item.room_id)
        await self.store.commit()
        return item

    async def delete_furniture(self, owner_id: str, furniture_id: str) -> None:
        item = await self.store.get_owned_furniture(owner_id, furniture_id)
        if item is None:
            raise NotFoundError("Furniture not found")

        room_id = item.room_id
        await self.store.delete_furniture(item)
        if await self.store.refresh_room_volume(room_id) is None:
            logger.info(f"Room {room_id} no longer exists, skipping volume refresh")
        await self.store.commit()
