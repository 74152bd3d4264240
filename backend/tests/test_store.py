"""
test_store.py — MoveStore and seeding against a real SQLite database (aiosqlite).

Exercises what the in-memory fake cannot: foreign-key cascades, the SQL
re-aggregation of room volume, ownership joins, savepoint isolation of room
inserts, and idempotent catalog seeding.
"""

from datetime import date, timedelta

import pytest
from sqlalchemy import select, func

from moveplanner.db.seed import (
    DEFAULT_FURNITURE_CATEGORIES,
    DEFAULT_ROOM_TYPES,
    seed_reference_data,
)
from moveplanner.models.orm_models import Furniture, Material, Room, Service
from moveplanner.services.errors import StorageError
from moveplanner.services.move_manager import MoveManager
from moveplanner.services.room_manager import RoomManager

MOVE_FIELDS = {
    "customer_name": "Alice Example",
    "customer_email": "alice@example.com",
    "from_address": "Hauptstraße 1, Berlin",
    "to_address": "Marktplatz 5, München",
    "move_date": date(2026, 11, 15),
}

SOFA = {"name": "Sofa", "category": "Sofa", "length": 200, "width": 80, "height": 85, "quantity": 1}


async def _count(session, model) -> int:
    return await session.scalar(select(func.count()).select_from(model))


# ===========================================================================
# Class 1: Reference data
# ===========================================================================

class TestSeeding:

    async def test_catalogs_seeded_on_init(self, store):
        assert len(await store.list_room_types()) == len(DEFAULT_ROOM_TYPES)
        assert len(await store.list_furniture_categories()) == len(DEFAULT_FURNITURE_CATEGORIES)

    async def test_seeding_is_idempotent(self, db_session, store):
        stats = await seed_reference_data(db_session)
        await db_session.commit()

        assert stats["room_types"]["created"] == 0
        assert stats["furniture_categories"]["created"] == 0
        assert len(await store.list_room_types()) == len(DEFAULT_ROOM_TYPES)

    async def test_room_types_ordered_by_name(self, store):
        names = [rt.name for rt in await store.list_room_types()]
        assert names == sorted(names)

    async def test_room_type_lookup(self, store):
        assert await store.room_type_exists("Küche")
        assert not await store.room_type_exists("Weinkeller")


# ===========================================================================
# Class 2: Move aggregate in SQL
# ===========================================================================

class TestMoveAggregate:

    async def test_create_move_seeds_rooms(self, store, users):
        move, seeded = await MoveManager(store).create_move(users["alice"].id, dict(MOVE_FIELDS))
        rooms = await store.list_rooms(move.id)
        assert seeded.added_count == 5
        assert len(rooms) == 5
        assert all(r.volume == 0.0 for r in rooms)

    async def test_delete_move_cascades(self, db_session, store, users):
        owner = users["alice"].id
        move, _ = await MoveManager(store).create_move(owner, dict(MOVE_FIELDS))
        room = (await store.list_rooms(move.id))[0]
        await RoomManager(store).create_furniture(owner, room.id, dict(SOFA))
        await store.insert_service(move.id, {"service_type": "Packing", "quantity": 1, "price": 10.0})
        await store.insert_material(move.id, {"material_type": "Karton", "quantity": 3,
                                              "price_per_unit": 2.5, "total_price": 7.5})
        await store.commit()

        assert await store.delete_move(owner, move.id) == 1
        await store.commit()

        for model in (Room, Furniture, Service, Material):
            assert await _count(db_session, model) == 0

    async def test_update_and_delete_scoped_to_owner(self, store, users):
        move, _ = await MoveManager(store).create_move(users["alice"].id, dict(MOVE_FIELDS))
        assert await store.update_move(users["bob"].id, move.id, {"status": "cancelled"}) == 0
        assert await store.delete_move(users["bob"].id, move.id) == 0
        assert await store.get_move(users["bob"].id, move.id) is None

    async def test_update_move_touches_updated_at(self, store, users):
        owner = users["alice"].id
        move, _ = await MoveManager(store).create_move(owner, dict(MOVE_FIELDS))
        before = move.updated_at

        await store.update_move(owner, move.id, {"status": "confirmed"})
        await store.commit()
        reloaded = await store.get_move(owner, move.id)

        assert reloaded.status == "confirmed"
        assert reloaded.reference == move.reference
        assert reloaded.updated_at >= before

    async def test_timestamps_read_back_as_utc(self, db_session, store, users):
        owner = users["alice"].id
        move, _ = await MoveManager(store).create_move(owner, dict(MOVE_FIELDS))
        db_session.expunge_all()

        reloaded = await store.get_move(owner, move.id)

        assert reloaded is not move
        assert reloaded.created_at.utcoffset() == timedelta(0)
        assert reloaded.created_at == move.created_at


# ===========================================================================
# Class 3: Rooms & furniture in SQL
# ===========================================================================

class TestRoomsAndFurniture:

    async def test_room_volume_follows_furniture(self, store, users):
        owner = users["alice"].id
        move, _ = await MoveManager(store).create_move(owner, dict(MOVE_FIELDS))
        room = (await store.list_rooms(move.id))[0]
        rooms = RoomManager(store)

        sofa = await rooms.create_furniture(owner, room.id, dict(SOFA))
        await rooms.create_furniture(owner, room.id, {**SOFA, "name": "Sessel", "length": 100, "quantity": 2})
        await rooms.delete_furniture(owner, sofa.id)

        reloaded = await store.get_owned_room(owner, room.id)
        items = await store.list_furniture(room.id)
        assert reloaded.volume == pytest.approx(sum(i.volume for i in items))
        assert reloaded.volume == pytest.approx(1.36)

    async def test_refresh_on_missing_room(self, store):
        assert await store.refresh_room_volume("no-such-room") is None

    async def test_ownership_joins(self, store, users):
        owner = users["alice"].id
        move, _ = await MoveManager(store).create_move(owner, dict(MOVE_FIELDS))
        room = (await store.list_rooms(move.id))[0]
        item = await RoomManager(store).create_furniture(owner, room.id, dict(SOFA))

        assert await store.get_owned_room(users["bob"].id, room.id) is None
        assert await store.get_owned_furniture(users["bob"].id, item.id) is None
        assert (await store.get_owned_furniture(owner, item.id)).id == item.id

    async def test_delete_room_removes_its_furniture(self, db_session, store, users):
        owner = users["alice"].id
        move, _ = await MoveManager(store).create_move(owner, dict(MOVE_FIELDS))
        room = (await store.list_rooms(move.id))[0]
        await RoomManager(store).create_furniture(owner, room.id, dict(SOFA))

        await RoomManager(store).delete_room(owner, room.id)

        assert await _count(db_session, Furniture) == 0
        assert await _count(db_session, Room) == 4

    async def test_failed_room_insert_leaves_session_usable(self, store, users):
        owner = users["alice"].id
        move, _ = await MoveManager(store).create_move(owner, dict(MOVE_FIELDS))

        with pytest.raises(StorageError):
            await store.insert_room("no-such-move", "Bad", "Bad")

        room = await store.insert_room(move.id, "Bad", "Bad")
        await store.commit()
        assert room.id in {r.id for r in await store.list_rooms(move.id)}
