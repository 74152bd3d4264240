"""
test_room_manager.py — Unit tests for RoomManager (rooms, furniture, derived volume).

Tests cover:
  - Furniture volume formula (cm → m³, × quantity)
  - Room volume == Σ furniture volume after create / update / delete
  - Required-field checks on furniture creation
  - Room CRUD incl. free-text room types
  - Ownership: rooms and furniture of another user's move behave as missing
"""

import pytest

from moveplanner.services.errors import NotFoundError, ValidationError
from moveplanner.services.room_manager import RoomManager
from moveplanner.services.volume import furniture_volume, room_volume

ALICE = "user-alice"
BOB = "user-bob"

SOFA = {"name": "Sofa", "category": "Sofa", "length": 200, "width": 80, "height": 85, "quantity": 1}
CHAIRS = {"name": "Stühle", "category": "Stühle", "length": 45, "width": 45, "height": 90, "quantity": 4}


@pytest.fixture
def manager(fake_store):
    return RoomManager(fake_store)


@pytest.fixture
async def room(fake_store):
    move = await fake_store.insert_move(ALICE, "UMZ-00000001", {"customer_name": "Alice"})
    return await fake_store.insert_room(move.id, "Wohnzimmer", "Wohnzimmer")


# ===========================================================================
# Class 1: Volume arithmetic
# ===========================================================================

class TestVolumeFormula:

    def test_sofa_volume(self):
        assert furniture_volume(200, 80, 85, 1) == pytest.approx(1.36)

    def test_quantity_multiplies(self):
        assert furniture_volume(45, 45, 90, 4) == pytest.approx(4 * furniture_volume(45, 45, 90))

    def test_default_quantity_is_one(self):
        assert furniture_volume(100, 100, 100) == pytest.approx(1.0)

    def test_empty_room_volume_is_zero(self):
        assert room_volume([]) == 0.0

    def test_room_volume_is_sum(self):
        assert room_volume([1.36, 0.729]) == pytest.approx(2.089)


# ===========================================================================
# Class 2: Furniture mutations keep the room volume in sync
# ===========================================================================

class TestDerivedRoomVolume:

    async def test_create_sets_item_and_room_volume(self, manager, room):
        item = await manager.create_furniture(ALICE, room.id, dict(SOFA))
        assert item.volume == pytest.approx(1.36)
        assert room.volume == pytest.approx(1.36)

    async def test_room_volume_sums_all_items(self, manager, room):
        await manager.create_furniture(ALICE, room.id, dict(SOFA))
        await manager.create_furniture(ALICE, room.id, dict(CHAIRS))
        assert room.volume == pytest.approx(1.36 + 4 * 0.18225)

    async def test_update_recomputes_both_volumes(self, manager, room):
        item = await manager.create_furniture(ALICE, room.id, dict(SOFA))

        updated = await manager.update_furniture(ALICE, item.id, {**SOFA, "quantity": 2})

        assert updated.volume == pytest.approx(2.72)
        assert room.volume == pytest.approx(2.72)

    async def test_delete_recomputes_room_volume(self, manager, room):
        sofa = await manager.create_furniture(ALICE, room.id, dict(SOFA))
        await manager.create_furniture(ALICE, room.id, dict(CHAIRS))

        await manager.delete_furniture(ALICE, sofa.id)

        assert room.volume == pytest.approx(4 * 0.18225)

    async def test_deleting_last_item_resets_to_zero(self, manager, room):
        item = await manager.create_furniture(ALICE, room.id, dict(SOFA))
        await manager.delete_furniture(ALICE, item.id)
        assert room.volume == 0.0

    async def test_volume_matches_items_after_mixed_sequence(self, manager, fake_store, room):
        a = await manager.create_furniture(ALICE, room.id, dict(SOFA))
        b = await manager.create_furniture(ALICE, room.id, dict(CHAIRS))
        await manager.update_furniture(ALICE, a.id, {**SOFA, "length": 150})
        c = await manager.create_furniture(ALICE, room.id, {**CHAIRS, "quantity": 1})
        await manager.delete_furniture(ALICE, b.id)
        await manager.update_furniture(ALICE, c.id, {**CHAIRS, "quantity": 3})

        items = await fake_store.list_furniture(room.id)
        assert room.volume == pytest.approx(sum(i.volume for i in items))

    async def test_weight_defaults_to_zero(self, manager, room):
        item = await manager.create_furniture(ALICE, room.id, dict(SOFA))
        assert item.weight == 0.0
        assert item.is_custom is False


# ===========================================================================
# Class 3: Furniture validation
# ===========================================================================

class TestFurnitureValidation:

    @pytest.mark.parametrize("field", ["name", "category", "length", "width", "height", "quantity"])
    async def test_missing_required_field(self, manager, room, field):
        attrs = dict(SOFA)
        del attrs[field]
        with pytest.raises(ValidationError):
            await manager.create_furniture(ALICE, room.id, attrs)

    async def test_zero_quantity_is_rejected(self, manager, room, fake_store):
        with pytest.raises(ValidationError):
            await manager.create_furniture(ALICE, room.id, {**SOFA, "quantity": 0})
        assert fake_store.furniture == {}

    async def test_missing_fields_are_listed(self, manager, room):
        with pytest.raises(ValidationError) as exc_info:
            await manager.create_furniture(ALICE, room.id, {"name": "Sofa"})
        assert exc_info.value.details["missing"] == ["category", "length", "width", "height", "quantity"]


# ===========================================================================
# Class 4: Rooms
# ===========================================================================

class TestRooms:

    async def test_create_room_starts_empty(self, manager, room):
        new_room = await manager.create_room(ALICE, room.move_id, "Hobbyraum", "Keller")
        assert new_room.volume == 0.0

    async def test_unknown_room_type_is_accepted(self, manager, room):
        new_room = await manager.create_room(ALICE, room.move_id, "Weinkeller", "Weinkeller")
        assert new_room.room_type == "Weinkeller"

    async def test_update_room(self, manager, room):
        updated = await manager.update_room(ALICE, room.id, "Salon", "Wohnzimmer")
        assert updated.name == "Salon"

    async def test_delete_room_removes_furniture(self, manager, fake_store, room):
        await manager.create_furniture(ALICE, room.id, dict(SOFA))
        await manager.delete_room(ALICE, room.id)
        assert room.id not in fake_store.rooms
        assert fake_store.furniture == {}

    async def test_list_rooms_ordered_by_name(self, manager, room):
        await manager.create_room(ALICE, room.move_id, "Bad", "Bad")
        rooms = await manager.list_rooms(ALICE, room.move_id)
        assert [r.name for r in rooms] == ["Bad", "Wohnzimmer"]


# ===========================================================================
# Class 5: Ownership
# ===========================================================================

class TestOwnership:

    async def test_list_rooms_of_foreign_move(self, manager, room):
        with pytest.raises(NotFoundError):
            await manager.list_rooms(BOB, room.move_id)

    async def test_create_room_in_foreign_move(self, manager, room):
        with pytest.raises(NotFoundError):
            await manager.create_room(BOB, room.move_id, "Bad", "Bad")

    async def test_update_foreign_room(self, manager, room):
        with pytest.raises(NotFoundError):
            await manager.update_room(BOB, room.id, "Mine", "Bad")
        assert room.name == "Wohnzimmer"

    async def test_delete_foreign_room(self, manager, fake_store, room):
        with pytest.raises(NotFoundError):
            await manager.delete_room(BOB, room.id)
        assert room.id in fake_store.rooms

    async def test_furniture_in_foreign_room(self, manager, fake_store, room):
        with pytest.raises(NotFoundError):
            await manager.create_furniture(BOB, room.id, dict(SOFA))
        assert fake_store.furniture == {}

    async def test_foreign_furniture_update_and_delete(self, manager, room):
        item = await manager.create_furniture(ALICE, room.id, dict(SOFA))
        with pytest.raises(NotFoundError):
            await manager.update_furniture(BOB, item.id, {**SOFA, "quantity": 5})
        with pytest.raises(NotFoundError):
            await manager.delete_furniture(BOB, item.id)
        assert room.volume == pytest.approx(1.36)

    async def test_missing_furniture(self, manager, room):
        with pytest.raises(NotFoundError):
            await manager.delete_furniture(ALICE, "no-such-id")
