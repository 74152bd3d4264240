"""
Move aggregate manager — create / read / update / delete moves and seed their rooms.

All operations are scoped to an owner: a move owned by someone else is
reported as NotFoundError, same as a move that does not exist.
"""
import logging
import secrets
from dataclasses import dataclass, field
from typing import Optional
from moveplanner import config
from moveplanner.services.errors import MovePlannerError, NotFoundError, StorageError, ValidationError

logger = logging.getLogger("moveplanner-moves")


@dataclass
class SeedResult:
    """Outcome of a standard-room batch: rooms that landed and the names that did not."""
    added: list = field(default_factory=list)
    failed: list[str] = field(default_factory=list)

    @property
    def added_count(self) -> int:
        return len(self.added)


def generate_reference(prefix: Optional[str] = None) -> str:
    """PREFIX-XXXXXXXX, eight uppercase hex characters."""
    prefix = prefix or config.MOVE_REFERENCE_PREFIX
    token = secrets.token_hex(config.MOVE_REFERENCE_LENGTH // 2).upper()
    return f"{prefix}-{token}"


class MoveManager:
    def __init__(self, store, reference_factory=generate_reference):
        self.store = store
        self.reference_factory = reference_factory

    async def _unique_reference(self) -> str:
        for _ in range(config.MOVE_REFERENCE_MAX_ATTEMPTS):
            reference = self.reference_factory()
            if not await self.store.reference_exists(reference):
                return reference
            logger.info(f"Move reference {reference} already taken, regenerating")
        raise StorageError("Could not allocate a unique move reference")

    async def seed_standard_rooms(self, move_id: str) -> SeedResult:
        """
        Insert the standard room set, one insert at a time.

        A failed insert is logged and recorded; the remaining rooms are still
        attempted. Nothing is raised for individual failures.
        """
        result = SeedResult()
        for name, room_type in config.STANDARD_ROOMS:
            try:
                room = await self.store.insert_room(move_id, name, room_type)
            except StorageError as e:
                logger.warning(f"Standard room '{name}' could not be added to move {move_id}: {e.message}",
                               extra={"move_id": move_id})
                result.failed.append(name)
                continue
            result.added.append(room)
        if result.failed:
            logger.warning(
                f"Standard room seeding for move {move_id}: {result.added_count} added, "
                f"{len(result.failed)} failed ({', '.join(result.failed)})",
                extra={"move_id": move_id},
            )
        return result

    async def create_move(self, owner_id: str, fields: dict):
        """Returns (move, SeedResult). The move is kept even if some rooms fail."""
        reference = await self._unique_reference()
        move = await self.store.insert_move(owner_id, reference, fields)
        seeded = await self.seed_standard_rooms(move.id)
        await self.store.commit()
        logger.info(
            f"Move {move.reference} created for user {owner_id} with {seeded.added_count} rooms",
            extra={"move_id": move.id},
        )
        return move, seeded

    async def list_moves(self, owner_id: str) -> list:
        return await self.store.list_moves(owner_id)

    async def get_move(self, owner_id: str, move_id: str):
        move = await self.store.get_move(owner_id, move_id)
        if move is None:
            raise NotFoundError("Move not found")
        return move

    async def update_move(self, owner_id: str, move_id: str, changes: dict):
        if not changes:
            raise ValidationError("No fields to update")
        if "status" in changes and changes["status"] not in config.MOVE_STATUSES:
            raise ValidationError(f"Invalid status: {changes['status']}")

        matched = await self.store.update_move(owner_id, move_id, changes)
        if matched == 0:
            raise NotFoundError("Move not found")
        await self.store.commit()
        logger.info(f"Move {move_id} updated: {', '.join(sorted(changes))}", extra={"move_id": move_id})
        return await self.get_move(owner_id, move_id)

    async def delete_move(self, owner_id: str, move_id: str) -> None:
        deleted = await self.store.delete_move(owner_id, move_id)
        if deleted == 0:
            raise NotFoundError("Move not found")
        await self.store.commit()
        logger.info(f"Move {move_id} deleted by user {owner_id}", extra={"move_id": move_id})

    async def add_standard_rooms(self, owner_id: str, move_id: str) -> list:
        """Re-apply the standard room set. No duplicate check: calling twice doubles the rooms."""
        await self.get_move(owner_id, move_id)
        seeded = await self.seed_standard_rooms(move_id)
        if not seeded.added and seeded.failed:
            raise MovePlannerError("Failed to add standard rooms")
        await self.store.commit()
        return seeded.added
