"""Service & packing-material manager for a move."""
import logging
from moveplanner.services.errors import NotFoundError, ValidationError

logger = logging.getLogger("moveplanner-services")


class ServiceManager:
    def __init__(self, store):
        self.store = store

    async def _owned_move(self, owner_id: str, move_id: str):
        move = await self.store.get_move(owner_id, move_id)
        if move is None:
            raise NotFoundError("Move not found")
        return move

    async def _owned_service(self, owner_id: str, service_id: str):
        service = await self.store.get_owned_service(owner_id, service_id)
        if service is None:
            raise NotFoundError("Service not found")
        return service

    # ── Services ─────────────────────────────────────────────────────────────

    async def list_services(self, owner_id: str, move_id: str) -> list:
        await self._owned_move(owner_id, move_id)
        return await self.store.list_services(move_id)

    async def add_service(self, owner_id: str, move_id: str, service_type: str,
                          quantity: int = 1, price: float = 0.0):
        await self._owned_move(owner_id, move_id)
        service = await self.store.insert_service(move_id, {
            "service_type": service_type,
            "quantity": quantity,
            "price": price,
        })
        await self.store.commit()
        logger.info(f"Service '{service_type}' x{quantity} added to move {move_id}", extra={"move_id": move_id})
        return service

    async def update_service(self, owner_id: str, service_id: str, changes: dict):
        if not changes:
            raise ValidationError("No fields to update")
        service = await self._owned_service(owner_id, service_id)
        service = await self.store.update_service(service, changes)
        await self.store.commit()
        return service

    async def delete_service(self, owner_id: str, service_id: str) -> None:
        service = await self._owned_service(owner_id, service_id)
        await self.store.delete_service(service)
        await self.store.commit()

    # ── Materials ────────────────────────────────────────────────────────────

    async def list_materials(self, owner_id: str, move_id: str) -> list:
        await self._owned_move(owner_id, move_id)
        return await self.store.list_materials(move_id)

    async def add_material(self, owner_id: str, move_id: str, material_type: str,
                           quantity: int, price_per_unit: float = 0.0):
        """total_price is fixed at insert; there is no material update path."""
        await self._owned_move(owner_id, move_id)
        material = await self.store.insert_material(move_id, {
            "material_type": material_type,
            "quantity": quantity,
            "price_per_unit": price_per_unit,
            "total_price": quantity * price_per_unit,
        })
        await self.store.commit()
        return material
