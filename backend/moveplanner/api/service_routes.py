"""Service & packing-material routes."""
from fastapi import APIRouter, Depends, status
from moveplanner.api.deps import get_current_user, get_service_manager
from moveplanner.models.orm_models import User
from moveplanner.models.schemas import (
    ServiceCreate, ServiceUpdate, ServiceRead, ServiceCreatedResponse,
    MaterialCreate, MaterialRead, MaterialCreatedResponse, MessageResponse,
)
from moveplanner.services.service_manager import ServiceManager

router = APIRouter(prefix="/api/services", tags=["Services & Materials"])


# ─── Materials ───────────────────────────────────────────────────────────────
# Registered before /{service_id} so "materials" is never read as a service id

@router.get("/materials/move/{move_id}", response_model=list[MaterialRead])
async def list_materials(
    move_id: str,
    current_user: User = Depends(get_current_user),
    manager: ServiceManager = Depends(get_service_manager),
):
    return await manager.list_materials(current_user.id, move_id)


@router.post("/materials", response_model=MaterialCreatedResponse, status_code=status.HTTP_201_CREATED)
async def add_material(
    body: MaterialCreate,
    current_user: User = Depends(get_current_user),
    manager: ServiceManager = Depends(get_service_manager),
):
    material = await manager.add_material(
        current_user.id, body.move_id, body.material_type, body.quantity, body.price_per_unit,
    )
    return MaterialCreatedResponse(message="Material added", material=MaterialRead.model_validate(material))


# ─── Services ────────────────────────────────────────────────────────────────

@router.get("/move/{move_id}", response_model=list[ServiceRead])
async def list_services(
    move_id: str,
    current_user: User = Depends(get_current_user),
    manager: ServiceManager = Depends(get_service_manager),
):
    return await manager.list_services(current_user.id, move_id)


@router.post("", response_model=ServiceCreatedResponse, status_code=status.HTTP_201_CREATED)
async def add_service(
    body: ServiceCreate,
    current_user: User = Depends(get_current_user),
    manager: ServiceManager = Depends(get_service_manager),
):
    service = await manager.add_service(
        current_user.id, body.move_id, body.service_type, body.quantity, body.price,
    )
    return ServiceCreatedResponse(message="Service added", service=ServiceRead.model_validate(service))


@router.put("/{service_id}", response_model=ServiceRead)
async def update_service(
    service_id: str,
    body: ServiceUpdate,
    current_user: User = Depends(get_current_user),
    manager: ServiceManager = Depends(get_service_manager),
):
    return await manager.update_service(current_user.id, service_id, body.changes())


@router.delete("/{service_id}", response_model=MessageResponse)
async def delete_service(
    service_id: str,
    current_user: User = Depends(get_current_user),
    manager: ServiceManager = Depends(get_service_manager),
):
    await manager.delete_service(current_user.id, service_id)
    return MessageResponse(message="Service deleted")
