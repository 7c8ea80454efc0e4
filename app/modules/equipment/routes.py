from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.equipment.schemas import (
    EquipmentCreate, EquipmentUpdate, EquipmentResponse, EquipmentReturn
)
from app.modules.equipment.service import EquipmentService
from app.core.dependencies import require_permission
from app.core.notifications import Notifier, get_notifier
from supabase import Client
from typing import List, Optional, Dict

router = APIRouter(prefix="/equipment", tags=["equipment"])


def get_equipment_service(
    supabase: Client = Depends(get_supabase),
    notifier: Notifier = Depends(get_notifier)
) -> EquipmentService:
    return EquipmentService(supabase, notifier)


@router.get("", response_model=List[EquipmentResponse])
async def list_equipment(
    category: Optional[str] = None,
    profile: Dict = Depends(require_permission("equipment:read")),
    service: EquipmentService = Depends(get_equipment_service)
):
    return service.list_equipment(category=category)


@router.get("/{equipment_id}", response_model=EquipmentResponse)
async def get_equipment(
    equipment_id: str,
    profile: Dict = Depends(require_permission("equipment:read")),
    service: EquipmentService = Depends(get_equipment_service)
):
    return service.get_equipment(equipment_id)


@router.post("", response_model=EquipmentResponse, status_code=201)
async def create_equipment(
    equipment_data: EquipmentCreate,
    profile: Dict = Depends(require_permission("equipment:create")),
    service: EquipmentService = Depends(get_equipment_service)
):
    return service.create_equipment(equipment_data)


@router.put("/{equipment_id}", response_model=EquipmentResponse)
async def update_equipment(
    equipment_id: str,
    equipment_data: EquipmentUpdate,
    profile: Dict = Depends(require_permission("equipment:update")),
    service: EquipmentService = Depends(get_equipment_service)
):
    return service.update_equipment(equipment_id, equipment_data)


@router.delete("/{equipment_id}", status_code=204)
async def delete_equipment(
    equipment_id: str,
    profile: Dict = Depends(require_permission("equipment:delete")),
    service: EquipmentService = Depends(get_equipment_service)
):
    service.delete_equipment(equipment_id)
    return None


@router.post("/{equipment_id}/return", response_model=EquipmentResponse)
async def return_equipment(
    equipment_id: str,
    return_data: EquipmentReturn,
    profile: Dict = Depends(require_permission("equipment:return")),
    service: EquipmentService = Depends(get_equipment_service)
):
    """Return units to stock outside of a request (inventory correction)"""
    service.return_equipment(equipment_id, return_data.quantity)
    return service.get_equipment(equipment_id)
