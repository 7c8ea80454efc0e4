from fastapi import Depends
from app.database.supabase_client import get_supabase
from app.modules.approvals.request_routes import build_request_router
from app.modules.equipment_requests.schemas import (
    EquipmentRequestCreate, EquipmentRequestUpdate, EquipmentRequestResponse, EquipmentReturnRequest
)
from app.modules.equipment_requests.service import EquipmentRequestService
from app.core.dependencies import require_permission, display_name
from app.core.notifications import Notifier, get_notifier
from supabase import Client
from typing import Dict

router = build_request_router(
    prefix="/equipment-requests",
    resource="equipment_requests",
    service_class=EquipmentRequestService,
    create_schema=EquipmentRequestCreate,
    update_schema=EquipmentRequestUpdate,
    response_schema=EquipmentRequestResponse,
)


def get_equipment_request_service(
    supabase: Client = Depends(get_supabase),
    notifier: Notifier = Depends(get_notifier)
) -> EquipmentRequestService:
    return EquipmentRequestService(supabase, notifier)


@router.post("/{request_id}/return", response_model=EquipmentRequestResponse)
async def mark_returned(
    request_id: str,
    return_data: EquipmentReturnRequest,
    profile: Dict = Depends(require_permission("equipment:return")),
    service: EquipmentRequestService = Depends(get_equipment_request_service)
):
    """Record that the borrowed equipment came back"""
    return service.mark_returned(request_id, profile, display_name(profile), return_data.notes)
