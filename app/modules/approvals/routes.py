from fastapi import APIRouter, Depends, HTTPException, status
from app.database.supabase_client import get_supabase
from app.modules.approvals.schemas import ApprovalDecision, StatusUpdate, PendingRequest, RequestType
from app.modules.approvals.service import ApprovalService
from app.modules.approvals.workflow import ApprovalStage, get_request_table
from app.modules.equipment_requests.schemas import EquipmentRequestResponse
from app.modules.printing_requests.schemas import PrintingRequestResponse
from app.modules.room_requests.schemas import RoomRequestResponse
from app.core.dependencies import (
    get_current_profile, require_role, has_permission, display_name
)
from app.core.notifications import Notifier, get_notifier
from supabase import Client
from typing import List, Optional, Dict, Union

router = APIRouter(prefix="/approvals", tags=["approvals"])

DecidedRequest = Union[EquipmentRequestResponse, PrintingRequestResponse, RoomRequestResponse]


def get_approval_service(
    supabase: Client = Depends(get_supabase),
    notifier: Notifier = Depends(get_notifier)
) -> ApprovalService:
    return ApprovalService(supabase, notifier)


def check_can_approve(request_type: str, profile: Dict) -> None:
    permission = f"{get_request_table(request_type)}:approve"
    if not has_permission(profile, permission):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Insufficient permissions. Required: {permission}"
        )


@router.get("/{request_type}/pending", response_model=List[PendingRequest])
async def list_pending(
    request_type: RequestType,
    stage: Optional[ApprovalStage] = None,
    profile: Dict = Depends(require_role("supervisor", "admin")),
    service: ApprovalService = Depends(get_approval_service)
):
    """Pending requests; defaults to the stage matching the caller's role"""
    check_can_approve(request_type, profile)
    return service.list_pending(request_type, stage or ApprovalStage(profile["role"]))


@router.post("/{request_type}/{request_id}/decision", response_model=DecidedRequest)
async def decide(
    request_type: RequestType,
    request_id: str,
    decision: ApprovalDecision,
    profile: Dict = Depends(require_role("supervisor", "admin")),
    service: ApprovalService = Depends(get_approval_service)
):
    """Approve or reject a request at the stage it is waiting on"""
    check_can_approve(request_type, profile)
    return service.decide(
        request_type, request_id, profile, display_name(profile), decision.decision, decision.notes
    )


@router.patch("/{request_type}/{request_id}/status", status_code=204)
async def update_request_status(
    request_type: RequestType,
    request_id: str,
    status_update: StatusUpdate,
    profile: Dict = Depends(require_role("admin")),
    service: ApprovalService = Depends(get_approval_service)
):
    """Admin override of a request status"""
    service.update_request_status(
        request_id, request_type, status_update.status, profile["id"], display_name(profile), status_update.notes
    )
    return None


@router.post("/{request_type}/{request_id}/cancel", status_code=204)
async def cancel_request(
    request_type: RequestType,
    request_id: str,
    profile: Dict = Depends(get_current_profile),
    service: ApprovalService = Depends(get_approval_service)
):
    """Cancel one of your pending requests"""
    service.cancel(request_type, request_id, profile, display_name(profile))
    return None
