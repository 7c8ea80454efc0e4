from fastapi import APIRouter, Depends, HTTPException, status
from app.database.supabase_client import get_supabase
from app.modules.reservations.schemas import (
    ReservationCreate, ReservationUpdate, ReservationResponse, RequestStatus
)
from app.modules.reservations.service import ReservationService
from app.core.dependencies import require_permission, check_owner_or_admin, scoped_user_id
from app.core.notifications import Notifier, get_notifier
from supabase import Client
from typing import List, Optional, Dict

router = APIRouter(prefix="/reservations", tags=["reservations"])


def get_reservation_service(
    supabase: Client = Depends(get_supabase),
    notifier: Notifier = Depends(get_notifier)
) -> ReservationService:
    return ReservationService(supabase, notifier)


def check_reservation_access(reservation: ReservationResponse, profile: Dict) -> None:
    """Teachers only reach their own reservations"""
    if profile.get("role") == "teacher" and reservation.user_id != profile["id"]:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Reservation not accessible")


@router.get("", response_model=List[ReservationResponse])
async def list_reservations(
    user_id: Optional[str] = None,
    room_id: Optional[str] = None,
    status: Optional[RequestStatus] = None,
    profile: Dict = Depends(require_permission("reservations:read")),
    service: ReservationService = Depends(get_reservation_service)
):
    return service.list_reservations(
        user_id=scoped_user_id(profile, user_id),
        room_id=room_id,
        status=status
    )


@router.get("/{reservation_id}", response_model=ReservationResponse)
async def get_reservation(
    reservation_id: str,
    profile: Dict = Depends(require_permission("reservations:read")),
    service: ReservationService = Depends(get_reservation_service)
):
    reservation = service.get_reservation(reservation_id)
    check_reservation_access(reservation, profile)
    return reservation


@router.post("", response_model=ReservationResponse, status_code=201)
async def create_reservation(
    reservation_data: ReservationCreate,
    profile: Dict = Depends(require_permission("reservations:create")),
    service: ReservationService = Depends(get_reservation_service)
):
    return service.create_reservation(reservation_data, profile["id"])


@router.put("/{reservation_id}", response_model=ReservationResponse)
async def update_reservation(
    reservation_id: str,
    reservation_data: ReservationUpdate,
    profile: Dict = Depends(require_permission("reservations:update")),
    service: ReservationService = Depends(get_reservation_service)
):
    """Owners edit their reservation and may cancel it; approvers may set any status"""
    reservation = service.get_reservation(reservation_id)
    if profile.get("role") == "teacher":
        check_owner_or_admin(reservation.user_id, profile)
        if reservation_data.status not in (None, "cancelled"):
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="You can only cancel your reservation")
        if reservation.status != "pending" and reservation_data.model_fields_set - {"status"}:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"The reservation is already {reservation.status}; you can only cancel it"
            )
    return service.update_reservation(reservation_id, reservation_data)


@router.delete("/{reservation_id}", status_code=204)
async def delete_reservation(
    reservation_id: str,
    profile: Dict = Depends(require_permission("reservations:delete")),
    service: ReservationService = Depends(get_reservation_service)
):
    reservation = service.get_reservation(reservation_id)
    check_owner_or_admin(reservation.user_id, profile)
    service.delete_reservation(reservation_id)
    return None
