from supabase import Client
from app.modules.reservations.schemas import ReservationCreate, ReservationUpdate, ReservationResponse, as_utc
from app.core.notifications import Notifier
from app.core.errors import report_failure
from typing import List, Optional, Dict, Any
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)

RESERVATION_SELECT = "*, rooms (name), equipment (name)"


def format_reservation(row: Dict[str, Any]) -> ReservationResponse:
    data = {k: v for k, v in row.items() if k not in ("rooms", "equipment")}
    data["room_name"] = (row.get("rooms") or {}).get("name")
    data["equipment_name"] = (row.get("equipment") or {}).get("name")
    return ReservationResponse(**data)


class ReservationService:
    def __init__(self, supabase: Client, notifier: Optional[Notifier] = None):
        self.supabase = supabase
        self.notifier = notifier or Notifier()

    def list_reservations(
        self,
        user_id: Optional[str] = None,
        room_id: Optional[str] = None,
        status: Optional[str] = None
    ) -> List[ReservationResponse]:
        """List reservations, most recent start first. Returns [] on failure."""
        try:
            query = self.supabase.table("reservations").select(RESERVATION_SELECT)
            if user_id:
                query = query.eq("user_id", user_id)
            if room_id:
                query = query.eq("room_id", room_id)
            if status:
                query = query.eq("status", status)
            result = query.order("start_time", desc=True).execute()
            return [format_reservation(row) for row in (result.data or [])]
        except Exception as e:
            report_failure(logger, self.notifier, "Error loading reservations", e)
            return []

    def get_reservation(self, reservation_id: str) -> ReservationResponse:
        try:
            result = self.supabase.table("reservations")\
                .select(RESERVATION_SELECT)\
                .eq("id", reservation_id)\
                .maybe_single()\
                .execute()

            if not result or not result.data:
                raise HTTPException(status_code=404, detail="Reservation not found")

            return format_reservation(result.data)
        except HTTPException:
            raise
        except Exception as e:
            raise report_failure(logger, self.notifier, "Error loading reservation", e)

    def create_reservation(self, reservation_data: ReservationCreate, user_id: str) -> ReservationResponse:
        try:
            insert_data = reservation_data.model_dump(mode="json")
            insert_data["user_id"] = user_id
            insert_data["status"] = "pending"

            result = self.supabase.table("reservations").insert(insert_data).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create reservation")

            self.notifier.success("Reservation created", "Your reservation is awaiting approval.")
            return format_reservation(result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise report_failure(logger, self.notifier, "Error creating reservation", e)

    def update_reservation(self, reservation_id: str, reservation_data: ReservationUpdate) -> ReservationResponse:
        try:
            update_data = reservation_data.model_dump(mode="json", exclude_unset=True)
            if not update_data:
                return self.get_reservation(reservation_id)

            if "start_time" in update_data or "end_time" in update_data:
                current = self.get_reservation(reservation_id)
                start = reservation_data.start_time or as_utc(current.start_time)
                end = reservation_data.end_time or as_utc(current.end_time)
                if end <= start:
                    raise HTTPException(status_code=400, detail="end_time must be after start_time")

            result = self.supabase.table("reservations")\
                .update(update_data)\
                .eq("id", reservation_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Reservation not found")

            self.notifier.success("Reservation updated", "The reservation was updated successfully.")
            return format_reservation(result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise report_failure(logger, self.notifier, "Error updating reservation", e)

    def delete_reservation(self, reservation_id: str) -> bool:
        try:
            result = self.supabase.table("reservations")\
                .delete()\
                .eq("id", reservation_id)\
                .execute()

            self.notifier.success("Reservation deleted", "The reservation was deleted successfully.")
            return len(result.data or []) > 0
        except Exception as e:
            raise report_failure(logger, self.notifier, "Error deleting reservation", e)
