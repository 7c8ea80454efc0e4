from supabase import Client
from app.modules.rooms.schemas import RoomCreate, RoomUpdate, RoomResponse
from app.core.notifications import Notifier
from app.core.errors import report_failure
from typing import List, Optional
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class RoomService:
    def __init__(self, supabase: Client, notifier: Optional[Notifier] = None):
        self.supabase = supabase
        self.notifier = notifier or Notifier()

    def list_rooms(self, room_type: Optional[str] = None, is_available: Optional[bool] = None) -> List[RoomResponse]:
        """List rooms ordered by name. Returns [] on failure."""
        try:
            query = self.supabase.table("rooms").select("*")
            if room_type:
                query = query.eq("type", room_type)
            if is_available is not None:
                query = query.eq("is_available", is_available)
            result = query.order("name").execute()
            return [RoomResponse(**row) for row in (result.data or [])]
        except Exception as e:
            report_failure(logger, self.notifier, "Error loading rooms", e)
            return []

    def get_room(self, room_id: str) -> RoomResponse:
        try:
            result = self.supabase.table("rooms")\
                .select("*")\
                .eq("id", room_id)\
                .maybe_single()\
                .execute()

            if not result or not result.data:
                raise HTTPException(status_code=404, detail="Room not found")

            return RoomResponse(**result.data)
        except HTTPException:
            raise
        except Exception as e:
            raise report_failure(logger, self.notifier, "Error loading room", e)

    def create_room(self, room_data: RoomCreate) -> RoomResponse:
        try:
            result = self.supabase.table("rooms").insert(room_data.model_dump()).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create room")

            self.notifier.success("Room added", f"{room_data.name} was added successfully.")
            return RoomResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise report_failure(logger, self.notifier, "Error adding room", e)

    def update_room(self, room_id: str, room_data: RoomUpdate) -> RoomResponse:
        try:
            update_data = room_data.model_dump(exclude_unset=True)
            if not update_data:
                return self.get_room(room_id)

            result = self.supabase.table("rooms")\
                .update(update_data)\
                .eq("id", room_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Room not found")

            self.notifier.success("Room updated", f"{result.data[0]['name']} was updated successfully.")
            return RoomResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise report_failure(logger, self.notifier, "Error updating room", e)

    def delete_room(self, room_id: str) -> bool:
        try:
            result = self.supabase.table("rooms")\
                .delete()\
                .eq("id", room_id)\
                .execute()

            self.notifier.success("Room deleted", "The room was deleted successfully.")
            return len(result.data or []) > 0
        except Exception as e:
            raise report_failure(logger, self.notifier, "Error deleting room", e)
