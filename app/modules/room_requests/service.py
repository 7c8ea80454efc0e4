from app.modules.approvals.request_service import RequestService
from app.modules.room_requests.schemas import RoomRequestResponse, time_key
from typing import Dict, Any
from fastapi import HTTPException


class RoomRequestService(RequestService):
    table = "room_requests"
    label = "room request"
    response_model = RoomRequestResponse

    def prepare_insert(self, insert_data: Dict[str, Any]) -> Dict[str, Any]:
        if not insert_data.get("room_name"):
            insert_data["room_name"] = self._lookup_name("rooms", insert_data["room_id"], "Room")
        return insert_data

    def validate_update(self, row: Dict[str, Any], update_data: Dict[str, Any]) -> None:
        start = update_data.get("start_time", row["start_time"])
        end = update_data.get("end_time", row["end_time"])
        if time_key(end) <= time_key(start):
            raise HTTPException(status_code=400, detail="end_time must be after start_time")
