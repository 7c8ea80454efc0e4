from app.modules.approvals.request_routes import build_request_router
from app.modules.room_requests.schemas import (
    RoomRequestCreate, RoomRequestUpdate, RoomRequestResponse
)
from app.modules.room_requests.service import RoomRequestService

router = build_request_router(
    prefix="/room-requests",
    resource="room_requests",
    service_class=RoomRequestService,
    create_schema=RoomRequestCreate,
    update_schema=RoomRequestUpdate,
    response_schema=RoomRequestResponse,
)
