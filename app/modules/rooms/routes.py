from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.rooms.schemas import RoomCreate, RoomUpdate, RoomResponse, RoomType
from app.modules.rooms.service import RoomService
from app.core.dependencies import require_permission
from app.core.notifications import Notifier, get_notifier
from supabase import Client
from typing import List, Optional, Dict

router = APIRouter(prefix="/rooms", tags=["rooms"])


def get_room_service(
    supabase: Client = Depends(get_supabase),
    notifier: Notifier = Depends(get_notifier)
) -> RoomService:
    return RoomService(supabase, notifier)


@router.get("", response_model=List[RoomResponse])
async def list_rooms(
    type: Optional[RoomType] = None,
    is_available: Optional[bool] = None,
    profile: Dict = Depends(require_permission("rooms:read")),
    service: RoomService = Depends(get_room_service)
):
    return service.list_rooms(room_type=type, is_available=is_available)


@router.get("/{room_id}", response_model=RoomResponse)
async def get_room(
    room_id: str,
    profile: Dict = Depends(require_permission("rooms:read")),
    service: RoomService = Depends(get_room_service)
):
    return service.get_room(room_id)


@router.post("", response_model=RoomResponse, status_code=201)
async def create_room(
    room_data: RoomCreate,
    profile: Dict = Depends(require_permission("rooms:create")),
    service: RoomService = Depends(get_room_service)
):
    return service.create_room(room_data)


@router.put("/{room_id}", response_model=RoomResponse)
async def update_room(
    room_id: str,
    room_data: RoomUpdate,
    profile: Dict = Depends(require_permission("rooms:update")),
    service: RoomService = Depends(get_room_service)
):
    return service.update_room(room_id, room_data)


@router.delete("/{room_id}", status_code=204)
async def delete_room(
    room_id: str,
    profile: Dict = Depends(require_permission("rooms:delete")),
    service: RoomService = Depends(get_room_service)
):
    service.delete_room(room_id)
    return None
