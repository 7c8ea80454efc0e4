from typing import Optional, List, Literal
from datetime import datetime
from pydantic import Field
from app.core.schemas import CamelModel

RoomType = Literal[
    "classroom",
    "training_room",
    "weapons_room",
    "tactical_room",
    "computer_lab",
    "science_lab",
    "meeting_room",
]


class RoomCreate(CamelModel):
    name: str = Field(min_length=1)
    type: RoomType
    capacity: int = Field(ge=0)
    building: Optional[str] = None
    floor: Optional[str] = None
    description: Optional[str] = None
    equipment: Optional[List[str]] = None
    software: Optional[List[str]] = None
    is_available: Optional[bool] = True


class RoomUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1)
    type: Optional[RoomType] = None
    capacity: Optional[int] = Field(default=None, ge=0)
    building: Optional[str] = None
    floor: Optional[str] = None
    description: Optional[str] = None
    equipment: Optional[List[str]] = None
    software: Optional[List[str]] = None
    is_available: Optional[bool] = None


class RoomResponse(CamelModel):
    id: str
    name: str
    type: RoomType
    capacity: int
    building: Optional[str] = None
    floor: Optional[str] = None
    description: Optional[str] = None
    equipment: Optional[List[str]] = None
    software: Optional[List[str]] = None
    is_available: Optional[bool] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
