from typing import Optional, Literal
from datetime import datetime, timezone
from pydantic import Field, field_validator, model_validator
from app.core.schemas import CamelModel

RequestStatus = Literal["pending", "approved", "rejected", "cancelled"]


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Read times without an offset as UTC so they compare with stored timestamptz values"""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class ReservationCreate(CamelModel):
    room_id: Optional[str] = None
    equipment_id: Optional[str] = None
    equipment_quantity: Optional[int] = Field(default=None, ge=1)
    class_id: Optional[str] = None
    class_name: Optional[str] = None
    start_time: datetime
    end_time: datetime
    participants: Optional[int] = Field(default=None, ge=0)
    purpose: Optional[str] = None
    requires_commander_approval: Optional[bool] = False

    @field_validator("start_time", "end_time")
    @classmethod
    def utc_times(cls, value):
        return as_utc(value)

    @model_validator(mode="after")
    def check_reservation(self):
        if not self.room_id and not self.equipment_id:
            raise ValueError("Either room_id or equipment_id must be set")
        if self.end_time <= self.start_time:
            raise ValueError("end_time must be after start_time")
        return self


class ReservationUpdate(CamelModel):
    room_id: Optional[str] = None
    equipment_id: Optional[str] = None
    equipment_quantity: Optional[int] = Field(default=None, ge=1)
    class_id: Optional[str] = None
    class_name: Optional[str] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    participants: Optional[int] = Field(default=None, ge=0)
    purpose: Optional[str] = None
    requires_commander_approval: Optional[bool] = None
    status: Optional[RequestStatus] = None

    @field_validator("start_time", "end_time")
    @classmethod
    def utc_times(cls, value):
        return as_utc(value)


class ReservationResponse(CamelModel):
    id: str
    user_id: str
    room_id: Optional[str] = None
    room_name: Optional[str] = None  # joined rooms.name
    equipment_id: Optional[str] = None
    equipment_name: Optional[str] = None  # joined equipment.name
    equipment_quantity: Optional[int] = None
    class_id: Optional[str] = None
    class_name: Optional[str] = None
    start_time: datetime
    end_time: datetime
    participants: Optional[int] = None
    purpose: Optional[str] = None
    requires_commander_approval: Optional[bool] = None
    status: RequestStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
