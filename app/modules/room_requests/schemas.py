from typing import Optional
from pydantic import Field, model_validator
from app.modules.approvals.schemas import RequestBase, RequestUpdateBase, RequestResponseBase

TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d(:[0-5]\d)?$"


def time_key(value: str) -> str:
    """Normalise HH:MM and HH:MM:SS so they compare correctly"""
    return value if len(value) == 8 else f"{value}:00"


class RoomRequestCreate(RequestBase):
    room_id: str
    room_name: Optional[str] = None  # looked up from rooms when omitted
    start_time: str = Field(pattern=TIME_PATTERN)
    end_time: str = Field(pattern=TIME_PATTERN)
    participants: Optional[int] = Field(default=None, ge=0)
    requires_commander_approval: Optional[bool] = False

    @model_validator(mode="after")
    def end_after_start(self):
        if time_key(self.end_time) <= time_key(self.start_time):
            raise ValueError("end_time must be after start_time")
        return self


class RoomRequestUpdate(RequestUpdateBase):
    start_time: Optional[str] = Field(default=None, pattern=TIME_PATTERN)
    end_time: Optional[str] = Field(default=None, pattern=TIME_PATTERN)
    participants: Optional[int] = Field(default=None, ge=0)
    requires_commander_approval: Optional[bool] = None


class RoomRequestResponse(RequestResponseBase):
    room_id: Optional[str] = None
    room_name: str
    start_time: str
    end_time: str
    participants: Optional[int] = None
    requires_commander_approval: Optional[bool] = None
