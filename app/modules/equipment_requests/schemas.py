from typing import Optional
from datetime import datetime
from pydantic import Field
from app.core.schemas import CamelModel
from app.modules.approvals.schemas import RequestBase, RequestUpdateBase, RequestResponseBase


class EquipmentRequestCreate(RequestBase):
    equipment_id: str
    equipment_name: Optional[str] = None  # looked up from equipment when omitted
    equipment_quantity: int = Field(default=1, ge=1)


class EquipmentRequestUpdate(RequestUpdateBase):
    equipment_quantity: Optional[int] = Field(default=None, ge=1)


class EquipmentRequestResponse(RequestResponseBase):
    equipment_id: Optional[str] = None
    equipment_name: str
    equipment_quantity: int
    return_timestamp: Optional[datetime] = None
    return_user_id: Optional[str] = None
    return_user_name: Optional[str] = None
    return_notes: Optional[str] = None


class EquipmentReturnRequest(CamelModel):
    notes: Optional[str] = None
