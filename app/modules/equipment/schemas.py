from typing import Optional
from datetime import datetime
from pydantic import Field, model_validator
from app.core.schemas import CamelModel


class EquipmentCreate(CamelModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None
    category: Optional[str] = None
    location: Optional[str] = None
    total_quantity: int = Field(ge=0)
    available_quantity: Optional[int] = Field(default=None, ge=0)  # defaults to total_quantity
    requires_clearance: Optional[bool] = False

    @model_validator(mode="after")
    def available_within_total(self):
        if self.available_quantity is not None and self.available_quantity > self.total_quantity:
            raise ValueError("available_quantity cannot exceed total_quantity")
        return self


class EquipmentUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    category: Optional[str] = None
    location: Optional[str] = None
    total_quantity: Optional[int] = Field(default=None, ge=0)
    available_quantity: Optional[int] = Field(default=None, ge=0)
    requires_clearance: Optional[bool] = None


class EquipmentResponse(CamelModel):
    id: str
    name: str
    description: Optional[str] = None
    category: Optional[str] = None
    location: Optional[str] = None
    total_quantity: int
    available_quantity: int
    requires_clearance: Optional[bool] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class EquipmentReturn(CamelModel):
    quantity: int = Field(ge=1)
