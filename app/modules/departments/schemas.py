from typing import Optional
from datetime import datetime
from pydantic import Field
from app.core.schemas import CamelModel


class DepartmentCreate(CamelModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None


class DepartmentUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None


class DepartmentResponse(CamelModel):
    id: str
    name: str
    description: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
