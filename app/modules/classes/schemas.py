from typing import Optional
from datetime import datetime
from pydantic import Field
from app.core.schemas import CamelModel


class ClassCreate(CamelModel):
    name: str = Field(min_length=1)
    department_id: str
    student_count: int = Field(default=0, ge=0)
    unit: Optional[str] = None


class ClassUpdate(ClassCreate):
    pass


class ClassResponse(CamelModel):
    id: str
    name: str
    department_id: Optional[str] = None
    department: str = ""  # joined departments.name
    student_count: int = 0
    unit: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
