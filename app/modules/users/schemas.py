from typing import Optional, Literal
from datetime import datetime
from app.core.schemas import CamelModel

UserRole = Literal["admin", "supervisor", "teacher"]


class UserUpdate(CamelModel):
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None
    department: Optional[str] = None
    unit: Optional[str] = None
    rank: Optional[str] = None
    clearance_level: Optional[str] = None
    role: Optional[UserRole] = None


class UserResponse(CamelModel):
    id: str
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None
    role: UserRole
    department: Optional[str] = None
    unit: Optional[str] = None
    rank: Optional[str] = None
    clearance_level: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class TeacherClassAssign(CamelModel):
    class_id: str


class TeacherClassResponse(CamelModel):
    id: str
    teacher_id: str
    class_id: str
    class_name: Optional[str] = None
    created_at: Optional[datetime] = None
