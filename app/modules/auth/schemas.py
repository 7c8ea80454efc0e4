from pydantic import BaseModel, EmailStr, Field
from typing import Optional, List, Dict, Any

# Supabase Auth rejects shorter passwords by default
MIN_PASSWORD_LENGTH = 6


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user_id: str
    email: str


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=MIN_PASSWORD_LENGTH)
    full_name: Optional[str] = None


class RegisterResponse(BaseModel):
    user_id: str
    email: str
    message: str


class MeResponse(BaseModel):
    """Signed-in user with the profile role and what it grants, so the UI can hide actions"""
    id: str
    email: Optional[str] = None
    user_metadata: Dict[str, Any] = {}
    role: Optional[str] = None
    full_name: Optional[str] = None
    department: Optional[str] = None
    unit: Optional[str] = None
    permissions: List[str] = []


class PermissionEntry(BaseModel):
    name: str
    resource: str
    action: str
    description: str


class RolePermissions(BaseModel):
    name: str
    description: str
    permissions: List[str]


class PermissionMatrixResponse(BaseModel):
    permissions: List[PermissionEntry]
    roles: List[RolePermissions]
