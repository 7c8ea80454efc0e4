from fastapi import APIRouter, Depends
from app.modules.auth.schemas import (
    LoginRequest, RegisterRequest, TokenResponse, RegisterResponse, MeResponse, PermissionMatrixResponse
)
from app.modules.auth.service import AuthService
from app.core.dependencies import get_auth_service, get_current_token, get_current_profile
from app.config.permissions_config import PERMISSION_MATRIX, get_role_permissions
from typing import Dict

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=RegisterResponse, status_code=201)
async def register(
    register_data: RegisterRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Create an account; it starts with the teacher role until an admin changes it"""
    return service.register(register_data)


@router.post("/login", response_model=TokenResponse)
async def login(
    login_data: LoginRequest,
    service: AuthService = Depends(get_auth_service)
):
    return service.login(login_data)


@router.post("/logout")
async def logout(
    token: str = Depends(get_current_token),
    service: AuthService = Depends(get_auth_service)
):
    service.logout(token)
    return {"message": "Logged out successfully"}


@router.get("/me", response_model=MeResponse)
async def me(profile: Dict = Depends(get_current_profile)):
    role = profile.get("role") or ""
    return MeResponse(
        id=profile["id"],
        email=profile.get("email"),
        user_metadata=profile.get("user_metadata") or {},
        role=profile.get("role"),
        full_name=profile.get("full_name"),
        department=profile.get("department"),
        unit=profile.get("unit"),
        permissions=get_role_permissions(role),
    )


@router.get("/permissions", response_model=PermissionMatrixResponse)
async def permission_matrix(profile: Dict = Depends(get_current_profile)):
    """Every permission and the roles granting it"""
    return PERMISSION_MATRIX
