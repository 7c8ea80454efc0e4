from fastapi import APIRouter, Depends, HTTPException, status
from app.database.supabase_client import get_supabase, get_admin_supabase
from app.modules.users.schemas import (
    UserUpdate, UserResponse, TeacherClassAssign, TeacherClassResponse
)
from app.modules.users.service import UserService
from app.core.dependencies import require_permission, get_current_profile, is_admin
from app.core.notifications import Notifier, get_notifier
from supabase import Client
from typing import List, Optional, Dict

router = APIRouter(prefix="/users", tags=["users"])

# Roles each role may list on the user management pages; None means all
VISIBLE_ROLES = {
    "admin": None,
    "supervisor": ["teacher", "admin"],
    "teacher": [],
}


def get_user_service(
    supabase: Client = Depends(get_supabase),
    notifier: Notifier = Depends(get_notifier),
    admin_client: Optional[Client] = Depends(get_admin_supabase)
) -> UserService:
    return UserService(supabase, notifier, admin_client)


def can_view_user(profile: Dict, target: UserResponse) -> bool:
    if profile["id"] == target.id:
        return True
    visible = VISIBLE_ROLES.get(profile.get("role"), [])
    return visible is None or target.role in visible


def can_edit_user(profile: Dict, target: UserResponse, user_data: UserUpdate) -> bool:
    """Admins edit anyone; supervisors edit teachers; everyone edits themselves. Only admins change roles."""
    if "role" in user_data.model_fields_set and not is_admin(profile):
        return False
    if is_admin(profile) or profile["id"] == target.id:
        return True
    return profile.get("role") == "supervisor" and target.role == "teacher"


@router.get("", response_model=List[UserResponse])
async def list_users(
    role: Optional[str] = None,
    department: Optional[str] = None,
    profile: Dict = Depends(require_permission("users:read")),
    service: UserService = Depends(get_user_service)
):
    """List users by role and/or department. Teachers only see themselves."""
    if profile.get("role") == "teacher":
        return [service.get_user_by_id(profile["id"])]
    return service.list_users(
        role=role,
        department=department,
        visible_roles=VISIBLE_ROLES.get(profile.get("role"), [])
    )


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: str,
    profile: Dict = Depends(require_permission("users:read")),
    service: UserService = Depends(get_user_service)
):
    user = service.get_user_by_id(user_id)
    if not can_view_user(profile, user):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="User not accessible")
    return user


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: str,
    user_data: UserUpdate,
    profile: Dict = Depends(get_current_profile),
    service: UserService = Depends(get_user_service)
):
    """Update a profile (self, supervisor on teachers, or admin). Role changes are admin-only."""
    target = service.get_user_by_id(user_id)
    if not can_edit_user(profile, target, user_data):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="You cannot edit this user")
    return service.update_user(user_id, user_data)


@router.delete("/{user_id}", status_code=204)
async def delete_user(
    user_id: str,
    profile: Dict = Depends(require_permission("users:delete")),
    service: UserService = Depends(get_user_service)
):
    if user_id == profile["id"]:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="You cannot delete your own account")
    service.delete_user(user_id)
    return None


@router.get("/{user_id}/classes", response_model=List[TeacherClassResponse])
async def get_teacher_classes(
    user_id: str,
    profile: Dict = Depends(require_permission("users:read")),
    service: UserService = Depends(get_user_service)
):
    """Classes assigned to a teacher (teachers may only read their own)"""
    if profile.get("role") == "teacher" and user_id != profile["id"]:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="User not accessible")
    return service.get_teacher_classes(user_id)


@router.post("/{user_id}/classes", response_model=TeacherClassResponse, status_code=201)
async def assign_class(
    user_id: str,
    assignment: TeacherClassAssign,
    profile: Dict = Depends(require_permission("users:assign_classes")),
    service: UserService = Depends(get_user_service)
):
    return service.assign_class(user_id, assignment)


@router.delete("/{user_id}/classes/{class_id}", status_code=204)
async def unassign_class(
    user_id: str,
    class_id: str,
    profile: Dict = Depends(require_permission("users:assign_classes")),
    service: UserService = Depends(get_user_service)
):
    service.unassign_class(user_id, class_id)
    return None
