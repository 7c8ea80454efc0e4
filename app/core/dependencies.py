"""
Core dependencies for route protection and permission checking
"""

from fastapi import Depends, HTTPException, Request, Security, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from app.database.supabase_client import get_supabase
from app.core.notifications import Notifier, get_notifier
from app.modules.auth.service import AuthService
from app.config.permissions_config import get_role_permissions
from supabase import Client
from typing import Dict, Any
import logging

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def get_auth_service(
    supabase: Client = Depends(get_supabase),
    notifier: Notifier = Depends(get_notifier)
) -> AuthService:
    return AuthService(supabase, notifier)


def get_current_token(
    credentials: HTTPAuthorizationCredentials = Security(security)
) -> str:
    """Extract JWT token from Authorization header"""
    if credentials is None or not credentials.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="You must be signed in to perform this action"
        )
    return credentials.credentials


def get_current_user_id(
    token: str = Depends(get_current_token),
    auth_service: AuthService = Depends(get_auth_service)
) -> dict:
    """Extract current user info from JWT token (session retrieval)"""
    return auth_service.get_current_user(token)


def get_profile(user_id: str, supabase: Client) -> Dict[str, Any]:
    """Return the profiles row of a user or raise 403 when the account has no profile."""
    try:
        result = supabase.table("profiles")\
            .select("*")\
            .eq("id", user_id)\
            .maybe_single()\
            .execute()
    except Exception as e:
        logger.error(f"Error loading profile {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Could not load user profile")
    if not result or not result.data:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="No profile found for this account"
        )
    return result.data


def get_current_profile(
    request: Request,
    user_data: dict = Depends(get_current_user_id),
    supabase: Client = Depends(get_supabase)
) -> dict:
    """Current user merged with their profile (role, department, full_name). Cached per request."""
    cached = getattr(request.state, "current_profile", None)
    if cached is not None and cached["id"] == user_data["id"]:
        return cached
    profile = get_profile(user_data["id"], supabase)
    current = {**profile, "email": user_data.get("email"), "user_metadata": user_data.get("user_metadata", {})}
    request.state.current_profile = current
    return current


def display_name(profile: dict) -> str:
    return profile.get("full_name") or profile.get("email") or profile["id"]


def has_permission(profile: dict, permission: str) -> bool:
    return permission in get_role_permissions(profile.get("role") or "")


def require_permission(required_permission: str):
    """Factory function to create permission check dependency"""
    def check_permission(profile: dict = Depends(get_current_profile)) -> dict:
        """Dependency to check the profile role grants the required permission"""
        if not has_permission(profile, required_permission):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Insufficient permissions. Required: {required_permission}"
            )
        return profile
    return check_permission


def require_role(*roles: str):
    """Factory function to create a role check dependency"""
    def check_role(profile: dict = Depends(get_current_profile)) -> dict:
        if profile.get("role") not in roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"This action requires one of the roles: {', '.join(roles)}"
            )
        return profile
    return check_role


def is_admin(profile: dict) -> bool:
    return profile.get("role") == "admin"


def check_owner_or_admin(owner_id: str, profile: dict) -> dict:
    """Allow admins, or the user who owns the row"""
    if is_admin(profile) or owner_id == profile["id"]:
        return profile
    raise HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail="You can only manage your own records"
    )


def scoped_user_id(profile: dict, requested_user_id=None):
    """Teachers only see their own rows; other roles may filter freely."""
    if profile.get("role") == "teacher":
        return profile["id"]
    return requested_user_id
