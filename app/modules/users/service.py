from supabase import Client
from app.modules.users.schemas import (
    UserUpdate, UserResponse, TeacherClassAssign, TeacherClassResponse
)
from app.core.notifications import Notifier
from app.core.errors import report_failure
from typing import List, Optional, Dict, Any
from fastapi import HTTPException
from datetime import datetime, timezone
import logging

logger = logging.getLogger(__name__)


def format_teacher_class(row: Dict[str, Any]) -> TeacherClassResponse:
    joined = row.get("classes") or {}
    return TeacherClassResponse(
        id=row["id"],
        teacher_id=row["teacher_id"],
        class_id=row["class_id"],
        class_name=joined.get("name"),
        created_at=row.get("created_at"),
    )


class UserService:
    def __init__(self, supabase: Client, notifier: Optional[Notifier] = None, admin_client: Optional[Client] = None):
        self.supabase = supabase
        self.notifier = notifier or Notifier()
        # service_role client for auth admin calls; None when no service role key is configured
        self.admin_client = admin_client

    def get_user_by_id(self, user_id: str) -> UserResponse:
        """Get user profile by ID"""
        try:
            result = self.supabase.table("profiles")\
                .select("*")\
                .eq("id", user_id)\
                .maybe_single()\
                .execute()

            if not result or not result.data:
                raise HTTPException(status_code=404, detail="User not found")

            return UserResponse(**result.data)
        except HTTPException:
            raise
        except Exception as e:
            raise report_failure(logger, self.notifier, "Error loading user", e)

    def list_users(
        self,
        role: Optional[str] = None,
        department: Optional[str] = None,
        visible_roles: Optional[List[str]] = None
    ) -> List[UserResponse]:
        """List profiles filtered by role and/or department. visible_roles limits what the caller may see."""
        try:
            if visible_roles is not None:
                if role and role not in visible_roles:
                    return []
                if not visible_roles:
                    return []
            query = self.supabase.table("profiles").select("*")
            if role:
                query = query.eq("role", role)
            elif visible_roles is not None:
                query = query.in_("role", visible_roles)
            if department:
                query = query.eq("department", department)
            result = query.order("full_name").execute()
            return [UserResponse(**user) for user in (result.data or [])]
        except Exception as e:
            report_failure(logger, self.notifier, "Error loading users", e)
            return []

    def update_user(self, user_id: str, user_data: UserUpdate) -> UserResponse:
        """Update user profile"""
        try:
            update_data = user_data.model_dump(exclude_unset=True)
            if not update_data:
                return self.get_user_by_id(user_id)
            update_data["updated_at"] = datetime.now(timezone.utc).isoformat()

            result = self.supabase.table("profiles")\
                .update(update_data)\
                .eq("id", user_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="User not found")

            self.notifier.success("User updated", "The profile was updated successfully.")
            return UserResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise report_failure(logger, self.notifier, "Error updating user", e)

    def delete_user(self, user_id: str) -> bool:
        """Delete user profile, then the auth account when an admin client is available"""
        try:
            # Remove class assignments first
            self.supabase.table("teacher_classes")\
                .delete()\
                .eq("teacher_id", user_id)\
                .execute()

            result = self.supabase.table("profiles")\
                .delete()\
                .eq("id", user_id)\
                .execute()

            if self.admin_client is not None:
                self.admin_client.auth.admin.delete_user(user_id)
                logger.info(f"Deleted auth account {user_id}")

            self.notifier.success("User deleted", "The user was deleted successfully.")
            return len(result.data or []) > 0
        except Exception as e:
            raise report_failure(logger, self.notifier, "Error deleting user", e)

    def get_teacher_classes(self, teacher_id: str) -> List[TeacherClassResponse]:
        """Classes assigned to a teacher"""
        try:
            result = self.supabase.table("teacher_classes")\
                .select("*, classes (name)")\
                .eq("teacher_id", teacher_id)\
                .execute()
            return [format_teacher_class(row) for row in (result.data or [])]
        except Exception as e:
            report_failure(logger, self.notifier, "Error loading teacher classes", e)
            return []

    def assign_class(self, teacher_id: str, assignment: TeacherClassAssign) -> TeacherClassResponse:
        """Assign a class to a teacher"""
        try:
            teacher = self.get_user_by_id(teacher_id)
            if teacher.role != "teacher":
                raise HTTPException(status_code=400, detail="Classes can only be assigned to teachers")

            existing = self.supabase.table("teacher_classes")\
                .select("id")\
                .eq("teacher_id", teacher_id)\
                .eq("class_id", assignment.class_id)\
                .execute()

            if existing.data:
                raise HTTPException(status_code=400, detail="Class already assigned to this teacher")

            result = self.supabase.table("teacher_classes").insert({
                "teacher_id": teacher_id,
                "class_id": assignment.class_id
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to assign class")

            self.notifier.success("Class assigned", "The class was assigned to the teacher.")
            return format_teacher_class(result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise report_failure(logger, self.notifier, "Error assigning class", e)

    def unassign_class(self, teacher_id: str, class_id: str) -> bool:
        """Remove a class from a teacher"""
        try:
            result = self.supabase.table("teacher_classes")\
                .delete()\
                .eq("teacher_id", teacher_id)\
                .eq("class_id", class_id)\
                .execute()

            self.notifier.success("Class unassigned", "The class was removed from the teacher.")
            return len(result.data or []) > 0
        except Exception as e:
            raise report_failure(logger, self.notifier, "Error unassigning class", e)
