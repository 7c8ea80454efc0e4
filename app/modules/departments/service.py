from supabase import Client
from app.modules.departments.schemas import DepartmentCreate, DepartmentUpdate, DepartmentResponse
from app.core.notifications import Notifier
from app.core.errors import report_failure
from typing import List, Optional
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class DepartmentService:
    def __init__(self, supabase: Client, notifier: Optional[Notifier] = None):
        self.supabase = supabase
        self.notifier = notifier or Notifier()

    def list_departments(self) -> List[DepartmentResponse]:
        """List departments ordered by name; empty list when the backend fails"""
        try:
            result = self.supabase.table("departments")\
                .select("*")\
                .order("name")\
                .execute()
            return [DepartmentResponse(**row) for row in (result.data or [])]
        except Exception as e:
            report_failure(logger, self.notifier, "Error loading departments", e)
            return []

    def get_department(self, department_id: str) -> DepartmentResponse:
        try:
            result = self.supabase.table("departments")\
                .select("*")\
                .eq("id", department_id)\
                .maybe_single()\
                .execute()

            if not result or not result.data:
                raise HTTPException(status_code=404, detail="Department not found")

            return DepartmentResponse(**result.data)
        except HTTPException:
            raise
        except Exception as e:
            raise report_failure(logger, self.notifier, "Error loading department", e)

    def create_department(self, department_data: DepartmentCreate) -> DepartmentResponse:
        try:
            result = self.supabase.table("departments").insert({
                "name": department_data.name,
                "description": department_data.description
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create department")

            self.notifier.success("Department added", f"{department_data.name} was added successfully.")
            return DepartmentResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise report_failure(logger, self.notifier, "Error adding department", e)

    def update_department(self, department_id: str, department_data: DepartmentUpdate) -> DepartmentResponse:
        try:
            update_data = department_data.model_dump(exclude_unset=True)
            if not update_data:
                return self.get_department(department_id)

            result = self.supabase.table("departments")\
                .update(update_data)\
                .eq("id", department_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Department not found")

            self.notifier.success("Department updated", f"{result.data[0]['name']} was updated successfully.")
            return DepartmentResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise report_failure(logger, self.notifier, "Error updating department", e)

    def delete_department(self, department_id: str) -> bool:
        try:
            result = self.supabase.table("departments")\
                .delete()\
                .eq("id", department_id)\
                .execute()

            self.notifier.success("Department deleted", "The department was deleted successfully.")
            return len(result.data or []) > 0
        except Exception as e:
            raise report_failure(logger, self.notifier, "Error deleting department", e)
