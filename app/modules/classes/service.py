from supabase import Client
from app.modules.classes.schemas import ClassCreate, ClassUpdate, ClassResponse
from app.core.notifications import Notifier
from app.core.errors import report_failure
from typing import List, Optional, Dict, Any
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)

ALL_DEPARTMENTS = "all"
CLASS_SELECT = "*, departments (name)"


def format_class(row: Dict[str, Any]) -> ClassResponse:
    """Flatten a classes row with its departments join into the API shape"""
    department = row.get("departments") or {}
    return ClassResponse(
        id=row["id"],
        name=row["name"],
        department_id=row.get("department_id"),
        department=department.get("name") or "",
        student_count=row.get("student_count") or 0,
        unit=row.get("unit"),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


def to_class_row(class_data: ClassCreate) -> Dict[str, Any]:
    """Rename API fields to table columns"""
    return {
        "name": class_data.name,
        "department_id": class_data.department_id,
        "student_count": class_data.student_count,
        "unit": class_data.unit,
    }


class ClassService:
    def __init__(self, supabase: Client, notifier: Optional[Notifier] = None):
        self.supabase = supabase
        self.notifier = notifier or Notifier()

    def get_classes(self) -> List[ClassResponse]:
        """All classes with their department name, ordered by name. Returns [] on failure."""
        try:
            result = self.supabase.table("classes")\
                .select(CLASS_SELECT)\
                .order("name")\
                .execute()
            return [format_class(row) for row in (result.data or [])]
        except Exception as e:
            report_failure(logger, self.notifier, "Error loading classes", e)
            return []

    def get_classes_by_department(self, department_id: str) -> List[ClassResponse]:
        """Classes of one department; "all" returns every class. Returns [] on failure."""
        if department_id == ALL_DEPARTMENTS:
            return self.get_classes()
        try:
            result = self.supabase.table("classes")\
                .select(CLASS_SELECT)\
                .eq("department_id", department_id)\
                .order("name")\
                .execute()
            return [format_class(row) for row in (result.data or [])]
        except Exception as e:
            report_failure(logger, self.notifier, "Error loading classes", e)
            return []

    def get_class(self, class_id: str) -> ClassResponse:
        try:
            result = self.supabase.table("classes")\
                .select(CLASS_SELECT)\
                .eq("id", class_id)\
                .maybe_single()\
                .execute()

            if not result or not result.data:
                raise HTTPException(status_code=404, detail="Class not found")

            return format_class(result.data)
        except HTTPException:
            raise
        except Exception as e:
            raise report_failure(logger, self.notifier, "Error loading class", e)

    def add_class(self, class_data: ClassCreate) -> ClassResponse:
        """Insert a class and return it with the department join"""
        try:
            result = self.supabase.table("classes")\
                .insert(to_class_row(class_data))\
                .execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create class")

            self.notifier.success("Class added", f"{class_data.name} was added successfully.")
            return self._reload(result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise report_failure(logger, self.notifier, "Error adding class", e)

    def update_class(self, class_id: str, class_data: ClassUpdate) -> ClassResponse:
        try:
            result = self.supabase.table("classes")\
                .update(to_class_row(class_data))\
                .eq("id", class_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Class not found")

            self.notifier.success("Class updated", f"{class_data.name} was updated successfully.")
            return self._reload(result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise report_failure(logger, self.notifier, "Error updating class", e)

    def delete_class(self, class_id: str) -> bool:
        try:
            result = self.supabase.table("classes")\
                .delete()\
                .eq("id", class_id)\
                .execute()

            self.notifier.success("Class deleted", "The class was deleted successfully.")
            return len(result.data or []) > 0
        except Exception as e:
            raise report_failure(logger, self.notifier, "Error deleting class", e)

    def _reload(self, row: Dict[str, Any]) -> ClassResponse:
        """Re-select a written row so the response carries the department name"""
        result = self.supabase.table("classes")\
            .select(CLASS_SELECT)\
            .eq("id", row["id"])\
            .maybe_single()\
            .execute()
        return format_class(result.data if result and result.data else row)
