from supabase import Client
from app.core.notifications import Notifier
from app.core.errors import report_failure
from typing import List, Optional, Dict, Any, Tuple, Type
from fastapi import HTTPException
from pydantic import BaseModel
from datetime import datetime, timezone
import logging

logger = logging.getLogger(__name__)


class RequestService:
    """CRUD shared by the request tables. Subclasses set the table and response model."""

    table: str = ""
    label: str = "request"
    response_model: Type[BaseModel] = BaseModel
    # Columns that only change while the request is pending, even for admins
    pending_only_fields: Tuple[str, ...] = ()

    def __init__(self, supabase: Client, notifier: Optional[Notifier] = None):
        self.supabase = supabase
        self.notifier = notifier or Notifier()

    def format_row(self, row: Dict[str, Any]):
        return self.response_model(**row)

    def prepare_insert(self, insert_data: Dict[str, Any]) -> Dict[str, Any]:
        """Hook for subclasses to fill denormalised columns before insert"""
        return insert_data

    def _lookup_name(self, table: str, row_id: Optional[str], label: str) -> Optional[str]:
        if not row_id:
            return None
        result = self.supabase.table(table)\
            .select("name")\
            .eq("id", row_id)\
            .maybe_single()\
            .execute()
        if not result or not result.data:
            raise HTTPException(status_code=404, detail=f"{label} not found")
        return result.data["name"]

    def _fill_class_name(self, insert_data: Dict[str, Any]) -> None:
        if not insert_data.get("class_name"):
            insert_data["class_name"] = self._lookup_name("classes", insert_data.get("class_id"), "Class")
        if not insert_data.get("class_name"):
            raise HTTPException(status_code=400, detail="class_id or class_name is required")

    def get_request_row(self, request_id: str) -> Dict[str, Any]:
        try:
            result = self.supabase.table(self.table)\
                .select("*")\
                .eq("id", request_id)\
                .maybe_single()\
                .execute()

            if not result or not result.data:
                raise HTTPException(status_code=404, detail=f"{self.label.capitalize()} not found")

            return result.data
        except HTTPException:
            raise
        except Exception as e:
            raise report_failure(logger, self.notifier, f"Error loading {self.label}", e)

    def get_request(self, request_id: str):
        return self.format_row(self.get_request_row(request_id))

    def list_requests(self, user_id: Optional[str] = None, status: Optional[str] = None) -> List:
        """List requests, newest date first. Returns [] on failure."""
        try:
            query = self.supabase.table(self.table).select("*")
            if user_id:
                query = query.eq("user_id", user_id)
            if status:
                query = query.eq("status", status)
            result = query.order("date", desc=True).execute()
            return [self.format_row(row) for row in (result.data or [])]
        except Exception as e:
            report_failure(logger, self.notifier, f"Error loading {self.label}s", e)
            return []

    def create_request(self, request_data: BaseModel, user_id: str, user_name: str):
        """Insert a pending request on behalf of the user"""
        try:
            insert_data = request_data.model_dump(mode="json")
            self._fill_class_name(insert_data)
            insert_data = self.prepare_insert(insert_data)
            insert_data.update({
                "user_id": user_id,
                "user_name": user_name,
                "status": "pending",
            })

            result = self.supabase.table(self.table).insert(insert_data).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail=f"Failed to create {self.label}")

            logger.info(f"Created {self.label} {result.data[0]['id']} for user {user_id}")
            self.notifier.success(f"{self.label.capitalize()} submitted", "Your request is awaiting approval.")
            return self.format_row(result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise report_failure(logger, self.notifier, f"Error creating {self.label}", e)

    def check_editable(self, row: Dict[str, Any], profile: Dict[str, Any]) -> None:
        """Owner while pending, or admin at any time"""
        if profile.get("role") == "admin":
            return
        if row["user_id"] != profile["id"]:
            raise HTTPException(status_code=403, detail="You can only manage your own requests")
        if row["status"] != "pending":
            raise HTTPException(status_code=409, detail=f"Request is already {row['status']}")

    def validate_update(self, row: Dict[str, Any], update_data: Dict[str, Any]) -> None:
        """Hook for subclasses to check the merged row before update"""

    def update_request(self, request_id: str, request_data: BaseModel, profile: Dict[str, Any]):
        try:
            row = self.get_request_row(request_id)
            self.check_editable(row, profile)

            update_data = request_data.model_dump(mode="json", exclude_unset=True)
            if not update_data:
                return self.format_row(row)
            if update_data.get("class_id") and not update_data.get("class_name"):
                update_data["class_name"] = self._lookup_name("classes", update_data["class_id"], "Class")
            locked = [field for field in self.pending_only_fields if field in update_data]
            if locked and row["status"] != "pending":
                raise HTTPException(
                    status_code=409,
                    detail=f"{', '.join(locked)} cannot change once the request is {row['status']}"
                )
            self.validate_update(row, update_data)
            update_data["updated_at"] = datetime.now(timezone.utc).isoformat()

            result = self.supabase.table(self.table)\
                .update(update_data)\
                .eq("id", request_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail=f"{self.label.capitalize()} not found")

            self.notifier.success(f"{self.label.capitalize()} updated", "The request was updated successfully.")
            return self.format_row(result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise report_failure(logger, self.notifier, f"Error updating {self.label}", e)

    def delete_request(self, request_id: str, profile: Dict[str, Any]) -> bool:
        try:
            row = self.get_request_row(request_id)
            self.check_editable(row, profile)

            result = self.supabase.table(self.table)\
                .delete()\
                .eq("id", request_id)\
                .execute()

            self.notifier.success(f"{self.label.capitalize()} deleted", "The request was deleted successfully.")
            return len(result.data or []) > 0
        except HTTPException:
            raise
        except Exception as e:
            raise report_failure(logger, self.notifier, f"Error deleting {self.label}", e)
