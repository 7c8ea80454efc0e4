from app.modules.approvals.request_service import RequestService
from app.modules.equipment.service import EquipmentService
from app.modules.equipment_requests.schemas import EquipmentRequestResponse
from app.core.errors import report_failure
from typing import Dict, Any, Optional
from fastapi import HTTPException
from datetime import datetime, timezone
import logging

logger = logging.getLogger(__name__)


class EquipmentRequestService(RequestService):
    table = "equipment_requests"
    label = "equipment request"
    response_model = EquipmentRequestResponse
    pending_only_fields = ("equipment_id", "equipment_quantity")

    def prepare_insert(self, insert_data: Dict[str, Any]) -> Dict[str, Any]:
        if not insert_data.get("equipment_name"):
            insert_data["equipment_name"] = self._lookup_name("equipment", insert_data["equipment_id"], "Equipment")
        return insert_data

    def mark_returned(
        self,
        request_id: str,
        returned_by: Dict[str, Any],
        returned_by_name: str,
        notes: Optional[str] = None
    ) -> EquipmentRequestResponse:
        """Record the return of approved equipment and put the units back in stock"""
        try:
            row = self.get_request_row(request_id)
            if row["status"] != "approved":
                raise HTTPException(status_code=409, detail="Only approved requests can be returned")
            if row.get("return_timestamp"):
                raise HTTPException(status_code=409, detail="Equipment was already returned")

            result = self.supabase.table(self.table)\
                .update({
                    "return_timestamp": datetime.now(timezone.utc).isoformat(),
                    "return_user_id": returned_by["id"],
                    "return_user_name": returned_by_name,
                    "return_notes": notes,
                })\
                .eq("id", request_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Equipment request not found")

            if row.get("equipment_id"):
                EquipmentService(self.supabase, self.notifier).return_equipment(
                    row["equipment_id"], row["equipment_quantity"]
                )
            return self.format_row(result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise report_failure(logger, self.notifier, "Error recording equipment return", e)
