from supabase import Client
from app.modules.approvals.workflow import (
    ApprovalStage, Decision, REQUEST_STATUSES,
    get_request_table, current_stage, holds_stock, plan_decision, is_final_approval
)
from app.modules.approvals.schemas import PendingRequest, RequestResponseBase
from app.modules.equipment.service import EquipmentService
from app.modules.equipment_requests.schemas import EquipmentRequestResponse
from app.modules.printing_requests.schemas import PrintingRequestResponse
from app.modules.room_requests.schemas import RoomRequestResponse
from app.core.notifications import Notifier
from app.core.errors import report_failure
from typing import List, Optional, Dict, Any
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)

RESPONSE_MODELS = {
    "equipment": EquipmentRequestResponse,
    "printing": PrintingRequestResponse,
    "room": RoomRequestResponse,
}


class ApprovalService:
    def __init__(self, supabase: Client, notifier: Optional[Notifier] = None):
        self.supabase = supabase
        self.notifier = notifier or Notifier()

    def _get_row(self, table: str, request_id: str) -> Dict[str, Any]:
        try:
            result = self.supabase.table(table)\
                .select("*")\
                .eq("id", request_id)\
                .maybe_single()\
                .execute()
        except Exception as e:
            raise report_failure(logger, self.notifier, "Error loading request", e)
        if not result or not result.data:
            raise HTTPException(status_code=404, detail="Request not found")
        return result.data

    def _restock(self, equipment_service: EquipmentService, row: Dict[str, Any]) -> None:
        """Give back units taken for a status change that did not go through"""
        try:
            equipment_service.return_equipment(row["equipment_id"], row["equipment_quantity"], announce=False)
        except HTTPException as e:
            logger.error(f"Could not restock equipment {row['equipment_id']} for request {row['id']}: {e.detail}")

    def decide(
        self,
        request_type: str,
        request_id: str,
        approver: Dict[str, Any],
        approver_name: str,
        decision: Decision,
        notes: Optional[str] = None
    ) -> RequestResponseBase:
        """Record a supervisor or admin decision on a pending request and return the updated request"""
        table = get_request_table(request_type)
        row = self._get_row(table, request_id)
        update_data = plan_decision(row, approver, decision, approver_name, notes)
        final = is_final_approval(update_data)

        # Units leave stock before the request turns approved
        equipment_service = None
        if final and request_type == "equipment" and row.get("equipment_id"):
            equipment_service = EquipmentService(self.supabase, self.notifier)
            equipment_service.reserve_quantity(row["equipment_id"], row["equipment_quantity"])

        try:
            # Only touch the row while it is still pending
            result = self.supabase.table(table)\
                .update(update_data)\
                .eq("id", request_id)\
                .eq("status", "pending")\
                .execute()
        except Exception as e:
            if equipment_service is not None:
                self._restock(equipment_service, row)
            raise report_failure(logger, self.notifier, "Error recording decision", e)

        if not result.data:
            if equipment_service is not None:
                self._restock(equipment_service, row)
            raise HTTPException(status_code=409, detail="Request is no longer pending")

        stage = current_stage(row)
        logger.info(f"{stage.value} {decision.value} on {table} {request_id} by {approver['id']}")
        if decision == Decision.REJECT:
            self.notifier.success("Request rejected", f"The request from {row['user_name']} was rejected.")
        elif final:
            self.notifier.success("Request approved", f"The request from {row['user_name']} was approved.")
        else:
            self.notifier.success("Supervisor approval recorded", "The request now awaits admin approval.")
        return RESPONSE_MODELS[request_type](**result.data[0])

    def _call_status_procedure(
        self,
        request_id: str,
        request_type: str,
        new_status: str,
        approver_id: str,
        approver_name: str,
        approval_notes: Optional[str] = None
    ) -> None:
        params = {
            "request_id": request_id,
            "request_type": request_type,
            "new_status": new_status,
            "approver_id": approver_id,
            "approver_name": approver_name,
        }
        if approval_notes is not None:
            params["approval_notes"] = approval_notes
        self.supabase.rpc("update_request_status", params).execute()

    def update_request_status(
        self,
        request_id: str,
        request_type: str,
        new_status: str,
        approver_id: str,
        approver_name: str,
        approval_notes: Optional[str] = None
    ) -> None:
        """Set a request status through the update_request_status procedure.

        Equipment requests move their units with the status: going into
        "approved" takes them out of stock (409 when short), leaving it
        before they were returned puts them back.
        """
        table = get_request_table(request_type)
        if new_status not in REQUEST_STATUSES:
            raise HTTPException(status_code=400, detail=f"Invalid status '{new_status}'")

        equipment_service = None
        reserved = released = False
        if request_type == "equipment":
            row = self._get_row(table, request_id)
            if row.get("equipment_id"):
                reserved = holds_stock(row, new_status) and not holds_stock(row)
                released = holds_stock(row) and not holds_stock(row, new_status)
            if reserved or released:
                equipment_service = EquipmentService(self.supabase, self.notifier)
            if reserved:
                equipment_service.reserve_quantity(row["equipment_id"], row["equipment_quantity"])

        try:
            self._call_status_procedure(
                request_id, request_type, new_status, approver_id, approver_name, approval_notes
            )
        except Exception as e:
            if reserved:
                self._restock(equipment_service, row)
            raise report_failure(logger, self.notifier, "Error updating request status", e)

        if released:
            equipment_service.return_equipment(row["equipment_id"], row["equipment_quantity"])

        logger.info(f"Status of {request_type} request {request_id} set to {new_status} by {approver_id}")
        self.notifier.success("Status updated", f"The request is now {new_status}.")

    def cancel(self, request_type: str, request_id: str, user: Dict[str, Any], user_name: str) -> None:
        """The owner (or an admin) cancels a pending request"""
        table = get_request_table(request_type)
        row = self._get_row(table, request_id)
        if row["user_id"] != user["id"] and user.get("role") != "admin":
            raise HTTPException(status_code=403, detail="You can only cancel your own requests")
        if row["status"] != "pending":
            raise HTTPException(status_code=409, detail=f"Request is already {row['status']}")
        try:
            self._call_status_procedure(request_id, request_type, "cancelled", user["id"], user_name)
        except Exception as e:
            raise report_failure(logger, self.notifier, "Error cancelling request", e)
        logger.info(f"{request_type} request {request_id} cancelled by {user['id']}")
        self.notifier.success("Request cancelled", "The request was cancelled.")

    def list_pending(self, request_type: str, stage: Optional[ApprovalStage] = None) -> List[PendingRequest]:
        """Pending requests of one type, optionally only those awaiting the given stage. Returns [] on failure."""
        table = get_request_table(request_type)
        try:
            query = self.supabase.table(table)\
                .select("*")\
                .eq("status", "pending")
            if stage == ApprovalStage.SUPERVISOR:
                query = query.is_("supervisor_approval_timestamp", "null")
            elif stage == ApprovalStage.ADMIN:
                query = query.not_.is_("supervisor_approval_timestamp", "null")
            result = query.order("date").execute()
            return [
                PendingRequest(
                    id=row["id"],
                    request_type=request_type,
                    user_name=row["user_name"],
                    class_name=row["class_name"],
                    date=row["date"],
                    stage=current_stage(row).value,
                    status=row["status"],
                )
                for row in (result.data or [])
            ]
        except Exception as e:
            report_failure(logger, self.notifier, "Error loading pending requests", e)
            return []
