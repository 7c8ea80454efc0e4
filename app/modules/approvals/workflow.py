"""
Two-stage approval workflow for request rows.

A pending request first waits for a supervisor; once the supervisor approves,
it waits for an admin. Approval fields record who decided, when, and why:

    supervisor_approval_{timestamp,user_id,user_name,notes}
    admin_approval_{timestamp,user_id,user_name,notes}

A rejection at either stage is final. Only the admin approval moves the
request to "approved"; the supervisor approval leaves it "pending".
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from fastapi import HTTPException

REQUEST_TABLES = {
    "equipment": "equipment_requests",
    "printing": "printing_requests",
    "room": "room_requests",
}

REQUEST_STATUSES = ("pending", "approved", "rejected", "cancelled")


class ApprovalStage(str, Enum):
    SUPERVISOR = "supervisor"
    ADMIN = "admin"


class Decision(str, Enum):
    APPROVE = "approve"
    REJECT = "reject"


def get_request_table(request_type: str) -> str:
    if request_type not in REQUEST_TABLES:
        raise HTTPException(
            status_code=400,
            detail=f"Unknown request type '{request_type}'. Expected one of: {', '.join(REQUEST_TABLES)}"
        )
    return REQUEST_TABLES[request_type]


def current_stage(row: Dict[str, Any]) -> Optional[ApprovalStage]:
    """Stage a request is waiting on, or None once it left the pending status"""
    if row.get("status") != "pending":
        return None
    if not row.get("supervisor_approval_timestamp"):
        return ApprovalStage.SUPERVISOR
    return ApprovalStage.ADMIN


def holds_stock(row: Dict[str, Any], status: Optional[str] = None) -> bool:
    """Whether an equipment request keeps its units out of stock: approved and not yet returned"""
    return (status or row.get("status")) == "approved" and not row.get("return_timestamp")


def plan_decision(
    row: Dict[str, Any],
    approver: Dict[str, Any],
    decision: Decision,
    approver_name: str,
    notes: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """Column updates recording the approver's decision on a request row.

    Raises 409 when the request is not pending and 403 when the approver's
    role does not match the stage the request is waiting on.
    """
    stage = current_stage(row)
    if stage is None:
        raise HTTPException(
            status_code=409,
            detail=f"Request is already {row.get('status')} and can no longer be reviewed"
        )
    if approver.get("role") != stage.value:
        raise HTTPException(
            status_code=403,
            detail=f"This request is awaiting {stage.value} approval"
        )

    timestamp = (now or datetime.now(timezone.utc)).isoformat()
    prefix = f"{stage.value}_approval"
    update_data = {
        f"{prefix}_timestamp": timestamp,
        f"{prefix}_user_id": approver["id"],
        f"{prefix}_user_name": approver_name,
        f"{prefix}_notes": notes,
    }

    if decision == Decision.REJECT:
        update_data["status"] = "rejected"
    elif stage == ApprovalStage.ADMIN:
        update_data["status"] = "approved"
    return update_data


def is_final_approval(update_data: Dict[str, Any]) -> bool:
    return update_data.get("status") == "approved"
