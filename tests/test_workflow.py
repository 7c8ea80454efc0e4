from datetime import datetime, timezone

import pytest
from fastapi import HTTPException

from app.modules.approvals.workflow import (
    ApprovalStage, Decision, current_stage, get_request_table, is_final_approval, plan_decision
)
from tests.conftest import ADMIN, SUPERVISOR, TEACHER

NOW = datetime(2024, 3, 1, 9, 30, tzinfo=timezone.utc)


def pending_row(**overrides):
    row = {"id": "req-1", "status": "pending", "user_id": TEACHER["id"], "user_name": "Tom Teacher"}
    row.update(overrides)
    return row


def test_request_table_mapping():
    assert get_request_table("equipment") == "equipment_requests"
    assert get_request_table("printing") == "printing_requests"
    assert get_request_table("room") == "room_requests"


def test_unknown_request_type_is_rejected():
    with pytest.raises(HTTPException) as exc:
        get_request_table("vehicle")
    assert exc.value.status_code == 400


def test_stage_follows_supervisor_timestamp():
    assert current_stage(pending_row()) == ApprovalStage.SUPERVISOR
    assert current_stage(pending_row(supervisor_approval_timestamp=NOW.isoformat())) == ApprovalStage.ADMIN
    assert current_stage(pending_row(status="approved")) is None


def test_supervisor_approval_keeps_request_pending():
    update = plan_decision(pending_row(), SUPERVISOR, Decision.APPROVE, "Sam Supervisor", "ok", now=NOW)

    assert update == {
        "supervisor_approval_timestamp": NOW.isoformat(),
        "supervisor_approval_user_id": SUPERVISOR["id"],
        "supervisor_approval_user_name": "Sam Supervisor",
        "supervisor_approval_notes": "ok",
    }
    assert not is_final_approval(update)


def test_admin_approval_is_final():
    row = pending_row(supervisor_approval_timestamp=NOW.isoformat())
    update = plan_decision(row, ADMIN, Decision.APPROVE, "Alice Admin", now=NOW)

    assert update["status"] == "approved"
    assert update["admin_approval_user_id"] == ADMIN["id"]
    assert update["admin_approval_notes"] is None
    assert "supervisor_approval_timestamp" not in update
    assert is_final_approval(update)


@pytest.mark.parametrize("row,approver,prefix", [
    (pending_row(), SUPERVISOR, "supervisor_approval"),
    (pending_row(supervisor_approval_timestamp=NOW.isoformat()), ADMIN, "admin_approval"),
])
def test_rejection_at_either_stage(row, approver, prefix):
    update = plan_decision(row, approver, Decision.REJECT, approver["full_name"], "no", now=NOW)

    assert update["status"] == "rejected"
    assert update[f"{prefix}_notes"] == "no"
    assert not is_final_approval(update)


def test_admin_cannot_skip_supervisor_stage():
    with pytest.raises(HTTPException) as exc:
        plan_decision(pending_row(), ADMIN, Decision.APPROVE, "Alice Admin")
    assert exc.value.status_code == 403


def test_supervisor_cannot_decide_admin_stage():
    row = pending_row(supervisor_approval_timestamp=NOW.isoformat())
    with pytest.raises(HTTPException) as exc:
        plan_decision(row, SUPERVISOR, Decision.APPROVE, "Sam Supervisor")
    assert exc.value.status_code == 403


@pytest.mark.parametrize("status", ["approved", "rejected", "cancelled"])
def test_closed_requests_cannot_be_reviewed(status):
    with pytest.raises(HTTPException) as exc:
        plan_decision(pending_row(status=status), SUPERVISOR, Decision.APPROVE, "Sam Supervisor")
    assert exc.value.status_code == 409
