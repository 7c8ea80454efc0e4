import json

import pytest
from fastapi import HTTPException

from app.core.notifications import NOTIFICATIONS_HEADER, Notifier
from app.modules.approvals.service import ApprovalService
from app.modules.approvals.workflow import ApprovalStage, Decision
from app.modules.equipment_requests.service import EquipmentRequestService
from tests.conftest import ADMIN, SUPERVISOR, TEACHER, OTHER_TEACHER, APIError

STAMPED = "2024-03-02T08:00:00+00:00"
EQUIPMENT = {"id": "e1", "name": "Projector", "total_quantity": 5, "available_quantity": 3}


def request_row(**overrides):
    row = {
        "id": "q1",
        "user_id": TEACHER["id"],
        "user_name": "Tom Teacher",
        "class_name": "7A",
        "date": "2024-03-04",
        "status": "pending",
        "equipment_id": "e1",
        "equipment_name": "Projector",
        "equipment_quantity": 2,
        "document_name": "Worksheet",
        "page_count": 3,
        "copies": 30,
        "room_name": "Lab 1",
        "start_time": "09:00:00",
        "end_time": "10:00:00",
    }
    row.update(overrides)
    return row


@pytest.fixture
def notifier():
    return Notifier()


@pytest.fixture
def service(fake_supabase, notifier):
    return ApprovalService(fake_supabase, notifier)


def test_supervisor_approval_is_recorded(service, fake_supabase, notifier):
    fake_supabase.queue("printing_requests", request_row(), [request_row(supervisor_approval_timestamp=STAMPED)])

    updated = service.decide("printing", "q1", SUPERVISOR, "Sam Supervisor", Decision.APPROVE, "fine")

    write = fake_supabase.writes("printing_requests", "update")[0]
    assert write.args_of("eq") == [("id", "q1"), ("status", "pending")]
    update = write.first_arg("update")
    assert update["supervisor_approval_user_id"] == SUPERVISOR["id"]
    assert update["supervisor_approval_notes"] == "fine"
    assert "status" not in update
    assert updated.supervisor_approval_timestamp.isoformat() == STAMPED
    assert updated.document_name == "Worksheet"
    assert notifier.notifications[0].title == "Supervisor approval recorded"


def test_admin_approval_of_equipment_reserves_stock(service, fake_supabase, notifier):
    fake_supabase.queue("equipment_requests", request_row(supervisor_approval_timestamp=STAMPED), [request_row(status="approved")])
    fake_supabase.queue("equipment", EQUIPMENT, [{**EQUIPMENT, "available_quantity": 1}])

    approved = service.decide("equipment", "q1", ADMIN, "Alice Admin", Decision.APPROVE)

    status_write = fake_supabase.writes("equipment_requests", "update")[0]
    stock_write = fake_supabase.writes("equipment", "update")[0]
    assert status_write.first_arg("update")["status"] == "approved"
    assert status_write.first_arg("update")["admin_approval_user_name"] == "Alice Admin"
    assert stock_write.first_arg("update") == {"available_quantity": 1}
    assert fake_supabase.queries.index(stock_write) < fake_supabase.queries.index(status_write)
    assert approved.equipment_name == "Projector"
    assert notifier.notifications[-1].title == "Request approved"


@pytest.mark.parametrize("status_write, status_code", [
    ([], 409),
    (APIError("canceling statement due to statement timeout"), 500),
])
def test_failed_final_approval_gives_stock_back(service, fake_supabase, notifier, status_write, status_code):
    fake_supabase.queue("equipment_requests", request_row(supervisor_approval_timestamp=STAMPED), status_write)
    reserved = {**EQUIPMENT, "available_quantity": 1}
    fake_supabase.queue("equipment", EQUIPMENT, [reserved], reserved)

    with pytest.raises(HTTPException) as exc:
        service.decide("equipment", "q1", ADMIN, "Alice Admin", Decision.APPROVE)

    assert exc.value.status_code == status_code
    assert fake_supabase.rpc_calls == [("return_equipment", {"equipment_id": "e1", "quantity": 2})]
    assert "Equipment returned" not in [n.title for n in notifier.notifications]


def test_final_approval_without_stock_conflicts(service, fake_supabase):
    fake_supabase.queue("equipment_requests", request_row(supervisor_approval_timestamp=STAMPED, equipment_quantity=9))
    fake_supabase.queue("equipment", {"id": "e1", "name": "Projector", "total_quantity": 5, "available_quantity": 3})

    with pytest.raises(HTTPException) as exc:
        service.decide("equipment", "q1", ADMIN, "Alice Admin", Decision.APPROVE)

    assert exc.value.status_code == 409
    assert fake_supabase.writes("equipment_requests", "update") == []


def test_rejection_does_not_touch_stock(service, fake_supabase, notifier):
    fake_supabase.queue("equipment_requests", request_row(), [request_row(status="rejected")])

    service.decide("equipment", "q1", SUPERVISOR, "Sam Supervisor", Decision.REJECT, "not this week")

    update = fake_supabase.writes("equipment_requests", "update")[0].first_arg("update")
    assert update["status"] == "rejected"
    assert fake_supabase.queries_on("equipment") == []
    assert notifier.notifications[0].title == "Request rejected"


def test_concurrent_decision_conflicts(service, fake_supabase):
    fake_supabase.queue("room_requests", request_row(), [])

    with pytest.raises(HTTPException) as exc:
        service.decide("room", "q1", SUPERVISOR, "Sam Supervisor", Decision.APPROVE)
    assert exc.value.status_code == 409


def test_missing_request_is_404(service, fake_supabase):
    fake_supabase.queue("room_requests", None)

    with pytest.raises(HTTPException) as exc:
        service.decide("room", "missing", SUPERVISOR, "Sam Supervisor", Decision.APPROVE)
    assert exc.value.status_code == 404


def test_status_update_calls_procedure(service, fake_supabase, notifier):
    service.update_request_status("q1", "room", "approved", ADMIN["id"], "Alice Admin", "override")

    assert fake_supabase.rpc_calls == [("update_request_status", {
        "request_id": "q1",
        "request_type": "room",
        "new_status": "approved",
        "approver_id": ADMIN["id"],
        "approver_name": "Alice Admin",
        "approval_notes": "override",
    })]
    assert notifier.notifications[0].title == "Status updated"


def test_status_update_omits_empty_notes(service, fake_supabase):
    service.update_request_status("q1", "printing", "rejected", ADMIN["id"], "Alice Admin")

    assert "approval_notes" not in fake_supabase.rpc_calls[0][1]


def test_invalid_status_is_rejected(service, fake_supabase):
    with pytest.raises(HTTPException) as exc:
        service.update_request_status("q1", "printing", "archived", ADMIN["id"], "Alice Admin")
    assert exc.value.status_code == 400
    assert fake_supabase.rpc_calls == []


def test_override_into_approved_reserves_stock(service, fake_supabase):
    fake_supabase.queue("equipment_requests", request_row(status="rejected"))
    fake_supabase.queue("equipment", EQUIPMENT, [{**EQUIPMENT, "available_quantity": 1}])

    service.update_request_status("q1", "equipment", "approved", ADMIN["id"], "Alice Admin")

    assert fake_supabase.writes("equipment", "update")[0].first_arg("update") == {"available_quantity": 1}
    assert [name for name, _ in fake_supabase.rpc_calls] == ["update_request_status"]


def test_override_into_approved_without_stock_conflicts(service, fake_supabase):
    fake_supabase.queue("equipment_requests", request_row(status="rejected", equipment_quantity=9))
    fake_supabase.queue("equipment", EQUIPMENT)

    with pytest.raises(HTTPException) as exc:
        service.update_request_status("q1", "equipment", "approved", ADMIN["id"], "Alice Admin")

    assert exc.value.status_code == 409
    assert fake_supabase.rpc_calls == []


def test_failed_override_gives_reserved_stock_back(service, fake_supabase):
    fake_supabase.queue("equipment_requests", request_row(status="cancelled"))
    reserved = {**EQUIPMENT, "available_quantity": 1}
    fake_supabase.queue("equipment", EQUIPMENT, [reserved], reserved)
    fake_supabase.queue("rpc:update_request_status", APIError("permission denied for function update_request_status"))

    with pytest.raises(HTTPException) as exc:
        service.update_request_status("q1", "equipment", "approved", ADMIN["id"], "Alice Admin")

    assert exc.value.status_code == 500
    assert fake_supabase.rpc_calls[-1] == ("return_equipment", {"equipment_id": "e1", "quantity": 2})


def test_override_out_of_approved_returns_stock(service, fake_supabase, notifier):
    fake_supabase.queue("equipment_requests", request_row(status="approved"))
    fake_supabase.queue("equipment", {**EQUIPMENT, "available_quantity": 1})

    service.update_request_status("q1", "equipment", "rejected", ADMIN["id"], "Alice Admin", "stock recalled")

    assert [name for name, _ in fake_supabase.rpc_calls] == ["update_request_status", "return_equipment"]
    assert fake_supabase.rpc_calls[1][1] == {"equipment_id": "e1", "quantity": 2}
    assert notifier.notifications[-1].title == "Status updated"


def test_override_of_returned_request_leaves_stock(service, fake_supabase):
    fake_supabase.queue("equipment_requests", request_row(status="approved", return_timestamp=STAMPED))

    service.update_request_status("q1", "equipment", "rejected", ADMIN["id"], "Alice Admin")

    assert fake_supabase.queries_on("equipment") == []
    assert [name for name, _ in fake_supabase.rpc_calls] == ["update_request_status"]


def test_override_then_return_restores_stock_once(service, fake_supabase, notifier):
    fake_supabase.queue("equipment_requests", request_row(status="rejected"))
    fake_supabase.queue("equipment", EQUIPMENT, [{**EQUIPMENT, "available_quantity": 1}])
    service.update_request_status("q1", "equipment", "approved", ADMIN["id"], "Alice Admin")

    fake_supabase.queue("equipment_requests", request_row(status="approved"), [request_row(status="approved", return_timestamp=STAMPED)])
    fake_supabase.queue("equipment", {**EQUIPMENT, "available_quantity": 1})
    EquipmentRequestService(fake_supabase, notifier).mark_returned("q1", ADMIN, "Alice Admin")

    taken = 3 - fake_supabase.writes("equipment", "update")[0].first_arg("update")["available_quantity"]
    given_back = [params["quantity"] for name, params in fake_supabase.rpc_calls if name == "return_equipment"]
    assert given_back == [taken]


def test_owner_cancels_pending_request(service, fake_supabase):
    fake_supabase.queue("printing_requests", request_row())

    service.cancel("printing", "q1", TEACHER, "Tom Teacher")

    name, params = fake_supabase.rpc_calls[0]
    assert name == "update_request_status"
    assert params["new_status"] == "cancelled"
    assert params["approver_id"] == TEACHER["id"]


def test_other_teacher_cannot_cancel(service, fake_supabase):
    fake_supabase.queue("printing_requests", request_row())

    with pytest.raises(HTTPException) as exc:
        service.cancel("printing", "q1", OTHER_TEACHER, "Tina Teacher")
    assert exc.value.status_code == 403


def test_cancel_decided_request_conflicts(service, fake_supabase):
    fake_supabase.queue("printing_requests", request_row(status="approved"))

    with pytest.raises(HTTPException) as exc:
        service.cancel("printing", "q1", TEACHER, "Tom Teacher")
    assert exc.value.status_code == 409


def test_list_pending_by_stage(service, fake_supabase):
    fake_supabase.queue("room_requests", [request_row()], [request_row(supervisor_approval_timestamp=STAMPED)])

    supervisor_queue = service.list_pending("room", ApprovalStage.SUPERVISOR)
    admin_queue = service.list_pending("room", ApprovalStage.ADMIN)

    first, second = fake_supabase.queries_on("room_requests")
    assert first.args_of("is_") == [("supervisor_approval_timestamp", "null")]
    assert "not_" not in first.names
    assert second.names[second.names.index("not_") + 1] == "is_"
    assert supervisor_queue[0].stage == "supervisor"
    assert admin_queue[0].stage == "admin"


def test_list_pending_failure_returns_empty(service, fake_supabase, notifier):
    fake_supabase.queue("room_requests", RuntimeError("connection reset"))

    assert service.list_pending("room") == []
    assert notifier.notifications[0].variant == "destructive"


def test_pending_route_defaults_to_caller_stage(as_user, fake_supabase):
    fake_supabase.queue("printing_requests", [request_row()])

    response = as_user(SUPERVISOR).get("/api/v1/approvals/printing/pending")

    assert response.status_code == 200
    assert response.json()[0]["requestType"] == "printing"
    assert fake_supabase.queries_on("printing_requests")[0].args_of("is_")


def test_teacher_cannot_review(as_user):
    response = as_user(TEACHER).post("/api/v1/approvals/room/q1/decision", json={"decision": "approve"})

    assert response.status_code == 403


def test_admin_cannot_skip_supervisor(as_user, fake_supabase):
    fake_supabase.queue("room_requests", request_row())

    response = as_user(ADMIN).post("/api/v1/approvals/room/q1/decision", json={"decision": "approve"})

    assert response.status_code == 403
    assert response.json()["detail"] == "This request is awaiting supervisor approval"


def test_decision_route_notifies(as_user, fake_supabase):
    fake_supabase.queue("room_requests", request_row(), [request_row(status="rejected")])

    response = as_user(SUPERVISOR).post(
        "/api/v1/approvals/room/q1/decision", json={"decision": "reject", "notes": "room closed"}
    )

    assert response.status_code == 200
    assert response.json()["status"] == "rejected"
    assert response.json()["roomName"] == "Lab 1"
    assert "equipmentName" not in response.json()
    assert json.loads(response.headers[NOTIFICATIONS_HEADER])[0]["title"] == "Request rejected"


def test_status_override_is_admin_only(as_user):
    response = as_user(SUPERVISOR).patch("/api/v1/approvals/room/q1/status", json={"status": "approved"})

    assert response.status_code == 403


def test_unknown_request_type_is_unprocessable(as_user):
    response = as_user(ADMIN).patch("/api/v1/approvals/vehicle/q1/status", json={"status": "approved"})

    assert response.status_code == 422
