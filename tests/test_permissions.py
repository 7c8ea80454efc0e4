from app.config.permissions_config import get_permission_matrix, get_role_permissions
from app.core.dependencies import scoped_user_id
from tests.conftest import ADMIN, SUPERVISOR, TEACHER


def test_admin_has_every_permission():
    permissions = set(get_role_permissions("admin"))

    assert "users:delete" in permissions
    assert "equipment:return" in permissions
    assert {f"{r}:approve" for r in ("equipment_requests", "printing_requests", "room_requests")} <= permissions


def test_supervisor_approves_but_does_not_manage_catalog():
    permissions = set(get_role_permissions("supervisor"))

    assert "room_requests:approve" in permissions
    assert "users:assign_classes" in permissions
    assert "classes:read" in permissions
    assert "classes:create" not in permissions
    assert "users:delete" not in permissions


def test_teacher_creates_requests_without_approving():
    permissions = set(get_role_permissions("teacher"))

    assert "printing_requests:create" in permissions
    assert "printing_requests:approve" not in permissions
    assert "equipment:update" not in permissions


def test_unknown_role_has_no_permissions():
    assert get_role_permissions("guest") == []


def test_matrix_lists_every_role_and_action():
    matrix = get_permission_matrix()

    assert [role["name"] for role in matrix["roles"]] == ["admin", "supervisor", "teacher"]
    names = {p["name"]: p["description"] for p in matrix["permissions"]}
    assert names["classes:create"] == "Create classes"
    assert names["equipment:return"] == "Record returned equipment"


def test_teachers_are_scoped_to_themselves():
    assert scoped_user_id(TEACHER, "someone-else") == TEACHER["id"]
    assert scoped_user_id(SUPERVISOR, "someone-else") == "someone-else"
    assert scoped_user_id(ADMIN) is None
