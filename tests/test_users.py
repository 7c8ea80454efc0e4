from unittest.mock import MagicMock

import pytest
from fastapi import HTTPException

from app.core.notifications import Notifier
from app.modules.users.schemas import TeacherClassAssign, UserUpdate
from app.modules.users.service import UserService
from tests.conftest import ADMIN, SUPERVISOR, TEACHER, OTHER_TEACHER


def profile_row(profile, **overrides):
    row = {"id": profile["id"], "role": profile["role"], "full_name": profile["full_name"]}
    row.update(overrides)
    return row


def test_list_users_limits_to_visible_roles(fake_supabase):
    fake_supabase.queue("profiles", [profile_row(TEACHER)])

    users = UserService(fake_supabase).list_users(visible_roles=["teacher", "admin"])

    assert [u.id for u in users] == [TEACHER["id"]]
    query = fake_supabase.queries_on("profiles")[0]
    assert query.args_of("in_") == [("role", ["teacher", "admin"])]
    assert query.first_arg("order") == "full_name"


def test_list_users_hidden_role_returns_nothing(fake_supabase):
    assert UserService(fake_supabase).list_users(role="supervisor", visible_roles=["teacher"]) == []
    assert fake_supabase.queries == []


def test_list_route_filters_by_role_and_department(as_user, fake_supabase):
    fake_supabase.queue("profiles", [profile_row(TEACHER, department="Science")])

    response = as_user(ADMIN).get("/api/v1/users", params={"role": "teacher", "department": "Science"})

    assert response.status_code == 200
    assert fake_supabase.queries_on("profiles")[0].args_of("eq") == [("role", "teacher"), ("department", "Science")]


def test_delete_user_removes_assignments_profile_and_account(fake_supabase):
    admin_client = MagicMock()
    fake_supabase.queue("profiles", [profile_row(TEACHER)])

    assert UserService(fake_supabase, admin_client=admin_client).delete_user(TEACHER["id"]) is True

    assert fake_supabase.queries[0].table == "teacher_classes"
    assert fake_supabase.queries[1].table == "profiles"
    admin_client.auth.admin.delete_user.assert_called_once_with(TEACHER["id"])


def test_assign_class_only_to_teachers(fake_supabase):
    fake_supabase.queue("profiles", profile_row(SUPERVISOR))

    with pytest.raises(HTTPException) as exc:
        UserService(fake_supabase).assign_class(SUPERVISOR["id"], TeacherClassAssign(class_id="c1"))
    assert exc.value.status_code == 400


def test_assign_class_twice_is_rejected(fake_supabase):
    fake_supabase.queue("profiles", profile_row(TEACHER))
    fake_supabase.queue("teacher_classes", [{"id": "tc1"}])

    with pytest.raises(HTTPException) as exc:
        UserService(fake_supabase).assign_class(TEACHER["id"], TeacherClassAssign(class_id="c1"))
    assert exc.value.detail == "Class already assigned to this teacher"


def test_assign_class(fake_supabase):
    notifier = Notifier()
    fake_supabase.queue("profiles", profile_row(TEACHER))
    fake_supabase.queue("teacher_classes", [], [{"id": "tc1", "teacher_id": TEACHER["id"], "class_id": "c1"}])

    assigned = UserService(fake_supabase, notifier).assign_class(TEACHER["id"], TeacherClassAssign(class_id="c1"))

    assert assigned.class_id == "c1"
    assert notifier.notifications[0].title == "Class assigned"


def test_teacher_list_contains_only_themselves(as_user, fake_supabase):
    fake_supabase.queue("profiles", profile_row(TEACHER))

    response = as_user(TEACHER).get("/api/v1/users")

    assert response.status_code == 200
    assert [u["id"] for u in response.json()] == [TEACHER["id"]]


def test_teacher_cannot_view_other_teacher(as_user, fake_supabase):
    fake_supabase.queue("profiles", profile_row(OTHER_TEACHER))

    response = as_user(TEACHER).get(f"/api/v1/users/{OTHER_TEACHER['id']}")

    assert response.status_code == 403


def test_only_admin_changes_roles(as_user, fake_supabase):
    fake_supabase.queue("profiles", profile_row(TEACHER))

    response = as_user(SUPERVISOR).put(f"/api/v1/users/{TEACHER['id']}", json={"role": "admin"})

    assert response.status_code == 403
    assert fake_supabase.writes("profiles", "update") == []


def test_supervisor_edits_teacher(as_user, fake_supabase):
    fake_supabase.queue("profiles", profile_row(TEACHER), [profile_row(TEACHER, unit="North")])

    response = as_user(SUPERVISOR).put(f"/api/v1/users/{TEACHER['id']}", json={"unit": "North"})

    assert response.status_code == 200
    assert response.json()["unit"] == "North"
    update = fake_supabase.writes("profiles", "update")[0].first_arg("update")
    assert update["unit"] == "North"
    assert "updated_at" in update


def test_admin_cannot_delete_self(as_user):
    response = as_user(ADMIN).delete(f"/api/v1/users/{ADMIN['id']}")

    assert response.status_code == 400


def test_empty_update_returns_current_profile(fake_supabase):
    fake_supabase.queue("profiles", profile_row(TEACHER))

    user = UserService(fake_supabase).update_user(TEACHER["id"], UserUpdate())

    assert user.id == TEACHER["id"]
    assert fake_supabase.writes("profiles", "update") == []
