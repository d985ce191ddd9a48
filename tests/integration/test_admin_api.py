"""Integration tests for admin user management and dashboard statistics."""

from datetime import timedelta
from uuid import uuid4

import pytest

from tests.factories import DEFAULT_TEST_PASSWORD, utc_now
from tests.helpers import auth_headers, create_project_row, create_user

pytestmark = pytest.mark.integration

STRONG_PASSWORD = "violet-tram-harbor-quietly-91"


class TestUserManagement:
    async def test_list_users_by_role(self, client, admin, student, teacher):
        response = await client.get(
            "/api/v1/admin/users", params={"role": "teacher"}, headers=auth_headers(admin)
        )

        assert response.status_code == 200
        assert [u["id"] for u in response.json()["items"]] == [str(teacher.id)]

    async def test_non_admin_forbidden(self, client, teacher):
        response = await client.get("/api/v1/admin/users", headers=auth_headers(teacher))

        assert response.status_code == 403
        assert response.json()["detail"] == "Insufficient permissions"

    async def test_create_teacher(self, client, admin):
        response = await client.post(
            "/api/v1/admin/teachers",
            json={"email": "prof@example.com", "password": STRONG_PASSWORD, "full_name": "Prof"},
            headers=auth_headers(admin),
        )

        assert response.status_code == 201
        assert response.json()["role"] == "teacher"

        teachers = await client.get("/api/v1/teachers", headers=auth_headers(admin))
        assert "prof@example.com" in [t["email"] for t in teachers.json()]

    async def test_admin_cannot_demote_self(self, client, admin):
        response = await client.patch(
            f"/api/v1/admin/users/{admin.id}",
            json={"role": "teacher"},
            headers=auth_headers(admin),
        )

        assert response.status_code == 400

    async def test_update_missing_user(self, client, admin):
        response = await client.patch(
            f"/api/v1/admin/users/{uuid4()}",
            json={"is_active": False},
            headers=auth_headers(admin),
        )

        assert response.status_code == 404


class TestTeacherManagement:
    async def test_create_with_profile_fields(self, client, admin):
        response = await client.post(
            "/api/v1/admin/teachers",
            json={
                "email": "geo@example.com",
                "password": STRONG_PASSWORD,
                "full_name": "Gia Geographer",
                "department": "Geography",
                "specialization": "Urban ecology",
            },
            headers=auth_headers(admin),
        )

        assert response.status_code == 201
        assert response.json()["department"] == "Geography"
        assert response.json()["specialization"] == "Urban ecology"

    async def test_update_teacher(self, client, admin, teacher):
        response = await client.put(
            f"/api/v1/admin/teachers/{teacher.id}",
            json={
                "full_name": "Tess Renamed",
                "email": "Tess.New@Example.com",
                "department": "Physics",
            },
            headers=auth_headers(admin),
        )

        assert response.status_code == 200
        body = response.json()
        assert body["full_name"] == "Tess Renamed"
        assert body["email"] == "tess.new@example.com"
        assert body["department"] == "Physics"

    async def test_update_email_conflict(self, client, admin, teacher, student):
        response = await client.put(
            f"/api/v1/admin/teachers/{teacher.id}",
            json={"email": student.email},
            headers=auth_headers(admin),
        )

        assert response.status_code == 409
        assert response.json()["detail"] == "Email already registered"

    async def test_update_null_name_rejected(self, client, admin, teacher):
        response = await client.put(
            f"/api/v1/admin/teachers/{teacher.id}",
            json={"full_name": None},
            headers=auth_headers(admin),
        )

        assert response.status_code == 400
        assert "full_name cannot be null" in str(response.json()["detail"])

    async def test_update_student_is_not_found(self, client, admin, student):
        response = await client.put(
            f"/api/v1/admin/teachers/{student.id}",
            json={"department": "Biology"},
            headers=auth_headers(admin),
        )

        assert response.status_code == 404
        assert response.json()["detail"] == "Teacher not found"

    async def test_delete_refused_while_assigned(
        self, client, db_session, admin, student, teacher, co_teacher
    ):
        await create_project_row(db_session, student, co_teacher, co_supervisor_id=teacher.id)

        response = await client.delete(
            f"/api/v1/admin/teachers/{teacher.id}", headers=auth_headers(admin)
        )

        assert response.status_code == 400
        assert response.json()["detail"] == (
            "Cannot delete teacher. They are assigned to 1 project(s)."
        )

    async def test_delete_unassigned_teacher(self, client, admin, teacher):
        response = await client.delete(
            f"/api/v1/admin/teachers/{teacher.id}", headers=auth_headers(admin)
        )

        assert response.status_code == 204
        teachers = await client.get("/api/v1/teachers", headers=auth_headers(admin))
        assert str(teacher.id) not in [t["id"] for t in teachers.json()]

        again = await client.delete(
            f"/api/v1/admin/teachers/{teacher.id}", headers=auth_headers(admin)
        )
        assert again.status_code == 404


class TestUserDeletion:
    async def test_deleted_user_cannot_sign_in(self, client, admin, student):
        response = await client.delete(
            f"/api/v1/admin/users/{student.id}", headers=auth_headers(admin)
        )

        assert response.status_code == 204
        login = await client.post(
            "/api/v1/auth/login",
            json={"email": student.email, "password": DEFAULT_TEST_PASSWORD},
        )
        assert login.status_code == 401
        me = await client.get("/api/v1/users/me", headers=auth_headers(student))
        assert me.status_code == 401

    async def test_deleted_user_hidden_from_listing(self, client, admin, student):
        await client.delete(f"/api/v1/admin/users/{student.id}", headers=auth_headers(admin))

        response = await client.get("/api/v1/admin/users", headers=auth_headers(admin))

        assert str(student.id) not in [u["id"] for u in response.json()["items"]]

    async def test_second_delete_is_not_found(self, client, admin, student):
        await client.delete(f"/api/v1/admin/users/{student.id}", headers=auth_headers(admin))

        response = await client.delete(
            f"/api/v1/admin/users/{student.id}", headers=auth_headers(admin)
        )

        assert response.status_code == 404
        assert response.json()["detail"] == "User not found"

    async def test_admin_cannot_delete_self(self, client, admin):
        response = await client.delete(
            f"/api/v1/admin/users/{admin.id}", headers=auth_headers(admin)
        )

        assert response.status_code == 400

    async def test_deleted_user_leaves_stats(self, client, admin, student, teacher):
        await client.delete(f"/api/v1/admin/users/{student.id}", headers=auth_headers(admin))

        response = await client.get("/api/v1/admin/stats", headers=auth_headers(admin))

        assert response.json()["users"]["total"] == 2
        assert response.json()["users"]["students"] == 0


        assert response.status_code == 404


class TestDashboardStats:
    async def test_counts(self, client, db_session, admin, student, teacher):
        await create_user(db_session, is_active=False, created_at=utc_now() - timedelta(days=60))
        await create_project_row(db_session, student, teacher)
        approved = await create_project_row(db_session, student, teacher)
        await create_project_row(
            db_session, student, teacher, created_at=utc_now() - timedelta(days=45)
        )
        await client.put(
            f"/api/v1/projects/{approved.id}/status",
            json={"status": "approved"},
            headers=auth_headers(teacher),
        )

        response = await client.get("/api/v1/admin/stats", headers=auth_headers(admin))

        assert response.status_code == 200
        body = response.json()
        assert body["users"] == {
            "total": 4,
            "active": 3,
            "inactive": 1,
            "students": 2,
            "teachers": 1,
            "recent": 3,
        }
        assert body["projects"] == {
            "total": 3,
            "pending": 2,
            "underReview": 0,
            "approved": 1,
            "rejected": 0,
            "revisionRequired": 0,
            "recent": 2,
        }
        assert body["teachers"] == {"total": 1}
        assert body["overview"] == {
            "totalUsers": 4,
            "totalProjects": 3,
            "totalTeachers": 1,
            "recentActivity": 5,
        }
