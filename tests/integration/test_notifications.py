"""Integration tests for the recipient notification endpoints."""

from datetime import timedelta
from uuid import uuid4

import pytest
from sqlmodel import select

from src.projecthub.models import Notification
from tests.factories import NotificationFactory, utc_now
from tests.helpers import auth_headers

pytestmark = pytest.mark.integration


@pytest.fixture
async def inbox(db_session, student) -> list[Notification]:
    """Three notifications for student, oldest first, the oldest already read."""
    base = utc_now() - timedelta(minutes=10)
    notes = [
        NotificationFactory.build(
            user_id=student.id,
            title=f"Note {i}",
            created_at=base + timedelta(minutes=i),
            is_read=(i == 0),
            read_at=base if i == 0 else None,
        )
        for i in range(3)
    ]
    db_session.add_all(notes)
    await db_session.commit()
    return notes


async def load_notification(session_factory, notification_id) -> Notification | None:
    async with session_factory() as session:
        result = await session.execute(
            select(Notification).where(Notification.id == notification_id)
        )
        return result.scalar_one_or_none()


class TestListNotifications:
    async def test_newest_first_with_unread_count(self, client, student, inbox):
        response = await client.get("/api/v1/notifications", headers=auth_headers(student))

        assert response.status_code == 200
        body = response.json()
        assert [n["title"] for n in body["items"]] == ["Note 2", "Note 1", "Note 0"]
        assert body["unread_count"] == 2
        assert body["has_more"] is False

    async def test_unread_only(self, client, student, inbox):
        response = await client.get(
            "/api/v1/notifications", params={"unreadOnly": "true"}, headers=auth_headers(student)
        )

        assert [n["title"] for n in response.json()["items"]] == ["Note 2", "Note 1"]

    async def test_cursor_pagination(self, client, student, inbox):
        first = await client.get(
            "/api/v1/notifications", params={"limit": 2}, headers=auth_headers(student)
        )
        page = first.json()
        assert page["has_more"] is True

        second = await client.get(
            "/api/v1/notifications",
            params={"limit": 2, "cursor": page["next_cursor"]},
            headers=auth_headers(student),
        )
        assert [n["title"] for n in second.json()["items"]] == ["Note 0"]

    async def test_only_own_notifications(self, client, other_student, inbox):
        response = await client.get("/api/v1/notifications", headers=auth_headers(other_student))

        assert response.json()["items"] == []
        assert response.json()["unread_count"] == 0

    async def test_requires_authentication(self, client):
        response = await client.get("/api/v1/notifications")
        assert response.status_code == 401


class TestMarkRead:
    async def test_mark_one(self, client, student, inbox, session_factory):
        target = inbox[2]

        response = await client.put(
            f"/api/v1/notifications/{target.id}/read", headers=auth_headers(student)
        )

        assert response.status_code == 200
        assert response.json()["is_read"] is True
        stored = await load_notification(session_factory, target.id)
        assert stored.is_read is True
        assert stored.read_at is not None

    async def test_mark_all(self, client, student, inbox, session_factory):
        response = await client.put(
            "/api/v1/notifications/mark-all-read", headers=auth_headers(student)
        )

        assert response.json() == {"updated": 2}
        for note in inbox:
            assert (await load_notification(session_factory, note.id)).is_read is True

    async def test_mark_all_leaves_other_users_alone(
        self, client, student, other_student, db_session, session_factory
    ):
        foreign = NotificationFactory.build(user_id=other_student.id)
        db_session.add(foreign)
        await db_session.commit()

        await client.put("/api/v1/notifications/mark-all-read", headers=auth_headers(student))

        assert (await load_notification(session_factory, foreign.id)).is_read is False


class TestRecipientOnly:
    async def test_other_user_cannot_mark_read(
        self, client, other_student, inbox, session_factory
    ):
        target = inbox[1]

        response = await client.put(
            f"/api/v1/notifications/{target.id}/read", headers=auth_headers(other_student)
        )

        assert response.status_code == 403
        assert (await load_notification(session_factory, target.id)).is_read is False

    async def test_other_user_cannot_delete(self, client, admin, inbox, session_factory):
        target = inbox[1]

        response = await client.delete(
            f"/api/v1/notifications/{target.id}", headers=auth_headers(admin)
        )

        assert response.status_code == 403
        assert await load_notification(session_factory, target.id) is not None

    async def test_recipient_can_delete(self, client, student, inbox, session_factory):
        target = inbox[0]

        response = await client.delete(
            f"/api/v1/notifications/{target.id}", headers=auth_headers(student)
        )

        assert response.status_code == 204
        assert await load_notification(session_factory, target.id) is None

    async def test_missing_notification(self, client, student):
        response = await client.put(
            f"/api/v1/notifications/{uuid4()}/read", headers=auth_headers(student)
        )

        assert response.status_code == 404
        assert response.json()["detail"] == "Notification not found"


class TestWorkflowProducesNotifications:
    async def test_status_change_reaches_owner_inbox(self, client, project, student, teacher):
        await client.put(
            f"/api/v1/projects/{project.id}/status",
            json={"status": "revision-required", "comment": "Add a budget"},
            headers=auth_headers(teacher),
        )

        response = await client.get("/api/v1/notifications", headers=auth_headers(student))

        (note,) = response.json()["items"]
        assert note["category"] == "project"
        assert note["type"] == "info"
        assert note["data"]["actionRequired"] is True
        assert note["data"]["projectId"] == str(project.id)
        assert 'Review comment: "Add a budget"' in note["message"]


class TestPreferences:
    async def test_defaults_when_never_saved(self, client, student):
        response = await client.get(
            "/api/v1/notifications/preferences", headers=auth_headers(student)
        )

        assert response.status_code == 200
        assert response.json()["preferences"] == {
            "email": {
                "projectStatusChange": True,
                "newProjectAssignment": True,
                "systemAnnouncements": True,
                "weeklyDigest": False,
            },
            "inApp": {
                "projectStatusChange": True,
                "newProjectAssignment": True,
                "systemAnnouncements": True,
                "comments": True,
            },
            "push": {"enabled": False, "projectStatusChange": False, "urgentOnly": True},
        }

    async def test_saved_preferences_are_returned(self, client, student, other_student):
        saved = await client.put(
            "/api/v1/notifications/preferences",
            json={"preferences": {"email": {"weeklyDigest": True}, "push": {"enabled": True}}},
            headers=auth_headers(student),
        )

        assert saved.status_code == 200
        assert saved.json()["preferences"]["email"]["weeklyDigest"] is True
        assert saved.json()["preferences"]["email"]["projectStatusChange"] is True

        mine = await client.get("/api/v1/notifications/preferences", headers=auth_headers(student))
        assert mine.json() == saved.json()
        assert mine.json()["preferences"]["push"]["enabled"] is True

        theirs = await client.get(
            "/api/v1/notifications/preferences", headers=auth_headers(other_student)
        )
        assert theirs.json()["preferences"]["email"]["weeklyDigest"] is False

    async def test_non_boolean_rejected(self, client, student):
        response = await client.put(
            "/api/v1/notifications/preferences",
            json={"preferences": {"email": {"weeklyDigest": "sometimes"}}},
            headers=auth_headers(student),
        )

        assert response.status_code == 400

    async def test_requires_authentication(self, client):
        response = await client.get("/api/v1/notifications/preferences")

        assert response.status_code == 401
