"""Project and notification factories for test data generation."""

from polyfactory import Use

from src.projecthub.models import (
    Notification,
    NotificationCategory,
    NotificationType,
    Project,
    ProjectStatus,
)
from tests.factories.base import BaseFactory, generate_uuid, utc_now


def default_students() -> list[dict]:
    return [{"name": "Ada Lovelace", "email": "ada@example.com", "student_id": "S-001"}]


class ProjectFactory(BaseFactory):
    """Factory for Project rows.

    Built projects have no history; tests that need the status/history
    invariant create projects through ProjectService instead.
    """

    __model__ = Project

    id = Use(generate_uuid)
    title = "Solar Powered Campus"
    description = "Install solar panels across the campus buildings."
    sustainability = "Reduces campus carbon emissions considerably."
    # FK fields - must be set explicitly
    supervisor_id = None
    co_supervisor_id = None
    owner_id = None
    students = Use(default_students)
    image_url = None
    status = ProjectStatus.PENDING.value
    history_version = 0
    last_reviewed_at = None
    last_reviewed_by = None
    last_reviewed_by_id = None
    last_feedback = None
    created_at = Use(utc_now)
    updated_at = Use(utc_now)


class NotificationFactory(BaseFactory):
    """Factory for Notification rows."""

    __model__ = Notification

    id = Use(generate_uuid)
    # FK fields - must be set explicitly
    user_id = None
    title = "Project Status Updated"
    message = 'Your project "Solar Powered Campus" has been Under Review'
    type = NotificationType.INFO.value
    category = NotificationCategory.PROJECT.value
    is_read = False
    read_at = None
    data = Use(dict)
    created_at = Use(utc_now)
