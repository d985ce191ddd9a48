"""Model exports.

Import from here: `from src.projecthub.models import User, Project`
"""

# Enums
from src.projecthub.models.enums import (
    BulkAction,
    NotificationCategory,
    NotificationType,
    ProjectStatus,
    UserRole,
)

# Tables
from src.projecthub.models.email_job import EmailJob
from src.projecthub.models.notification import Notification
from src.projecthub.models.project import Project, ProjectStatusHistory
from src.projecthub.models.user import User

__all__ = [
    # Enums
    "BulkAction",
    "NotificationCategory",
    "NotificationType",
    "ProjectStatus",
    "UserRole",
    # Tables
    "EmailJob",
    "Notification",
    "Project",
    "ProjectStatusHistory",
    "User",
]
