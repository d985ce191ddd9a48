"""Shared enums for models."""

from enum import Enum


class UserRole(str, Enum):
    """Account role. ``user`` is a student; supervisors are teachers."""

    USER = "user"
    TEACHER = "teacher"
    ADMIN = "admin"


class ProjectStatus(str, Enum):
    """Review status of a project."""

    PENDING = "pending"
    UNDER_REVIEW = "under-review"
    APPROVED = "approved"
    REJECTED = "rejected"
    REVISION_REQUIRED = "revision-required"


class NotificationType(str, Enum):
    """Visual severity of an in-app notification."""

    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


class NotificationCategory(str, Enum):
    """Grouping used to filter notifications."""

    GENERAL = "general"
    PROJECT = "project"
    SYSTEM = "system"
    ADMIN = "admin"


class BulkAction(str, Enum):
    """Actions accepted by the bulk project endpoint."""

    UPDATE_STATUS = "updateStatus"
    DELETE = "delete"
