"""Notification utilities - email content."""

from src.projecthub.core.notifications.email import (
    STATUS_COLORS,
    STATUS_MESSAGES,
    render_status_change_email,
    status_change_subject,
    status_label,
)

__all__ = [
    "STATUS_COLORS",
    "STATUS_MESSAGES",
    "render_status_change_email",
    "status_change_subject",
    "status_label",
]
