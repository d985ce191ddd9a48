"""Notification schemas."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.projecthub.models.enums import NotificationCategory, NotificationType
from src.projecthub.schemas.pagination import PaginatedResponse


class NotificationRead(BaseModel):
    id: UUID
    title: str
    message: str
    type: NotificationType
    category: NotificationCategory
    is_read: bool
    read_at: datetime | None
    data: dict[str, Any]
    created_at: datetime

    model_config = {"from_attributes": True}


class NotificationPage(PaginatedResponse[NotificationRead]):
    """Page of notifications plus the recipient's total unread count."""

    unread_count: int = 0


class MarkAllReadResponse(BaseModel):
    updated: int


_CAMEL = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class EmailPreferences(BaseModel):
    model_config = _CAMEL

    project_status_change: bool = True
    new_project_assignment: bool = True
    system_announcements: bool = True
    weekly_digest: bool = False


class InAppPreferences(BaseModel):
    model_config = _CAMEL

    project_status_change: bool = True
    new_project_assignment: bool = True
    system_announcements: bool = True
    comments: bool = True


class PushPreferences(BaseModel):
    model_config = _CAMEL

    enabled: bool = False
    project_status_change: bool = False
    urgent_only: bool = True


class NotificationPreferences(BaseModel):
    """Per-channel notification settings. Missing keys fall back to the defaults."""

    model_config = _CAMEL

    email: EmailPreferences = Field(default_factory=EmailPreferences)
    in_app: InAppPreferences = Field(default_factory=InAppPreferences)
    push: PushPreferences = Field(default_factory=PushPreferences)


class NotificationPreferencesBody(BaseModel):
    preferences: NotificationPreferences
