"""In-app notification model."""

from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import Column, Index, Text
from sqlmodel import Field, SQLModel

from src.projecthub.models.base import JSONVariant, utc_now
from src.projecthub.models.enums import NotificationCategory, NotificationType


class Notification(SQLModel, table=True):
    """Notification shown to a single recipient."""

    __tablename__ = "notifications"
    __table_args__ = (
        Index("ix_notifications_user_created", "user_id", "created_at"),
        Index("ix_notifications_user_read", "user_id", "is_read"),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    user_id: UUID = Field(foreign_key="users.id", ondelete="CASCADE")
    title: str = Field(max_length=200)
    # Unbounded: the message embeds a full review comment
    message: str = Field(sa_column=Column(Text, nullable=False))
    type: str = Field(default=NotificationType.INFO.value, max_length=20)
    category: str = Field(default=NotificationCategory.GENERAL.value, max_length=20)
    is_read: bool = Field(default=False)
    read_at: datetime | None = Field(default=None)
    data: dict[str, Any] = Field(
        default_factory=dict,
        sa_column=Column(JSONVariant, nullable=False),
    )
    created_at: datetime = Field(default_factory=utc_now)
