"""User model."""

from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import Column
from sqlmodel import Field, SQLModel

from src.projecthub.models.base import JSONVariant, utc_now
from src.projecthub.models.enums import UserRole


class User(SQLModel, table=True):
    """Account for students, teachers and admins.

    Deleting an account is a soft delete: ``deleted_at`` is set and the
    account is deactivated, so history entries naming it stay intact.
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(max_length=255, unique=True, index=True)
    hashed_password: str = Field(max_length=255)
    full_name: str = Field(max_length=100)
    role: str = Field(default=UserRole.USER.value, max_length=20, index=True)
    is_active: bool = Field(default=True)
    department: str | None = Field(default=None, max_length=50)
    specialization: str | None = Field(default=None, max_length=100)
    # None means the defaults apply
    notification_preferences: dict[str, Any] | None = Field(
        default=None,
        sa_column=Column(JSONVariant, nullable=True),
    )
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
    deleted_at: datetime | None = Field(default=None)
