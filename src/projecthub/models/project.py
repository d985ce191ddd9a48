"""Project and its append-only status history."""

from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import Column, Index, UniqueConstraint
from sqlmodel import Field, SQLModel

from src.projecthub.models.base import JSONVariant, utc_now
from src.projecthub.models.enums import ProjectStatus


class Project(SQLModel, table=True):
    """Submitted project proposal.

    ``status`` and the ``last_reviewed_*`` fields mirror the latest
    ProjectStatusHistory row. ``history_version`` counts history rows and is
    the optimistic concurrency token for status transitions.
    """

    __tablename__ = "projects"
    __table_args__ = (
        Index("ix_projects_owner_created", "owner_id", "created_at"),
        Index("ix_projects_status_created", "status", "created_at"),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    title: str = Field(max_length=100)
    description: str = Field(max_length=1000)
    sustainability: str = Field(max_length=500)
    supervisor_id: UUID = Field(foreign_key="users.id", index=True)
    co_supervisor_id: UUID | None = Field(default=None, foreign_key="users.id", index=True)
    students: list[dict[str, Any]] = Field(
        default_factory=list,
        sa_column=Column(JSONVariant, nullable=False),
    )
    image_url: str | None = Field(default=None, max_length=1000)
    owner_id: UUID = Field(foreign_key="users.id")

    status: str = Field(default=ProjectStatus.PENDING.value, max_length=20)
    history_version: int = Field(default=0)
    last_reviewed_at: datetime | None = Field(default=None)
    last_reviewed_by: str | None = Field(default=None, max_length=100)
    last_reviewed_by_id: UUID | None = Field(default=None)
    last_feedback: str | None = Field(default=None)

    created_at: datetime = Field(default_factory=utc_now, index=True)
    updated_at: datetime = Field(default_factory=utc_now)


class ProjectStatusHistory(SQLModel, table=True):
    """One status transition. Rows are only ever inserted."""

    __tablename__ = "project_status_history"
    __table_args__ = (
        UniqueConstraint("project_id", "sequence", name="uq_project_status_history_sequence"),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    project_id: UUID = Field(foreign_key="projects.id", ondelete="CASCADE", index=True)
    sequence: int
    status: str = Field(max_length=20)
    previous_status: str | None = Field(default=None, max_length=20)
    comment: str = Field(default="")
    reviewer_id: UUID | None = Field(default=None)
    reviewer_name: str = Field(max_length=100)
    reviewer_role: str = Field(max_length=20)
    created_at: datetime = Field(default_factory=utc_now)
