"""Outgoing mail queue consumed by an external mailer."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import Column
from sqlmodel import Field, SQLModel

from src.projecthub.models.base import JSONVariant, utc_now


class EmailJob(SQLModel, table=True):
    """Queued email. Rows are appended here and never updated by this service."""

    __tablename__ = "mail"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    to: list[str] = Field(sa_column=Column(JSONVariant, nullable=False))
    subject: str = Field(max_length=255)
    html: str
    created_at: datetime = Field(default_factory=utc_now, index=True)
