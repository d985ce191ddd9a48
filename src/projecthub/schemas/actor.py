"""Authenticated caller identity."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict

from src.projecthub.models.enums import UserRole


class Actor(BaseModel):
    """Identity of the authenticated caller, populated by the auth dependency.

    Services trust this object and do not re-verify credentials.
    """

    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: UUID
    role: UserRole
    display_name: str
    email: str

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @property
    def is_reviewer(self) -> bool:
        """Admins and teachers may review projects."""
        return self.role in (UserRole.ADMIN, UserRole.TEACHER)
