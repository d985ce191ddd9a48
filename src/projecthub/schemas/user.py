from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator

from src.projecthub.models.enums import UserRole


class UserRead(BaseModel):
    id: UUID
    email: EmailStr
    full_name: str
    role: UserRole
    is_active: bool
    department: str | None = None
    specialization: str | None = None
    created_at: datetime

    model_config = {"from_attributes": True}


class TeacherRead(BaseModel):
    """Public view of a teacher for supervisor selection."""

    id: UUID
    email: EmailStr
    full_name: str
    department: str | None = None
    specialization: str | None = None

    model_config = {"from_attributes": True}


class UserAdminUpdate(BaseModel):
    """Admin change of a user's role or active flag."""

    role: UserRole | None = None
    is_active: bool | None = None
    full_name: str | None = Field(default=None, min_length=1, max_length=100)


class TeacherUpdate(BaseModel):
    """Admin edit of a teacher profile. Omitted fields are left unchanged."""

    full_name: str | None = Field(default=None, min_length=2, max_length=100)
    email: EmailStr | None = None
    department: str | None = Field(default=None, max_length=50)
    specialization: str | None = Field(default=None, max_length=100)

    @field_validator("full_name")
    @classmethod
    def validate_full_name(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if len(v) < 2:
            raise ValueError("Full name must be at least 2 characters")
        return v

    @model_validator(mode="after")
    def reject_null_identity(self) -> "TeacherUpdate":
        # department and specialization may be cleared
        for field in ("full_name", "email"):
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self
