"""Project schemas for API request/response."""

from datetime import date, datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from src.projecthub.models.enums import ProjectStatus

MAX_STUDENTS = 4
COMMENT_MAX_LENGTH = 2000
NON_NULLABLE_UPDATE_FIELDS = ("title", "description", "sustainability", "supervisor_id", "students")

# camelCase aliases (coSupervisorId); snake_case is accepted on input too
_CAMEL = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _strip_required(v: str, field: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError(f"{field} cannot be empty or whitespace only")
    return v


class StudentMember(BaseModel):
    """Team member listed on a project."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    name: str = Field(min_length=2, max_length=100)
    email: EmailStr
    student_id: str | None = Field(default=None, max_length=50)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = _strip_required(v, "Student name")
        if len(v) < 2:
            raise ValueError("Student name must be at least 2 characters")
        return v


class ProjectCreate(BaseModel):
    """Schema for submitting a project."""

    model_config = _CAMEL

    title: str = Field(min_length=3, max_length=100)
    description: str = Field(min_length=10, max_length=1000)
    sustainability: str = Field(min_length=10, max_length=500)
    supervisor_id: UUID
    co_supervisor_id: UUID | None = None
    students: list[StudentMember] = Field(min_length=1, max_length=MAX_STUDENTS)

    @field_validator("title", "description", "sustainability")
    @classmethod
    def validate_text(cls, v: str) -> str:
        return _strip_required(v, "Field")


class ProjectUpdate(BaseModel):
    """Owner edit of a project. Status is never editable here."""

    model_config = _CAMEL

    title: str | None = Field(default=None, min_length=3, max_length=100)
    description: str | None = Field(default=None, min_length=10, max_length=1000)
    sustainability: str | None = Field(default=None, min_length=10, max_length=500)
    supervisor_id: UUID | None = None
    co_supervisor_id: UUID | None = None
    students: list[StudentMember] | None = Field(
        default=None, min_length=1, max_length=MAX_STUDENTS
    )

    @field_validator("title", "description", "sustainability")
    @classmethod
    def validate_text(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return _strip_required(v, "Field")

    @model_validator(mode="after")
    def reject_null_required_fields(self) -> "ProjectUpdate":
        """Only coSupervisorId may be cleared; the other fields can be omitted, not nulled."""
        for field in NON_NULLABLE_UPDATE_FIELDS:
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{to_camel(field)} cannot be null")
        return self


class ProjectRead(BaseModel):
    """Schema for reading a project."""

    id: UUID
    title: str
    description: str
    sustainability: str
    supervisor_id: UUID
    co_supervisor_id: UUID | None
    students: list[StudentMember]
    image_url: str | None
    owner_id: UUID
    status: ProjectStatus
    last_reviewed_at: datetime | None
    last_reviewed_by: str | None
    last_feedback: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class StatusUpdateRequest(BaseModel):
    """Body of ``PUT /projects/{id}/status``.

    ``status`` is a plain string so an unknown value is reported by the
    workflow as "Invalid status value" rather than by schema validation.
    """

    model_config = _CAMEL

    status: str
    comment: str | None = Field(default=None, max_length=COMMENT_MAX_LENGTH)
    send_email: bool = False


class HistoryEntryRead(BaseModel):
    sequence: int
    status: ProjectStatus
    previous_status: ProjectStatus | None
    comment: str
    reviewer_id: UUID | None
    reviewer_name: str
    reviewer_role: str
    created_at: datetime

    model_config = {"from_attributes": True}


class TransitionResponse(BaseModel):
    """Result of a status transition with the full history, oldest first."""

    project_id: UUID
    status: ProjectStatus
    status_history: list[HistoryEntryRead]
    last_reviewed_at: datetime | None
    last_reviewed_by: str | None
    last_feedback: str | None


# --- Search ---

SearchSortField = Literal["createdAt", "updatedAt", "title", "status"]
SortOrder = Literal["asc", "desc"]


class ProjectSearchParams(BaseModel):
    """Search criteria, already validated as query parameters."""

    query: str | None = None
    status: ProjectStatus | None = None
    supervisor_id: UUID | None = None
    start_date: date | None = None
    end_date: date | None = None
    sort_by: SearchSortField = "createdAt"
    sort_order: SortOrder = "desc"
    page: int = 1
    limit: int = 10


class SearchPagination(BaseModel):
    model_config = _CAMEL

    current_page: int
    total_pages: int
    total_results: int
    has_next_page: bool
    has_prev_page: bool
    limit: int


class ProjectSearchResponse(BaseModel):
    projects: list[ProjectRead]
    pagination: SearchPagination


class StatusFacet(BaseModel):
    value: ProjectStatus
    label: str
    count: int


class SupervisorFacet(BaseModel):
    model_config = _CAMEL

    id: UUID
    full_name: str
    count: int


class CreatedDateRange(BaseModel):
    earliest: datetime | None
    latest: datetime | None


class SearchFilters(BaseModel):
    """Values a search can be narrowed by, counted over the caller's projects."""

    model_config = _CAMEL

    statuses: list[StatusFacet]
    supervisors: list[SupervisorFacet]
    date_range: CreatedDateRange
