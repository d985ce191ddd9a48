"""Admin dashboard statistics."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

_CAMEL = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UserStats(BaseModel):
    model_config = _CAMEL

    total: int
    active: int
    inactive: int
    students: int
    teachers: int
    recent: int


class ProjectStats(BaseModel):
    model_config = _CAMEL

    total: int
    pending: int
    under_review: int
    approved: int
    rejected: int
    revision_required: int
    recent: int


class TeacherStats(BaseModel):
    total: int


class OverviewStats(BaseModel):
    model_config = _CAMEL

    total_users: int
    total_projects: int
    total_teachers: int
    recent_activity: int


class DashboardStats(BaseModel):
    """Counts over users and projects; ``recent`` covers the last 30 days."""

    users: UserStats
    projects: ProjectStats
    teachers: TeacherStats
    overview: OverviewStats
