"""Admin dashboard statistics."""

from datetime import timedelta

from src.projecthub.models import ProjectStatus, UserRole
from src.projecthub.models.base import utc_now
from src.projecthub.repositories import ProjectRepository, UserRepository
from src.projecthub.schemas.stats import (
    DashboardStats,
    OverviewStats,
    ProjectStats,
    TeacherStats,
    UserStats,
)

RECENT_WINDOW = timedelta(days=30)


class StatsService:
    def __init__(self, user_repo: UserRepository, project_repo: ProjectRepository):
        self.user_repo = user_repo
        self.project_repo = project_repo

    async def dashboard_stats(self) -> DashboardStats:
        since = utc_now() - RECENT_WINDOW

        by_role = await self.user_repo.count_by_role()
        total_users = sum(by_role.values())
        active_users = await self.user_repo.count_active()
        recent_users = await self.user_repo.count_created_since(since)
        teachers = by_role.get(UserRole.TEACHER.value, 0)

        by_status = await self.project_repo.count_by_status()
        total_projects = sum(by_status.values())
        recent_projects = await self.project_repo.count_created_since(since)

        return DashboardStats(
            users=UserStats(
                total=total_users,
                active=active_users,
                inactive=total_users - active_users,
                students=by_role.get(UserRole.USER.value, 0),
                teachers=teachers,
                recent=recent_users,
            ),
            projects=ProjectStats(
                total=total_projects,
                pending=by_status.get(ProjectStatus.PENDING.value, 0),
                under_review=by_status.get(ProjectStatus.UNDER_REVIEW.value, 0),
                approved=by_status.get(ProjectStatus.APPROVED.value, 0),
                rejected=by_status.get(ProjectStatus.REJECTED.value, 0),
                revision_required=by_status.get(ProjectStatus.REVISION_REQUIRED.value, 0),
                recent=recent_projects,
            ),
            teachers=TeacherStats(total=teachers),
            overview=OverviewStats(
                total_users=total_users,
                total_projects=total_projects,
                total_teachers=teachers,
                recent_activity=recent_users + recent_projects,
            ),
        )
