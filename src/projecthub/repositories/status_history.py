"""Repository for ProjectStatusHistory entity."""

from uuid import UUID

from sqlmodel import col, select

from src.projecthub.models import ProjectStatusHistory
from src.projecthub.repositories.base import BaseRepository


class ProjectStatusHistoryRepository(BaseRepository[ProjectStatusHistory]):
    """Append-only access to a project's status history."""

    model = ProjectStatusHistory

    async def list_for_project(
        self, project_id: UUID, newest_first: bool = False
    ) -> list[ProjectStatusHistory]:
        """All entries of a project ordered by sequence."""
        order = col(ProjectStatusHistory.sequence)
        result = await self.session.execute(
            select(ProjectStatusHistory)
            .where(ProjectStatusHistory.project_id == project_id)
            .order_by(order.desc() if newest_first else order.asc())
        )
        return list(result.scalars().all())
