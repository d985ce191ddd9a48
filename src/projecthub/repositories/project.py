"""Repository for Project entity."""

from datetime import datetime
from typing import Any, cast
from uuid import UUID

from sqlalchemy import ColumnElement, delete, func, or_, update
from sqlalchemy.engine import CursorResult
from sqlmodel import col, select

from src.projecthub.models import Project, ProjectStatus, ProjectStatusHistory
from src.projecthub.repositories.base import BaseRepository

SORT_COLUMNS = {
    "createdAt": Project.created_at,
    "updatedAt": Project.updated_at,
    "title": Project.title,
    "status": Project.status,
}


def supervised_by(user_id: UUID) -> ColumnElement[bool]:
    """Projects where user_id is the supervisor or the co-supervisor."""
    return or_(Project.supervisor_id == user_id, Project.co_supervisor_id == user_id)


def escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def visibility(owner_id: UUID | None, supervisor_id: UUID | None) -> list[ColumnElement[bool]]:
    conditions: list[ColumnElement[bool]] = []
    if owner_id is not None:
        conditions.append(Project.owner_id == owner_id)
    if supervisor_id is not None:
        conditions.append(supervised_by(supervisor_id))
    return conditions


class ProjectRepository(BaseRepository[Project]):
    """Repository for Project entity."""

    model = Project

    async def get_fresh(self, project_id: UUID) -> Project | None:
        """Load a project, overwriting any stale copy held by the session."""
        result = await self.session.execute(
            select(Project)
            .where(Project.id == project_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def list_projects(
        self,
        owner_id: UUID | None = None,
        supervisor_id: UUID | None = None,
        status: ProjectStatus | None = None,
        cursor: str | None = None,
        limit: int = 50,
    ) -> tuple[list[Project], str | None, bool]:
        """List projects newest first.

        Args:
            owner_id: Only projects submitted by this user
            supervisor_id: Only projects supervised or co-supervised by this user
            status: Optional status filter
            cursor: Pagination cursor
            limit: Maximum items to return

        Returns:
            Tuple of (projects, next_cursor, has_more)
        """
        query = select(Project).where(*visibility(owner_id, supervisor_id))
        if status is not None:
            query = query.where(Project.status == status.value)
        return await self.paginate(query, cursor, limit, Project.created_at)

    async def search(
        self,
        owner_id: UUID | None = None,
        supervisor_id: UUID | None = None,
        text: str | None = None,
        status: ProjectStatus | None = None,
        supervisor_filter: UUID | None = None,
        created_from: datetime | None = None,
        created_before: datetime | None = None,
        sort_by: str = "createdAt",
        descending: bool = True,
        offset: int = 0,
        limit: int = 10,
    ) -> tuple[list[Project], int]:
        """Filtered, sorted, offset-paginated project search.

        ``owner_id`` and ``supervisor_id`` restrict the search to what the
        caller may see; the remaining arguments are the caller's filters.
        ``text`` matches title, description and sustainability case-insensitively.

        Returns:
            Tuple of (page of projects, total matching projects)
        """
        conditions = visibility(owner_id, supervisor_id)
        if text:
            pattern = f"%{escape_like(text)}%"
            conditions.append(
                or_(
                    col(Project.title).ilike(pattern, escape="\\"),
                    col(Project.description).ilike(pattern, escape="\\"),
                    col(Project.sustainability).ilike(pattern, escape="\\"),
                )
            )
        if status is not None:
            conditions.append(Project.status == status.value)
        if supervisor_filter is not None:
            conditions.append(supervised_by(supervisor_filter))
        if created_from is not None:
            conditions.append(Project.created_at >= created_from)
        if created_before is not None:
            conditions.append(Project.created_at < created_before)

        total = (
            await self.session.execute(
                select(func.count()).select_from(Project).where(*conditions)
            )
        ).scalar_one()

        sort_column = SORT_COLUMNS[sort_by]
        result = await self.session.execute(
            select(Project)
            .where(*conditions)
            .order_by(
                sort_column.desc() if descending else sort_column.asc(),
                col(Project.id),
            )
            .offset(offset)
            .limit(limit)
        )
        return list(result.scalars().all()), total

    async def search_facets(
        self, owner_id: UUID | None = None, supervisor_id: UUID | None = None
    ) -> tuple[dict[str, int], dict[UUID, int], datetime | None, datetime | None]:
        """Counts by status and by supervisor, and the creation date range.

        Returns:
            Tuple of (status counts, supervisor counts, earliest, latest)
        """
        conditions = visibility(owner_id, supervisor_id)

        by_status = await self.session.execute(
            select(Project.status, func.count()).where(*conditions).group_by(Project.status)
        )
        by_supervisor = await self.session.execute(
            select(Project.supervisor_id, func.count())
            .where(*conditions)
            .group_by(Project.supervisor_id)
        )
        date_range = await self.session.execute(
            select(func.min(Project.created_at), func.max(Project.created_at)).where(*conditions)
        )
        earliest, latest = date_range.one()
        return (
            {status: count for status, count in by_status.all()},
            {supervisor: count for supervisor, count in by_supervisor.all()},
            earliest,
            latest,
        )

    async def count_assigned(self, teacher_id: UUID) -> int:
        """Projects the teacher supervises or co-supervises."""
        result = await self.session.execute(
            select(func.count()).select_from(Project).where(supervised_by(teacher_id))
        )
        return result.scalar_one()

    async def apply_transition(
        self, project_id: UUID, expected_version: int, values: dict[str, Any]
    ) -> bool:
        """Update the project only if its history_version is still expected_version.

        Returns:
            True if the row was updated, False if another transition won the race
        """
        result = await self.session.execute(
            update(Project)
            .where(
                Project.id == project_id,  # type: ignore[arg-type]
                Project.history_version == expected_version,  # type: ignore[arg-type]
            )
            .values(history_version=expected_version + 1, **values)
            .execution_options(synchronize_session=False)
        )
        return cast(CursorResult, result).rowcount == 1

    async def delete_with_history(self, project_id: UUID) -> bool:
        """Delete a project and its status history. Returns False if it was absent."""
        await self.session.execute(
            delete(ProjectStatusHistory).where(
                ProjectStatusHistory.project_id == project_id  # type: ignore[arg-type]
            )
        )
        result = await self.session.execute(
            delete(Project).where(Project.id == project_id)  # type: ignore[arg-type]
        )
        return cast(CursorResult, result).rowcount > 0

    async def count_by_status(self) -> dict[str, int]:
        result = await self.session.execute(
            select(Project.status, func.count()).group_by(Project.status)
        )
        return {status: count for status, count in result.all()}

    async def count_created_since(self, since: datetime) -> int:
        result = await self.session.execute(
            select(func.count()).select_from(Project).where(Project.created_at >= since)
        )
        return result.scalar_one()
