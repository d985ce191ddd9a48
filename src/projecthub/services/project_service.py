"""Project submission and management."""

import math
from datetime import date, datetime, time, timedelta
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.projecthub.core.config import get_settings
from src.projecthub.core.exceptions import (
    DependencyFailureError,
    ForbiddenError,
    InvalidInputError,
    NotFoundError,
)
from src.projecthub.core.logging import get_logger
from src.projecthub.core.notifications import status_label
from src.projecthub.core.side_effects import run_best_effort
from src.projecthub.core.storage import ImageStorage
from src.projecthub.models import Project, ProjectStatus, ProjectStatusHistory, UserRole
from src.projecthub.models.base import utc_now
from src.projecthub.repositories import (
    ProjectRepository,
    ProjectStatusHistoryRepository,
    UserRepository,
)
from src.projecthub.schemas.actor import Actor
from src.projecthub.schemas.project import (
    CreatedDateRange,
    ProjectCreate,
    ProjectRead,
    ProjectSearchParams,
    ProjectSearchResponse,
    ProjectUpdate,
    SearchFilters,
    SearchPagination,
    StatusFacet,
    SupervisorFacet,
)
from src.projecthub.services.notification_dispatcher import NotificationDispatcher
from src.projecthub.services.project_workflow_service import parse_project_id

logger = get_logger(__name__)


def _scope(viewer: Actor) -> tuple[UUID | None, UUID | None]:
    """(owner_id, supervisor_id) restriction for what viewer may list."""
    if viewer.role == UserRole.ADMIN:
        return None, None
    if viewer.role == UserRole.TEACHER:
        return None, viewer.id
    return viewer.id, None


def _day_start(day: date) -> datetime:
    # Stored timestamps are naive UTC
    return datetime.combine(day, time.min)


class ProjectService:
    """Create, read, edit and delete projects.

    Status is never changed here; see ProjectWorkflowService.
    """

    def __init__(
        self,
        project_repo: ProjectRepository,
        history_repo: ProjectStatusHistoryRepository,
        user_repo: UserRepository,
        session: AsyncSession,
        dispatcher: NotificationDispatcher | None = None,
        storage: ImageStorage | None = None,
    ):
        self.project_repo = project_repo
        self.history_repo = history_repo
        self.user_repo = user_repo
        self.session = session
        self.dispatcher = dispatcher
        self.storage = storage

    async def _validate_supervisors(
        self, supervisor_id: UUID | None, co_supervisor_id: UUID | None
    ) -> None:
        if (
            supervisor_id is not None
            and await self.user_repo.get_active_teacher(supervisor_id) is None
        ):
            raise InvalidInputError("Supervisor must be an active teacher")
        if (
            co_supervisor_id is not None
            and await self.user_repo.get_active_teacher(co_supervisor_id) is None
        ):
            raise InvalidInputError("Co-supervisor must be an active teacher")

    async def _get_or_404(self, project_id: str | UUID) -> Project:
        project = await self.project_repo.get_by_id(parse_project_id(project_id))
        if project is None:
            raise NotFoundError("Project not found")
        return project

    async def create_project(self, data: ProjectCreate, owner: Actor) -> Project:
        """Submit a project with status pending and its first history entry."""
        await self._validate_supervisors(data.supervisor_id, data.co_supervisor_id)

        now = utc_now()
        project = Project(
            title=data.title,
            description=data.description,
            sustainability=data.sustainability,
            supervisor_id=data.supervisor_id,
            co_supervisor_id=data.co_supervisor_id,
            students=[s.model_dump(mode="json") for s in data.students],
            owner_id=owner.id,
            status=ProjectStatus.PENDING.value,
            history_version=1,
            last_reviewed_at=now,
            last_reviewed_by=owner.display_name,
            last_reviewed_by_id=owner.id,
            created_at=now,
            updated_at=now,
        )
        try:
            self.project_repo.add(project)
            await self.session.flush()
            self.history_repo.add(
                ProjectStatusHistory(
                    project_id=project.id,
                    sequence=1,
                    status=ProjectStatus.PENDING.value,
                    previous_status=None,
                    comment="",
                    reviewer_id=owner.id,
                    reviewer_name=owner.display_name,
                    reviewer_role=owner.role.value,
                    created_at=now,
                )
            )
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        await self.session.refresh(project)

        logger.info("Project created", project_id=str(project.id), owner_id=str(owner.id))

        if self.dispatcher is not None:
            dispatcher = self.dispatcher
            await run_best_effort(
                "assignment_dispatch",
                lambda: dispatcher.notify_new_assignment(
                    project, project.supervisor_id, project.co_supervisor_id
                ),
                project_id=str(project.id),
            )
        return project

    async def get_project(self, project_id: str | UUID, viewer: Actor) -> Project:
        """Owners and reviewers (teachers, admins) may read a project."""
        project = await self._get_or_404(project_id)
        if not viewer.is_reviewer and project.owner_id != viewer.id:
            raise ForbiddenError("Not authorized to view this project")
        return project

    async def list_projects(
        self,
        viewer: Actor,
        status: ProjectStatus | None = None,
        cursor: str | None = None,
        limit: int = 50,
    ) -> tuple[list[Project], str | None, bool]:
        """Admins see every project, teachers what they supervise, students their own."""
        owner_id, supervisor_id = _scope(viewer)
        return await self.project_repo.list_projects(
            owner_id=owner_id,
            supervisor_id=supervisor_id,
            status=status,
            cursor=cursor,
            limit=limit,
        )

    async def search_projects(
        self, viewer: Actor, params: ProjectSearchParams
    ) -> ProjectSearchResponse:
        """Text, status, supervisor and creation-date search over the viewer's projects.

        Dates are whole UTC days and both ends are inclusive.

        Raises:
            InvalidInputError: endDate is before startDate
        """
        if params.start_date and params.end_date and params.end_date < params.start_date:
            raise InvalidInputError("endDate must not be before startDate")

        owner_id, supervisor_id = _scope(viewer)
        created_from = _day_start(params.start_date) if params.start_date else None
        created_before = (
            _day_start(params.end_date) + timedelta(days=1) if params.end_date else None
        )
        text = params.query.strip() if params.query else None

        projects, total = await self.project_repo.search(
            owner_id=owner_id,
            supervisor_id=supervisor_id,
            text=text or None,
            status=params.status,
            supervisor_filter=params.supervisor_id,
            created_from=created_from,
            created_before=created_before,
            sort_by=params.sort_by,
            descending=params.sort_order == "desc",
            offset=(params.page - 1) * params.limit,
            limit=params.limit,
        )
        total_pages = max(1, math.ceil(total / params.limit))
        return ProjectSearchResponse(
            projects=[ProjectRead.model_validate(p) for p in projects],
            pagination=SearchPagination(
                current_page=params.page,
                total_pages=total_pages,
                total_results=total,
                has_next_page=params.page < total_pages,
                has_prev_page=params.page > 1,
                limit=params.limit,
            ),
        )

    async def search_filters(self, viewer: Actor) -> SearchFilters:
        """Every status with its count, the supervisors in use, and the creation date range."""
        owner_id, supervisor_id = _scope(viewer)
        by_status, by_supervisor, earliest, latest = await self.project_repo.search_facets(
            owner_id=owner_id, supervisor_id=supervisor_id
        )
        supervisors = await self.user_repo.get_many(by_supervisor.keys())
        return SearchFilters(
            statuses=[
                StatusFacet(value=s, label=status_label(s), count=by_status.get(s.value, 0))
                for s in ProjectStatus
            ],
            supervisors=sorted(
                (
                    SupervisorFacet(id=uid, full_name=supervisors[uid].full_name, count=count)
                    for uid, count in by_supervisor.items()
                    if uid in supervisors
                ),
                key=lambda facet: facet.full_name,
            ),
            date_range=CreatedDateRange(earliest=earliest, latest=latest),
        )

    async def update_project(
        self, project_id: str | UUID, data: ProjectUpdate, actor: Actor
    ) -> Project:
        """Owner edit of project fields. Status and history are left untouched."""
        project = await self._get_or_404(project_id)
        if project.owner_id != actor.id:
            raise ForbiddenError("Only the project owner can edit this project")

        update_data = data.model_dump(exclude_unset=True)
        await self._validate_supervisors(
            update_data.get("supervisor_id"), update_data.get("co_supervisor_id")
        )
        if data.students is not None:
            update_data["students"] = [s.model_dump(mode="json") for s in data.students]

        for field, value in update_data.items():
            setattr(project, field, value)
        project.updated_at = utc_now()

        try:
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        await self.session.refresh(project)
        logger.info(
            "Project updated",
            project_id=str(project.id),
            fields=sorted(update_data.keys()),
        )
        return project

    async def delete_project(self, project_id: str | UUID, actor: Actor) -> None:
        """Delete a project and its history. The stored image is removed best-effort."""
        project = await self._get_or_404(project_id)
        if not actor.is_admin and project.owner_id != actor.id:
            raise ForbiddenError("Not authorized to delete this project")

        pid = project.id
        if project.image_url and self.storage is not None:
            storage = self.storage
            image_url = project.image_url
            await run_best_effort(
                "image_delete",
                lambda: storage.delete_object(image_url),
                project_id=str(pid),
            )

        try:
            deleted = await self.project_repo.delete_with_history(pid)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        if not deleted:
            raise NotFoundError("Project not found")
        logger.info("Project deleted", project_id=str(pid), actor_id=str(actor.id))

    async def upload_image(
        self,
        project_id: str | UUID,
        filename: str,
        content_type: str | None,
        content: bytes,
        actor: Actor,
    ) -> Project:
        """Store a new project image and replace the previous one."""
        project = await self._get_or_404(project_id)
        if project.owner_id != actor.id:
            raise ForbiddenError("Only the project owner can upload an image")
        if not content_type or not content_type.startswith("image/"):
            raise InvalidInputError("Only image files are allowed")
        if not content:
            raise InvalidInputError("Image file is empty")
        max_size = get_settings().max_image_size_bytes
        if len(content) > max_size:
            raise InvalidInputError(f"Image exceeds maximum size of {max_size} bytes")
        if self.storage is None:
            raise DependencyFailureError("Image storage is not configured")

        try:
            image_url = await self.storage.upload_image(project.id, filename, content, content_type)
        except Exception as e:
            logger.error("Image upload failed", project_id=str(project.id), error=str(e))
            raise DependencyFailureError("Failed to upload image") from e

        previous_url = project.image_url
        project.image_url = image_url
        project.updated_at = utc_now()
        try:
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        await self.session.refresh(project)

        if previous_url:
            storage = self.storage
            await run_best_effort(
                "image_delete",
                lambda: storage.delete_object(previous_url),
                project_id=str(project.id),
            )
        return project
