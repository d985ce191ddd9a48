"""Project status workflow - transitions, history and dispatch.

Any of the five statuses may move to any other, including corrective moves
such as approved -> under-review; only membership in ProjectStatus is checked.

Each transition inserts a history row with ``sequence = observed + 1`` and
updates the project only while ``history_version`` still equals the observed
value. Losing either race rolls back and retries from a fresh read.
"""

from dataclasses import dataclass
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.projecthub.core.exceptions import (
    ConflictError,
    ForbiddenError,
    InvalidInputError,
    NotFoundError,
)
from src.projecthub.core.logging import get_logger
from src.projecthub.core.side_effects import run_best_effort
from src.projecthub.models import Project, ProjectStatus, ProjectStatusHistory
from src.projecthub.models.base import utc_now
from src.projecthub.repositories import ProjectRepository, ProjectStatusHistoryRepository
from src.projecthub.schemas.actor import Actor
from src.projecthub.services.notification_dispatcher import NotificationDispatcher

logger = get_logger(__name__)


def parse_status(value: str | ProjectStatus) -> ProjectStatus:
    """Return the ProjectStatus for value or raise InvalidInputError."""
    try:
        return ProjectStatus(value)
    except ValueError:
        raise InvalidInputError("Invalid status value") from None


def parse_project_id(value: str | UUID) -> UUID:
    """Ids that are not UUIDs cannot name a project."""
    if isinstance(value, UUID):
        return value
    try:
        return UUID(value)
    except (ValueError, TypeError, AttributeError):
        raise NotFoundError("Project not found") from None


@dataclass
class TransitionResult:
    project: Project
    previous_status: ProjectStatus | None
    history: list[ProjectStatusHistory]


class ProjectWorkflowService:
    """Owns project status changes and the append-only status history."""

    def __init__(
        self,
        project_repo: ProjectRepository,
        history_repo: ProjectStatusHistoryRepository,
        session: AsyncSession,
        dispatcher: NotificationDispatcher | None = None,
        max_attempts: int = 3,
    ):
        self.project_repo = project_repo
        self.history_repo = history_repo
        self.session = session
        self.dispatcher = dispatcher
        self.max_attempts = max_attempts

    async def transition_status(
        self,
        project_id: str | UUID,
        new_status: str | ProjectStatus,
        comment: str | None,
        actor: Actor,
        send_email: bool = False,
        bulk: bool = False,
    ) -> TransitionResult:
        """Move a project to new_status and record the history entry.

        Args:
            project_id: Project to transition
            new_status: Requested status value
            comment: Optional reviewer comment
            actor: Authenticated reviewer (admin or teacher)
            send_email: Queue an email even for statuses that do not require one
            bulk: Marks notifications as part of a bulk update

        Returns:
            TransitionResult with the updated project and full history, oldest first

        Raises:
            ForbiddenError: Actor is not an admin or teacher
            InvalidInputError: new_status is not a known status
            NotFoundError: Project does not exist
            ConflictError: Concurrent transitions exhausted every retry
        """
        if not actor.is_reviewer:
            raise ForbiddenError("Only admins and teachers can update project status")

        status = parse_status(new_status)
        pid = parse_project_id(project_id)
        comment = comment or ""

        project, previous_status = await self._persist_transition(pid, status, comment, actor)

        logger.info(
            "Project status updated",
            project_id=str(pid),
            previous_status=previous_status.value if previous_status else None,
            new_status=status.value,
            reviewer_id=str(actor.id),
            bulk=bulk,
        )

        if self.dispatcher is not None:
            dispatcher = self.dispatcher
            await run_best_effort(
                "status_change_dispatch",
                lambda: dispatcher.notify_status_change(
                    project,
                    previous_status,
                    status,
                    comment,
                    actor,
                    send_email=send_email,
                    bulk=bulk,
                ),
                project_id=str(pid),
            )

        history = await self.history_repo.list_for_project(pid)
        return TransitionResult(project=project, previous_status=previous_status, history=history)

    async def _persist_transition(
        self,
        project_id: UUID,
        status: ProjectStatus,
        comment: str,
        actor: Actor,
    ) -> tuple[Project, ProjectStatus | None]:
        for attempt in range(1, self.max_attempts + 1):
            project = await self.project_repo.get_fresh(project_id)
            if project is None:
                raise NotFoundError("Project not found")

            observed = project.history_version
            previous_status = ProjectStatus(project.status) if project.status else None
            now = utc_now()

            entry = ProjectStatusHistory(
                project_id=project_id,
                sequence=observed + 1,
                status=status.value,
                previous_status=previous_status.value if previous_status else None,
                comment=comment,
                reviewer_id=actor.id,
                reviewer_name=actor.display_name,
                reviewer_role=actor.role.value,
                created_at=now,
            )
            values = {
                "status": status.value,
                "last_reviewed_at": now,
                "last_reviewed_by": actor.display_name,
                "last_reviewed_by_id": actor.id,
                "updated_at": now,
            }
            if comment:
                values["last_feedback"] = comment

            try:
                self.history_repo.add(entry)
                await self.session.flush()
                updated = await self.project_repo.apply_transition(project_id, observed, values)
                if not updated:
                    await self.session.rollback()
                    logger.info(
                        "Status transition lost race, retrying",
                        project_id=str(project_id),
                        attempt=attempt,
                    )
                    continue
                await self.session.commit()
            except IntegrityError:
                await self.session.rollback()
                logger.info(
                    "Status history sequence taken, retrying",
                    project_id=str(project_id),
                    attempt=attempt,
                )
                continue
            except Exception:
                await self.session.rollback()
                raise

            await self.session.refresh(project)
            return project, previous_status

        logger.warning(
            "Status transition abandoned after concurrent updates",
            project_id=str(project_id),
            attempts=self.max_attempts,
        )
        raise ConflictError("Project was modified concurrently, please retry")

    async def get_status_history(
        self, project_id: str | UUID, viewer: Actor
    ) -> list[ProjectStatusHistory]:
        """Return a project's history, most recent first.

        Raises:
            NotFoundError: Project does not exist
            ForbiddenError: Viewer is neither a reviewer nor the project owner
        """
        pid = parse_project_id(project_id)
        project = await self.project_repo.get_by_id(pid)
        if project is None:
            raise NotFoundError("Project not found")
        if not viewer.is_reviewer and project.owner_id != viewer.id:
            raise ForbiddenError("Not authorized to view this project's history")
        return await self.history_repo.list_for_project(pid, newest_first=True)
