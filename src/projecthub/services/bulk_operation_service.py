"""Bulk project operations with per-item isolation."""

from collections.abc import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from src.projecthub.core.exceptions import ForbiddenError, InvalidInputError, ProjectHubError
from src.projecthub.core.logging import get_logger
from src.projecthub.models import BulkAction, ProjectStatus
from src.projecthub.schemas.actor import Actor
from src.projecthub.schemas.bulk import (
    BulkItemFailure,
    BulkItemSuccess,
    BulkOperationResponse,
    BulkResults,
    BulkSummary,
)
from src.projecthub.services.project_service import ProjectService
from src.projecthub.services.project_workflow_service import ProjectWorkflowService, parse_status

logger = get_logger(__name__)


class BulkOperationService:
    """Applies one action to many projects.

    Items are processed one after another. A failing item is recorded in
    ``failed`` and never stops the remaining items.
    """

    def __init__(
        self,
        workflow: ProjectWorkflowService,
        project_service: ProjectService,
        session: AsyncSession,
    ):
        self.workflow = workflow
        self.project_service = project_service
        self.session = session

    async def bulk_apply(
        self,
        project_ids: Sequence[str],
        action: BulkAction | str,
        actor: Actor,
        status: str | None = None,
        comment: str | None = None,
    ) -> BulkOperationResponse:
        """Run action on every project id.

        Raises:
            ForbiddenError: Actor is not an admin
            InvalidInputError: Empty id list, unknown action, or missing/invalid
                status for updateStatus. Nothing is touched in that case.
        """
        if not actor.is_admin:
            raise ForbiddenError("Admin access required")
        if not project_ids:
            raise InvalidInputError("Project IDs array is required")
        try:
            bulk_action = BulkAction(action)
        except ValueError:
            raise InvalidInputError("Valid action is required (updateStatus, delete)") from None

        new_status: ProjectStatus | None = None
        if bulk_action == BulkAction.UPDATE_STATUS:
            if not status:
                raise InvalidInputError("Status is required for updateStatus action")
            new_status = parse_status(status)

        results = BulkResults()
        for project_id in project_ids:
            try:
                if new_status is not None:
                    await self.workflow.transition_status(
                        project_id, new_status, comment, actor, bulk=True
                    )
                    results.successful.append(
                        BulkItemSuccess(
                            project_id=project_id,
                            action="status_updated",
                            new_status=new_status.value,
                        )
                    )
                else:
                    await self.project_service.delete_project(project_id, actor)
                    results.successful.append(
                        BulkItemSuccess(project_id=project_id, action="deleted")
                    )
            except ProjectHubError as e:
                results.failed.append(BulkItemFailure(project_id=project_id, error=e.detail))
            except Exception as e:
                await self.session.rollback()
                logger.warning(
                    "Bulk item failed",
                    project_id=project_id,
                    action=bulk_action.value,
                    error=str(e),
                )
                results.failed.append(BulkItemFailure(project_id=project_id, error=str(e)))

        summary = BulkSummary(
            total=len(project_ids),
            successful=len(results.successful),
            failed=len(results.failed),
        )
        logger.info(
            "Bulk operation completed",
            action=bulk_action.value,
            total=summary.total,
            successful=summary.successful,
            failed=summary.failed,
        )
        return BulkOperationResponse(results=results, summary=summary)
