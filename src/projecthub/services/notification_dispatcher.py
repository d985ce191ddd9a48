"""Notification dispatcher - fans project events out to notifications and emails.

Fire-and-forget design: every side effect runs in its own database session
under its own best-effort boundary. A failure is logged and never reaches the
caller, and one failing side effect does not prevent the others.
"""

from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.projecthub.core.config import get_settings
from src.projecthub.core.logging import get_logger
from src.projecthub.core.notifications import (
    render_status_change_email,
    status_change_subject,
    status_label,
)
from src.projecthub.core.side_effects import run_best_effort
from src.projecthub.models import (
    EmailJob,
    Notification,
    NotificationCategory,
    NotificationType,
    Project,
    ProjectStatus,
)
from src.projecthub.models.base import utc_now
from src.projecthub.repositories import (
    EmailJobRepository,
    NotificationRepository,
    UserRepository,
)
from src.projecthub.schemas.actor import Actor

logger = get_logger(__name__)

# Statuses that always queue an email to the project owner
EMAIL_ALWAYS_STATUSES = frozenset({ProjectStatus.APPROVED, ProjectStatus.REJECTED})


def owner_notification_title(status: ProjectStatus) -> str:
    if status == ProjectStatus.APPROVED:
        return "Project Approved"
    if status == ProjectStatus.REJECTED:
        return "Project Rejected"
    return "Project Status Updated"


def owner_notification_type(status: ProjectStatus) -> NotificationType:
    if status == ProjectStatus.APPROVED:
        return NotificationType.SUCCESS
    if status == ProjectStatus.REJECTED:
        return NotificationType.ERROR
    return NotificationType.INFO


def should_send_email(status: ProjectStatus, send_email: bool) -> bool:
    """Approvals and rejections always email the owner, others only on request."""
    return status in EMAIL_ALWAYS_STATUSES or send_email


class NotificationDispatcher:
    """Translates project events into in-app notifications and queued emails."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def notify_status_change(
        self,
        project: Project,
        previous_status: ProjectStatus | None,
        new_status: ProjectStatus,
        comment: str,
        actor: Actor,
        send_email: bool = False,
        bulk: bool = False,
    ) -> None:
        """Notify the owner, the supervisor on approval, and queue the email.

        Never raises.
        """
        context: dict[str, Any] = {
            "project_id": str(project.id),
            "new_status": new_status.value,
        }
        now = utc_now()
        label = status_label(new_status)

        message = f'Your project "{project.title}" has been {label}'
        if bulk:
            message += " in bulk update"
        if comment:
            message += f'. Review comment: "{comment}"'

        owner_notification = Notification(
            user_id=project.owner_id,
            title=owner_notification_title(new_status),
            message=message,
            type=owner_notification_type(new_status).value,
            category=NotificationCategory.PROJECT.value,
            data={
                "projectId": str(project.id),
                "projectTitle": project.title,
                "oldStatus": previous_status.value if previous_status else None,
                "newStatus": new_status.value,
                "comment": comment,
                "reviewerName": actor.display_name,
                "actionRequired": new_status == ProjectStatus.REVISION_REQUIRED,
                "bulkUpdate": bulk,
                "timestamp": now.isoformat(),
            },
        )
        await run_best_effort(
            "owner_notification",
            lambda: self._store_notification(owner_notification),
            **context,
        )

        if new_status == ProjectStatus.APPROVED and project.supervisor_id:
            supervisor_notification = Notification(
                user_id=project.supervisor_id,
                title="Project Approved",
                message=(
                    f'The project "{project.title}" you are supervising '
                    f"has been approved by {actor.display_name}"
                ),
                type=NotificationType.SUCCESS.value,
                category=NotificationCategory.PROJECT.value,
                data={
                    "projectId": str(project.id),
                    "projectTitle": project.title,
                    "newStatus": new_status.value,
                    "reviewerName": actor.display_name,
                    "role": "supervisor",
                    "timestamp": now.isoformat(),
                },
            )
            await run_best_effort(
                "supervisor_notification",
                lambda: self._store_notification(supervisor_notification),
                **context,
            )

        if should_send_email(new_status, send_email):
            await run_best_effort(
                "status_change_email",
                lambda: self._queue_status_email(project, new_status, comment, actor),
                **context,
            )

    async def notify_new_assignment(
        self,
        project: Project,
        supervisor_id: UUID,
        co_supervisor_id: UUID | None = None,
    ) -> None:
        """Tell the supervisor (and a distinct co-supervisor) about a new project.

        Never raises.
        """
        recipients: list[tuple[UUID, str]] = [(supervisor_id, "supervisor")]
        if co_supervisor_id is not None and co_supervisor_id != supervisor_id:
            recipients.append((co_supervisor_id, "co-supervisor"))

        for user_id, role in recipients:
            verb = "supervise" if role == "supervisor" else "co-supervise"
            notification = Notification(
                user_id=user_id,
                title="New Project Assignment",
                message=f'You have been assigned to {verb} the project "{project.title}"',
                type=NotificationType.INFO.value,
                category=NotificationCategory.PROJECT.value,
                data={
                    "projectId": str(project.id),
                    "projectTitle": project.title,
                    "role": role,
                    "timestamp": utc_now().isoformat(),
                },
            )
            await run_best_effort(
                "assignment_notification",
                lambda n=notification: self._store_notification(n),
                project_id=str(project.id),
                recipient_id=str(user_id),
            )

    async def _store_notification(self, notification: Notification) -> None:
        async with self.session_factory() as session:
            NotificationRepository(session).add(notification)
            await session.commit()
        logger.debug(
            "Notification created",
            user_id=str(notification.user_id),
            title=notification.title,
        )

    async def _queue_status_email(
        self,
        project: Project,
        new_status: ProjectStatus,
        comment: str,
        actor: Actor,
    ) -> None:
        async with self.session_factory() as session:
            owner = await UserRepository(session).get_by_id(project.owner_id)
            if owner is None or not owner.email:
                logger.info(
                    "Project owner has no email address, status email skipped",
                    project_id=str(project.id),
                )
                return

            settings = get_settings()
            job = EmailJob(
                to=[owner.email],
                subject=status_change_subject(project.title),
                html=render_status_change_email(
                    project_title=project.title,
                    new_status=new_status,
                    comment=comment,
                    reviewer_name=actor.display_name,
                    project_url=f"{settings.app_url}/projects/{project.id}",
                ),
            )
            EmailJobRepository(session).add(job)
            await session.commit()
        logger.info(
            "Status change email queued",
            project_id=str(project.id),
            new_status=new_status.value,
        )
