"""Recipient-facing notification operations."""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.projecthub.core.exceptions import ForbiddenError, NotFoundError
from src.projecthub.core.logging import get_logger
from src.projecthub.models import Notification, NotificationCategory
from src.projecthub.models.base import utc_now
from src.projecthub.repositories import NotificationRepository, UserRepository
from src.projecthub.schemas.actor import Actor
from src.projecthub.schemas.notification import (
    NotificationPage,
    NotificationPreferences,
    NotificationRead,
)

logger = get_logger(__name__)


class NotificationService:
    """Only the recipient may read, mark or delete a notification."""

    def __init__(
        self,
        notification_repo: NotificationRepository,
        user_repo: UserRepository,
        session: AsyncSession,
    ):
        self.notification_repo = notification_repo
        self.user_repo = user_repo
        self.session = session

    async def _get_owned(self, notification_id: UUID, user: Actor) -> Notification:
        notification = await self.notification_repo.get_by_id(notification_id)
        if notification is None:
            raise NotFoundError("Notification not found")
        if notification.user_id != user.id:
            raise ForbiddenError("Not authorized to access this notification")
        return notification

    async def list_notifications(
        self,
        user: Actor,
        unread_only: bool = False,
        category: NotificationCategory | None = None,
        cursor: str | None = None,
        limit: int = 50,
    ) -> NotificationPage:
        items, next_cursor, has_more = await self.notification_repo.list_for_user(
            user.id, unread_only=unread_only, category=category, cursor=cursor, limit=limit
        )
        unread_count = await self.notification_repo.count_unread(user.id)
        return NotificationPage(
            items=[NotificationRead.model_validate(n) for n in items],
            next_cursor=next_cursor,
            has_more=has_more,
            unread_count=unread_count,
        )

    async def mark_as_read(self, notification_id: UUID, user: Actor) -> Notification:
        notification = await self._get_owned(notification_id, user)
        if not notification.is_read:
            notification.is_read = True
            notification.read_at = utc_now()
            try:
                await self.session.commit()
            except Exception:
                await self.session.rollback()
                raise
            await self.session.refresh(notification)
        return notification

    async def mark_all_as_read(self, user: Actor) -> int:
        """Mark every unread notification of user as read. Returns the count."""
        try:
            updated = await self.notification_repo.mark_all_read(user.id)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        logger.info("Notifications marked read", user_id=str(user.id), count=updated)
        return updated

    async def delete_notification(self, notification_id: UUID, user: Actor) -> None:
        notification = await self._get_owned(notification_id, user)
        try:
            await self.notification_repo.delete(notification)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

    async def get_preferences(self, user: Actor) -> NotificationPreferences:
        """Stored preferences merged over the defaults."""
        account = await self.user_repo.get_live(user.id)
        if account is None:
            raise NotFoundError("User not found")
        return NotificationPreferences.model_validate(account.notification_preferences or {})

    async def update_preferences(
        self, user: Actor, preferences: NotificationPreferences
    ) -> NotificationPreferences:
        account = await self.user_repo.get_live(user.id)
        if account is None:
            raise NotFoundError("User not found")
        account.notification_preferences = preferences.model_dump(mode="json", by_alias=True)
        account.updated_at = utc_now()
        try:
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        logger.info("Notification preferences updated", user_id=str(user.id))
        return preferences
