"""Repository for Notification entity."""

from typing import cast
from uuid import UUID

from sqlalchemy import func, update
from sqlalchemy.engine import CursorResult
from sqlmodel import col, select

from src.projecthub.models import Notification, NotificationCategory
from src.projecthub.models.base import utc_now
from src.projecthub.repositories.base import BaseRepository


class NotificationRepository(BaseRepository[Notification]):
    """Repository for Notification entity."""

    model = Notification

    async def list_for_user(
        self,
        user_id: UUID,
        unread_only: bool = False,
        category: NotificationCategory | None = None,
        cursor: str | None = None,
        limit: int = 50,
    ) -> tuple[list[Notification], str | None, bool]:
        """List a recipient's notifications newest first.

        Args:
            user_id: Recipient
            unread_only: Only notifications not yet read
            category: Optional category filter
            cursor: Pagination cursor
            limit: Maximum items to return

        Returns:
            Tuple of (notifications, next_cursor, has_more)
        """
        query = select(Notification).where(Notification.user_id == user_id)
        if unread_only:
            query = query.where(col(Notification.is_read).is_(False))
        if category is not None:
            query = query.where(Notification.category == category.value)
        return await self.paginate(query, cursor, limit, Notification.created_at)

    async def count_unread(self, user_id: UUID) -> int:
        result = await self.session.execute(
            select(func.count())
            .select_from(Notification)
            .where(Notification.user_id == user_id, col(Notification.is_read).is_(False))
        )
        return result.scalar_one()

    async def mark_all_read(self, user_id: UUID) -> int:
        """Mark every unread notification of a user as read. Returns the count."""
        result = await self.session.execute(
            update(Notification)
            .where(
                Notification.user_id == user_id,  # type: ignore[arg-type]
                col(Notification.is_read).is_(False),
            )
            .values(is_read=True, read_at=utc_now())
            .execution_options(synchronize_session=False)
        )
        return cast(CursorResult, result).rowcount
