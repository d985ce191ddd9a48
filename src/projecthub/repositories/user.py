"""Repository for User entity."""

from collections.abc import Iterable
from datetime import datetime
from uuid import UUID

from sqlalchemy import func
from sqlmodel import col, select

from src.projecthub.models import User, UserRole
from src.projecthub.repositories.base import BaseRepository

# Soft-deleted accounts are kept for history but hidden from listings and counts
_NOT_DELETED = col(User.deleted_at).is_(None)


class UserRepository(BaseRepository[User]):
    """Repository for User entity."""

    model = User

    async def get_by_email(self, email: str) -> User | None:
        """Get user by email address."""
        result = await self.session.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def exists_by_email(self, email: str) -> bool:
        """Check if a user with the given email exists."""
        user = await self.get_by_email(email)
        return user is not None

    async def get_live(self, user_id: UUID) -> User | None:
        """Get a user unless it has been soft-deleted."""
        result = await self.session.execute(select(User).where(User.id == user_id, _NOT_DELETED))
        return result.scalar_one_or_none()

    async def get_active_teacher(self, user_id: UUID) -> User | None:
        """Get a user only if it is an active teacher (valid supervisor)."""
        result = await self.session.execute(
            select(User).where(
                User.id == user_id,
                User.role == UserRole.TEACHER.value,
                col(User.is_active).is_(True),
                _NOT_DELETED,
            )
        )
        return result.scalar_one_or_none()

    async def get_many(self, user_ids: Iterable[UUID]) -> dict[UUID, User]:
        ids = list(user_ids)
        if not ids:
            return {}
        result = await self.session.execute(select(User).where(col(User.id).in_(ids)))
        return {user.id: user for user in result.scalars().all()}

    async def list_users(
        self,
        role: UserRole | None = None,
        cursor: str | None = None,
        limit: int = 50,
    ) -> tuple[list[User], str | None, bool]:
        query = select(User).where(_NOT_DELETED)
        if role is not None:
            query = query.where(User.role == role.value)
        return await self.paginate(query, cursor, limit, User.created_at)

    async def list_active_teachers(self) -> list[User]:
        """All active teachers ordered by name, for supervisor selection."""
        result = await self.session.execute(
            select(User)
            .where(
                User.role == UserRole.TEACHER.value,
                col(User.is_active).is_(True),
                _NOT_DELETED,
            )
            .order_by(col(User.full_name))
        )
        return list(result.scalars().all())

    async def count_by_role(self) -> dict[str, int]:
        result = await self.session.execute(
            select(User.role, func.count()).where(_NOT_DELETED).group_by(User.role)
        )
        return {role: count for role, count in result.all()}

    async def count_active(self) -> int:
        result = await self.session.execute(
            select(func.count())
            .select_from(User)
            .where(col(User.is_active).is_(True), _NOT_DELETED)
        )
        return result.scalar_one()

    async def count_created_since(self, since: datetime) -> int:
        result = await self.session.execute(
            select(func.count())
            .select_from(User)
            .where(User.created_at >= since, _NOT_DELETED)
        )
        return result.scalar_one()
