"""Repository for the outgoing mail queue."""

from sqlmodel import col, select

from src.projecthub.models import EmailJob
from src.projecthub.repositories.base import BaseRepository


class EmailJobRepository(BaseRepository[EmailJob]):
    """Append-only access to the ``mail`` table."""

    model = EmailJob

    async def list_recent(self, limit: int = 50) -> list[EmailJob]:
        result = await self.session.execute(
            select(EmailJob).order_by(col(EmailJob.created_at).desc()).limit(limit)
        )
        return list(result.scalars().all())
