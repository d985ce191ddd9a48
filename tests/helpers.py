"""Test helper functions for common data creation patterns."""

import os

from sqlalchemy.ext.asyncio import AsyncSession

from src.projecthub.core.security import create_access_token
from src.projecthub.models import Project, ProjectStatus, ProjectStatusHistory, User
from src.projecthub.schemas.actor import Actor
from src.projecthub.services.auth_service import actor_from_user
from tests.factories import ProjectFactory, UserFactory, utc_now

# postgresql+asyncpg URL of a disposable database; unset means SQLite
TEST_DATABASE_URL = os.environ.get("TEST_DATABASE_URL")


async def create_user(session: AsyncSession, role: str = "user", **user_kwargs) -> User:
    """Create and commit a user with the given role.

    Args:
        session: Database session
        role: "user" (student), "teacher" or "admin"
        **user_kwargs: Additional args passed to UserFactory

    Returns:
        The persisted user
    """
    if role == "teacher":
        user = UserFactory.teacher(**user_kwargs)
    elif role == "admin":
        user = UserFactory.admin(**user_kwargs)
    else:
        user = UserFactory.build(**user_kwargs)
    session.add(user)
    await session.commit()
    await session.refresh(user)
    return user


def actor_for(user: User) -> Actor:
    return actor_from_user(user)


def auth_headers(user: User) -> dict[str, str]:
    """Bearer header for user, bypassing the login endpoint."""
    token, _ = create_access_token(user.id, user.role)
    return {"Authorization": f"Bearer {token}"}


async def create_project_row(
    session: AsyncSession,
    owner: User,
    supervisor: User,
    **project_kwargs,
) -> Project:
    """Insert a project together with its initial pending history entry.

    Mirrors what ProjectService.create_project persists, without dispatching
    assignment notifications.
    """
    now = utc_now()
    project = ProjectFactory.build(
        owner_id=owner.id,
        supervisor_id=supervisor.id,
        history_version=1,
        last_reviewed_at=now,
        last_reviewed_by=owner.full_name,
        last_reviewed_by_id=owner.id,
        **project_kwargs,
    )
    session.add(project)
    await session.flush()
    session.add(
        ProjectStatusHistory(
            project_id=project.id,
            sequence=1,
            status=ProjectStatus.PENDING.value,
            previous_status=None,
            comment="",
            reviewer_id=owner.id,
            reviewer_name=owner.full_name,
            reviewer_role=owner.role,
            created_at=now,
        )
    )
    await session.commit()
    await session.refresh(project)
    return project
