"""Repository factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.projecthub.api.dependencies.db import DBSession
from src.projecthub.repositories import (
    NotificationRepository,
    ProjectRepository,
    ProjectStatusHistoryRepository,
    UserRepository,
)


def get_user_repository(session: DBSession) -> UserRepository:
    return UserRepository(session)


def get_project_repository(session: DBSession) -> ProjectRepository:
    return ProjectRepository(session)


def get_status_history_repository(session: DBSession) -> ProjectStatusHistoryRepository:
    return ProjectStatusHistoryRepository(session)


def get_notification_repository(session: DBSession) -> NotificationRepository:
    return NotificationRepository(session)


UserRepo = Annotated[UserRepository, Depends(get_user_repository)]
ProjectRepo = Annotated[ProjectRepository, Depends(get_project_repository)]
StatusHistoryRepo = Annotated[
    ProjectStatusHistoryRepository, Depends(get_status_history_repository)
]
NotificationRepo = Annotated[NotificationRepository, Depends(get_notification_repository)]
