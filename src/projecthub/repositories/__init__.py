"""Repository layer - data access abstraction."""

from src.projecthub.repositories.base import BaseRepository
from src.projecthub.repositories.email_job import EmailJobRepository
from src.projecthub.repositories.notification import NotificationRepository
from src.projecthub.repositories.project import ProjectRepository
from src.projecthub.repositories.status_history import ProjectStatusHistoryRepository
from src.projecthub.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "EmailJobRepository",
    "NotificationRepository",
    "ProjectRepository",
    "ProjectStatusHistoryRepository",
    "UserRepository",
]
