"""Service layer - business operations."""

from src.projecthub.services.auth_service import AuthService
from src.projecthub.services.bulk_operation_service import BulkOperationService
from src.projecthub.services.notification_dispatcher import NotificationDispatcher
from src.projecthub.services.notification_service import NotificationService
from src.projecthub.services.project_service import ProjectService
from src.projecthub.services.project_workflow_service import ProjectWorkflowService
from src.projecthub.services.stats_service import StatsService
from src.projecthub.services.user_service import UserService

__all__ = [
    "AuthService",
    "BulkOperationService",
    "NotificationDispatcher",
    "NotificationService",
    "ProjectService",
    "ProjectWorkflowService",
    "StatsService",
    "UserService",
]
