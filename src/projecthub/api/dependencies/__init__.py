"""FastAPI dependency injection definitions.

Re-exports all dependencies for convenience.
"""

# Auth
from src.projecthub.api.dependencies.auth import (
    AdminActor,
    CurrentActor,
    ReviewerActor,
    get_current_actor,
    require_roles,
)

# Database
from src.projecthub.api.dependencies.db import (
    DBSession,
    SessionFactory,
    get_db_session,
    get_session_factory,
)

# Repositories
from src.projecthub.api.dependencies.repositories import (
    NotificationRepo,
    ProjectRepo,
    StatusHistoryRepo,
    UserRepo,
)

# Services
from src.projecthub.api.dependencies.services import (
    ActorCacheDep,
    AuthServiceDep,
    BulkOperationServiceDep,
    DispatcherDep,
    ImageStorageDep,
    NotificationServiceDep,
    ProjectServiceDep,
    StatsServiceDep,
    UserServiceDep,
    WorkflowServiceDep,
    get_actor_cache,
    get_image_storage,
)

__all__ = [
    # Auth
    "AdminActor",
    "CurrentActor",
    "ReviewerActor",
    "get_current_actor",
    "require_roles",
    # Database
    "DBSession",
    "SessionFactory",
    "get_db_session",
    "get_session_factory",
    # Repositories
    "NotificationRepo",
    "ProjectRepo",
    "StatusHistoryRepo",
    "UserRepo",
    # Services
    "ActorCacheDep",
    "AuthServiceDep",
    "BulkOperationServiceDep",
    "DispatcherDep",
    "ImageStorageDep",
    "NotificationServiceDep",
    "ProjectServiceDep",
    "StatsServiceDep",
    "UserServiceDep",
    "WorkflowServiceDep",
    "get_actor_cache",
    "get_image_storage",
]
