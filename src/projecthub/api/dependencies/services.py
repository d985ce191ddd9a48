"""Service factory dependencies."""

from typing import Annotated

from fastapi import Depends, Request

from src.projecthub.api.dependencies.db import DBSession, SessionFactory
from src.projecthub.api.dependencies.repositories import (
    NotificationRepo,
    ProjectRepo,
    StatusHistoryRepo,
    UserRepo,
)
from src.projecthub.core.cache import ActorCache
from src.projecthub.core.config import get_settings
from src.projecthub.core.storage import ImageStorage
from src.projecthub.services import (
    AuthService,
    BulkOperationService,
    NotificationDispatcher,
    NotificationService,
    ProjectService,
    ProjectWorkflowService,
    StatsService,
    UserService,
)


def get_actor_cache(request: Request) -> ActorCache:
    """Actor cache created at startup and stored on app.state."""
    return request.app.state.actor_cache


def get_image_storage(request: Request) -> ImageStorage | None:
    return getattr(request.app.state, "image_storage", None)


ActorCacheDep = Annotated[ActorCache, Depends(get_actor_cache)]
ImageStorageDep = Annotated[ImageStorage | None, Depends(get_image_storage)]


def get_notification_dispatcher(factory: SessionFactory) -> NotificationDispatcher:
    """Dispatcher with its own sessions, isolated from the request transaction."""
    return NotificationDispatcher(factory)


DispatcherDep = Annotated[NotificationDispatcher, Depends(get_notification_dispatcher)]


def get_auth_service(
    user_repo: UserRepo, session: DBSession, actor_cache: ActorCacheDep
) -> AuthService:
    return AuthService(user_repo, session, actor_cache)


def get_user_service(
    user_repo: UserRepo,
    project_repo: ProjectRepo,
    session: DBSession,
    actor_cache: ActorCacheDep,
) -> UserService:
    return UserService(user_repo, project_repo, session, actor_cache)


def get_workflow_service(
    project_repo: ProjectRepo,
    history_repo: StatusHistoryRepo,
    session: DBSession,
    dispatcher: DispatcherDep,
) -> ProjectWorkflowService:
    return ProjectWorkflowService(
        project_repo,
        history_repo,
        session,
        dispatcher=dispatcher,
        max_attempts=get_settings().workflow_max_attempts,
    )


def get_project_service(
    project_repo: ProjectRepo,
    history_repo: StatusHistoryRepo,
    user_repo: UserRepo,
    session: DBSession,
    dispatcher: DispatcherDep,
    storage: ImageStorageDep,
) -> ProjectService:
    return ProjectService(
        project_repo,
        history_repo,
        user_repo,
        session,
        dispatcher=dispatcher,
        storage=storage,
    )


WorkflowServiceDep = Annotated[ProjectWorkflowService, Depends(get_workflow_service)]
ProjectServiceDep = Annotated[ProjectService, Depends(get_project_service)]


def get_bulk_operation_service(
    workflow: WorkflowServiceDep,
    project_service: ProjectServiceDep,
    session: DBSession,
) -> BulkOperationService:
    return BulkOperationService(workflow, project_service, session)


def get_notification_service(
    notification_repo: NotificationRepo, user_repo: UserRepo, session: DBSession
) -> NotificationService:
    return NotificationService(notification_repo, user_repo, session)


def get_stats_service(user_repo: UserRepo, project_repo: ProjectRepo) -> StatsService:
    return StatsService(user_repo, project_repo)


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]
BulkOperationServiceDep = Annotated[BulkOperationService, Depends(get_bulk_operation_service)]
NotificationServiceDep = Annotated[NotificationService, Depends(get_notification_service)]
StatsServiceDep = Annotated[StatsService, Depends(get_stats_service)]
