from src.projecthub.schemas.actor import Actor
from src.projecthub.schemas.auth import (
    LoginRequest,
    LoginResponse,
    LogoutResponse,
    RegisterRequest,
    TeacherCreate,
)
from src.projecthub.schemas.bulk import (
    BulkItemFailure,
    BulkItemSuccess,
    BulkOperationResponse,
    BulkProjectRequest,
    BulkResults,
    BulkSummary,
)
from src.projecthub.schemas.notification import (
    MarkAllReadResponse,
    NotificationPage,
    NotificationPreferences,
    NotificationPreferencesBody,
    NotificationRead,
)
from src.projecthub.schemas.pagination import PaginatedResponse
from src.projecthub.schemas.project import (
    HistoryEntryRead,
    ProjectCreate,
    ProjectRead,
    ProjectSearchParams,
    ProjectSearchResponse,
    ProjectUpdate,
    SearchFilters,
    StatusUpdateRequest,
    StudentMember,
    TransitionResponse,
)
from src.projecthub.schemas.stats import DashboardStats
from src.projecthub.schemas.user import TeacherRead, TeacherUpdate, UserAdminUpdate, UserRead

__all__ = [
    # Actor
    "Actor",
    # Auth
    "LoginRequest",
    "LoginResponse",
    "LogoutResponse",
    "RegisterRequest",
    "TeacherCreate",
    # Bulk
    "BulkItemFailure",
    "BulkItemSuccess",
    "BulkOperationResponse",
    "BulkProjectRequest",
    "BulkResults",
    "BulkSummary",
    # Notification
    "MarkAllReadResponse",
    "NotificationPage",
    "NotificationPreferences",
    "NotificationPreferencesBody",
    "NotificationRead",
    # Pagination
    "PaginatedResponse",
    # Project
    "HistoryEntryRead",
    "ProjectCreate",
    "ProjectRead",
    "ProjectSearchParams",
    "ProjectSearchResponse",
    "ProjectUpdate",
    "SearchFilters",
    "StatusUpdateRequest",
    "StudentMember",
    "TransitionResponse",
    # Stats
    "DashboardStats",
    # User
    "TeacherRead",
    "TeacherUpdate",
    "UserAdminUpdate",
    "UserRead",
]
