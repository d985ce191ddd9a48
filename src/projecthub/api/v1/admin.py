"""Admin endpoints - user management and dashboard statistics."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query, status

from src.projecthub.api.dependencies import (
    AdminActor,
    AuthServiceDep,
    StatsServiceDep,
    UserServiceDep,
)
from src.projecthub.models import UserRole
from src.projecthub.schemas.auth import TeacherCreate
from src.projecthub.schemas.pagination import PaginatedResponse
from src.projecthub.schemas.stats import DashboardStats
from src.projecthub.schemas.user import TeacherUpdate, UserAdminUpdate, UserRead

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/users", response_model=PaginatedResponse[UserRead])
async def list_users(
    _admin: AdminActor,
    service: UserServiceDep,
    role: UserRole | None = None,
    cursor: Annotated[str | None, Query(description="Cursor for pagination")] = None,
    limit: Annotated[int, Query(ge=1, le=100, description="Max items to return")] = 50,
) -> PaginatedResponse[UserRead]:
    users, next_cursor, has_more = await service.list_users(role=role, cursor=cursor, limit=limit)
    return PaginatedResponse(
        items=[UserRead.model_validate(u) for u in users],
        next_cursor=next_cursor,
        has_more=has_more,
    )


@router.post("/teachers", response_model=UserRead, status_code=status.HTTP_201_CREATED)
async def create_teacher(
    data: TeacherCreate, _admin: AdminActor, service: AuthServiceDep
) -> UserRead:
    user = await service.create_user(
        data.email,
        data.password,
        data.full_name,
        UserRole.TEACHER,
        department=data.department,
        specialization=data.specialization,
    )
    return UserRead.model_validate(user)


@router.put("/teachers/{teacher_id}", response_model=UserRead)
async def update_teacher(
    teacher_id: UUID, data: TeacherUpdate, admin: AdminActor, service: UserServiceDep
) -> UserRead:
    teacher = await service.update_teacher(teacher_id, data, admin)
    return UserRead.model_validate(teacher)


@router.delete("/teachers/{teacher_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_teacher(teacher_id: UUID, admin: AdminActor, service: UserServiceDep) -> None:
    """Refused while the teacher supervises or co-supervises any project."""
    await service.delete_teacher(teacher_id, admin)


@router.patch("/users/{user_id}", response_model=UserRead)
async def update_user(
    user_id: UUID, data: UserAdminUpdate, admin: AdminActor, service: UserServiceDep
) -> UserRead:
    """Change role, active flag or name. Takes effect on the user's next request."""
    user = await service.update_user(user_id, data, admin)
    return UserRead.model_validate(user)


@router.delete("/users/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(user_id: UUID, admin: AdminActor, service: UserServiceDep) -> None:
    """Soft delete. The account can no longer sign in and disappears from listings."""
    await service.delete_user(user_id, admin)


@router.get("/stats", response_model=DashboardStats)
async def dashboard_stats(_admin: AdminActor, service: StatsServiceDep) -> DashboardStats:
    return await service.dashboard_stats()
