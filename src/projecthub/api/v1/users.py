"""Current user and teacher directory endpoints."""

from fastapi import APIRouter, HTTPException, status

from src.projecthub.api.dependencies import CurrentActor, UserServiceDep
from src.projecthub.schemas.user import TeacherRead, UserRead

router = APIRouter(tags=["users"])


@router.get("/users/me", response_model=UserRead)
async def get_me(actor: CurrentActor, service: UserServiceDep) -> UserRead:
    user = await service.get_by_id(actor.id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return UserRead.model_validate(user)


@router.get("/teachers", response_model=list[TeacherRead])
async def list_teachers(_actor: CurrentActor, service: UserServiceDep) -> list[TeacherRead]:
    """Active teachers available as supervisors."""
    teachers = await service.list_teachers()
    return [TeacherRead.model_validate(t) for t in teachers]
