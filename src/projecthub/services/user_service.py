"""User administration - listing, role and status changes, teachers, deletion."""

from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.projecthub.core.cache import ActorCache
from src.projecthub.core.exceptions import ConflictError, InvalidInputError, NotFoundError
from src.projecthub.core.logging import get_logger
from src.projecthub.models import User, UserRole
from src.projecthub.models.base import utc_now
from src.projecthub.repositories import ProjectRepository, UserRepository
from src.projecthub.schemas.actor import Actor
from src.projecthub.schemas.user import TeacherUpdate, UserAdminUpdate

logger = get_logger(__name__)


class UserService:
    """User management service."""

    def __init__(
        self,
        user_repo: UserRepository,
        project_repo: ProjectRepository,
        session: AsyncSession,
        actor_cache: ActorCache | None = None,
    ):
        self.user_repo = user_repo
        self.project_repo = project_repo
        self.session = session
        self.actor_cache = actor_cache

    async def get_by_id(self, user_id: UUID) -> User | None:
        return await self.user_repo.get_live(user_id)

    async def list_users(
        self,
        role: UserRole | None = None,
        cursor: str | None = None,
        limit: int = 50,
    ) -> tuple[list[User], str | None, bool]:
        return await self.user_repo.list_users(role=role, cursor=cursor, limit=limit)

    async def list_teachers(self) -> list[User]:
        return await self.user_repo.list_active_teachers()

    async def _get_teacher(self, teacher_id: UUID) -> User:
        teacher = await self.user_repo.get_live(teacher_id)
        if teacher is None or teacher.role != UserRole.TEACHER.value:
            raise NotFoundError("Teacher not found")
        return teacher

    async def _commit_user(self, user: User) -> None:
        try:
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            raise ConflictError("Email already registered") from None
        except Exception:
            await self.session.rollback()
            raise
        await self.session.refresh(user)
        if self.actor_cache is not None:
            await self.actor_cache.invalidate(user.id)

    async def update_user(self, user_id: UUID, data: UserAdminUpdate, admin: Actor) -> User:
        """Change a user's role, active flag or name.

        The cached actor is invalidated so the change applies to the next request.

        Raises:
            NotFoundError: User does not exist or was deleted
            InvalidInputError: Admin tries to demote or deactivate themselves
        """
        user = await self.user_repo.get_live(user_id)
        if user is None:
            raise NotFoundError("User not found")

        update_data = data.model_dump(exclude_unset=True, exclude_none=True)
        if user.id == admin.id and (
            update_data.get("is_active") is False
            or update_data.get("role", UserRole.ADMIN) != UserRole.ADMIN
        ):
            raise InvalidInputError("Admins cannot demote or deactivate themselves")

        if "role" in update_data:
            update_data["role"] = UserRole(update_data["role"]).value
        for field, value in update_data.items():
            setattr(user, field, value)
        user.updated_at = utc_now()

        await self._commit_user(user)
        logger.info(
            "User updated",
            user_id=str(user.id),
            fields=sorted(update_data.keys()),
            admin_id=str(admin.id),
        )
        return user

    async def update_teacher(self, teacher_id: UUID, data: TeacherUpdate, admin: Actor) -> User:
        """Edit a teacher's name, email, department or specialization.

        Raises:
            NotFoundError: No live teacher with this id
            ConflictError: Email already belongs to another account
        """
        teacher = await self._get_teacher(teacher_id)

        update_data = data.model_dump(exclude_unset=True)
        if "email" in update_data:
            email = update_data["email"].lower()
            existing = await self.user_repo.get_by_email(email)
            if existing is not None and existing.id != teacher.id:
                raise ConflictError("Email already registered")
            update_data["email"] = email

        for field, value in update_data.items():
            setattr(teacher, field, value)
        teacher.updated_at = utc_now()

        await self._commit_user(teacher)
        logger.info(
            "Teacher updated",
            user_id=str(teacher.id),
            fields=sorted(update_data.keys()),
            admin_id=str(admin.id),
        )
        return teacher

    async def _soft_delete(self, user: User, admin: Actor) -> None:
        now = utc_now()
        user.deleted_at = now
        user.is_active = False
        user.updated_at = now
        await self._commit_user(user)
        logger.info("User deleted", user_id=str(user.id), role=user.role, admin_id=str(admin.id))

    async def delete_user(self, user_id: UUID, admin: Actor) -> None:
        """Soft-delete an account. It can no longer sign in and is hidden from listings.

        Raises:
            InvalidInputError: Admin tries to delete themselves
            NotFoundError: User does not exist or was already deleted
        """
        if user_id == admin.id:
            raise InvalidInputError("Admins cannot delete themselves")
        user = await self.user_repo.get_live(user_id)
        if user is None:
            raise NotFoundError("User not found")
        await self._soft_delete(user, admin)

    async def delete_teacher(self, teacher_id: UUID, admin: Actor) -> None:
        """Soft-delete a teacher who supervises no project.

        Raises:
            NotFoundError: No live teacher with this id
            InvalidInputError: Teacher is still supervisor or co-supervisor of a project
        """
        teacher = await self._get_teacher(teacher_id)
        assigned = await self.project_repo.count_assigned(teacher.id)
        if assigned:
            raise InvalidInputError(
                f"Cannot delete teacher. They are assigned to {assigned} project(s)."
            )
        await self._soft_delete(teacher, admin)
