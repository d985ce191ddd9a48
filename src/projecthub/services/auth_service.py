"""Authentication service - registration, login and actor resolution."""

from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.projecthub.core.cache import ActorCache
from src.projecthub.core.exceptions import ConflictError
from src.projecthub.core.logging import get_logger
from src.projecthub.core.security import (
    ACCESS_TOKEN_TYPE,
    DUMMY_PASSWORD_HASH,
    create_access_token,
    decode_token,
    hash_password,
    verify_password,
)
from src.projecthub.models import User, UserRole
from src.projecthub.repositories import UserRepository
from src.projecthub.schemas.actor import Actor
from src.projecthub.schemas.auth import LoginResponse
from src.projecthub.schemas.user import UserRead

logger = get_logger(__name__)


def actor_from_user(user: User) -> Actor:
    return Actor(
        id=user.id,
        role=UserRole(user.role),
        display_name=user.full_name,
        email=user.email,
    )


class AuthService:
    """Authentication service - handles registration, login and token -> actor."""

    def __init__(
        self,
        user_repo: UserRepository,
        session: AsyncSession,
        actor_cache: ActorCache,
    ):
        self.user_repo = user_repo
        self.session = session
        self.actor_cache = actor_cache

    async def create_user(
        self,
        email: str,
        password: str,
        full_name: str,
        role: UserRole,
        department: str | None = None,
        specialization: str | None = None,
    ) -> User:
        """Create an account with the given role.

        Raises:
            ConflictError: Email already registered
        """
        email = email.lower()
        if await self.user_repo.exists_by_email(email):
            raise ConflictError("Email already registered")

        user = User(
            email=email,
            hashed_password=hash_password(password),
            full_name=full_name,
            role=role.value,
            department=department,
            specialization=specialization,
        )
        try:
            self.user_repo.add(user)
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            raise ConflictError("Email already registered") from None
        except Exception:
            await self.session.rollback()
            raise
        await self.session.refresh(user)
        logger.info("User created", user_id=str(user.id), role=role.value)
        return user

    async def register(self, email: str, password: str, full_name: str) -> User:
        """Self registration creates a student account."""
        return await self.create_user(email, password, full_name, UserRole.USER)

    async def authenticate(self, email: str, password: str) -> LoginResponse | None:
        """Authenticate user and return an access token.

        Returns None if authentication fails.
        """
        user = await self.user_repo.get_by_email(email.lower())

        # Always perform password verification to prevent timing attacks
        # that could reveal whether an email exists in the system
        password_hash = user.hashed_password if user else DUMMY_PASSWORD_HASH
        password_valid = verify_password(password, password_hash)

        if user is None or not password_valid:
            return None

        if not user.is_active:
            return None

        access_token, expires_in = create_access_token(user.id, user.role)
        await self.actor_cache.set(actor_from_user(user))
        logger.info("User logged in", user_id=str(user.id))

        return LoginResponse(
            access_token=access_token,
            expires_in=expires_in,
            user=UserRead.model_validate(user),
        )

    async def resolve_actor(self, token: str) -> Actor | None:
        """Resolve a bearer token to the current actor.

        Returns None for invalid or expired tokens and for missing or
        inactive users.
        """
        payload = decode_token(token)
        if payload is None or payload.get("type") != ACCESS_TOKEN_TYPE:
            return None

        try:
            user_id = UUID(payload["sub"])
        except (KeyError, ValueError, TypeError):
            return None

        actor = await self.actor_cache.get(user_id)
        if actor is not None:
            return actor

        user = await self.user_repo.get_by_id(user_id)
        if user is None or not user.is_active:
            return None

        actor = actor_from_user(user)
        await self.actor_cache.set(actor)
        return actor

    async def logout(self, actor: Actor) -> None:
        await self.actor_cache.invalidate(actor.id)
        logger.info("User logged out", user_id=str(actor.id))
