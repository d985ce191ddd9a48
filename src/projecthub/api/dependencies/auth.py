"""Authentication and authorization dependencies."""

from collections.abc import Awaitable, Callable
from typing import Annotated

from fastapi import Depends, Header, HTTPException, Request, status

from src.projecthub.api.dependencies.services import AuthServiceDep
from src.projecthub.core.config import get_settings
from src.projecthub.core.logging import bind_actor_context
from src.projecthub.models import UserRole
from src.projecthub.schemas.actor import Actor


def _extract_token(request: Request, authorization: str | None) -> str | None:
    """Bearer header first, then the auth cookie."""
    if authorization and authorization.startswith("Bearer "):
        return authorization[7:]
    return request.cookies.get(get_settings().auth_cookie_name)


async def get_current_actor(
    request: Request,
    auth_service: AuthServiceDep,
    authorization: Annotated[str | None, Header()] = None,
) -> Actor:
    """Resolve the caller from the bearer token or auth cookie."""
    token = _extract_token(request, authorization)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )

    actor = await auth_service.resolve_actor(token)
    if actor is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )

    bind_actor_context(actor.id, actor.role.value)
    return actor


CurrentActor = Annotated[Actor, Depends(get_current_actor)]


def require_roles(*roles: UserRole) -> Callable[[Actor], Awaitable[Actor]]:
    """Dependency factory that admits only actors holding one of roles."""

    async def dependency(actor: CurrentActor) -> Actor:
        if actor.role not in roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient permissions",
            )
        return actor

    return dependency


ReviewerActor = Annotated[Actor, Depends(require_roles(UserRole.ADMIN, UserRole.TEACHER))]
AdminActor = Annotated[Actor, Depends(require_roles(UserRole.ADMIN))]
