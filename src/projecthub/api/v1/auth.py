"""Authentication endpoints."""

from fastapi import APIRouter, HTTPException, Response, status

from src.projecthub.api.dependencies import AuthServiceDep, CurrentActor
from src.projecthub.core.config import get_settings
from src.projecthub.schemas.auth import (
    LoginRequest,
    LoginResponse,
    LogoutResponse,
    RegisterRequest,
)
from src.projecthub.schemas.user import UserRead

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/register",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    responses={
        201: {"description": "Student account created"},
        409: {"description": "Email already registered"},
    },
)
async def register(data: RegisterRequest, service: AuthServiceDep) -> UserRead:
    """Create a student account."""
    user = await service.register(data.email, data.password, data.full_name)
    return UserRead.model_validate(user)


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={
        200: {
            "description": "Successful authentication",
            "content": {
                "application/json": {
                    "example": {
                        "access_token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                        "token_type": "bearer",
                        "expires_in": 86400,
                    }
                }
            },
        },
        401: {"description": "Invalid credentials"},
    },
)
async def login(
    login_data: LoginRequest, response: Response, service: AuthServiceDep
) -> LoginResponse:
    """Authenticate and return an access token, also set as an httpOnly cookie."""
    result = await service.authenticate(login_data.email, login_data.password)
    if result is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )

    settings = get_settings()
    response.set_cookie(
        key=settings.auth_cookie_name,
        value=result.access_token,
        max_age=result.expires_in,
        httponly=True,
        secure=settings.auth_cookie_secure,
        samesite="lax",
    )
    return result


@router.post("/logout", response_model=LogoutResponse)
async def logout(
    actor: CurrentActor, response: Response, service: AuthServiceDep
) -> LogoutResponse:
    """Clear the auth cookie and drop the cached actor."""
    await service.logout(actor)
    response.delete_cookie(get_settings().auth_cookie_name)
    return LogoutResponse()
