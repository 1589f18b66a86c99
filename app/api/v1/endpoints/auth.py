from datetime import timedelta
from fastapi import APIRouter, Response, status, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from app.schemas.user import (
    UserLoginRequest,
    UserRegisterRequest,
    TokenResponse,
    UserData
)
from app.schemas.response import ApiResponse
from app.services.auth import AuthService
from app.repositories.user_repository import UserRepository
from app.repositories.notification_repository import NotificationPreferenceRepository
from app.core.config import settings
from app.core.database import get_db
from app.core.dependencies import (
    check_login_rate_limit,
    check_register_rate_limit,
    get_current_user
)

router = APIRouter()


async def get_auth_service(db: AsyncSession = Depends(get_db)) -> AuthService:
    """Dependency injection for AuthService with database repositories."""
    return AuthService(
        user_repository=UserRepository(db),
        preference_repository=NotificationPreferenceRepository(db)
    )


def _set_access_cookie(response: Response, token: str) -> None:
    access_token_expires = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    response.set_cookie(
        key="access_token",
        value=token,
        httponly=settings.COOKIE_HTTP_ONLY,
        secure=settings.COOKIE_SECURE,
        samesite=settings.COOKIE_SAME_SITE,
        max_age=int(access_token_expires.total_seconds())
    )


@router.post("/register", response_model=ApiResponse, status_code=status.HTTP_201_CREATED)
async def register(
    user: UserRegisterRequest,
    response: Response,
    _: None = Depends(check_register_rate_limit),
    auth_service: AuthService = Depends(get_auth_service)
):
    """Create an account and log the new user in."""
    result = await auth_service.register_user(
        name=user.name,
        email=user.email,
        password=user.password,
        currency=user.currency
    )
    _set_access_cookie(response, result["access_token"])

    return ApiResponse(
        success=True,
        message="Registration successful",
        data=TokenResponse(
            user=UserData(**result["user"]),
            access_token=result["access_token"]
        )
    )


@router.post("/login", response_model=ApiResponse, status_code=status.HTTP_200_OK)
async def login(
    user: UserLoginRequest,
    response: Response,
    _: None = Depends(check_login_rate_limit),
    auth_service: AuthService = Depends(get_auth_service)
):
    """Login user and return a JWT."""
    result = await auth_service.login_user(user.email, user.password)
    _set_access_cookie(response, result["access_token"])

    return ApiResponse(
        success=True,
        message="Login successful",
        data=TokenResponse(
            user=UserData(**result["user"]),
            access_token=result["access_token"]
        )
    )


@router.post("/logout", response_model=ApiResponse, status_code=status.HTTP_200_OK)
async def logout(response: Response):
    """Logout user by clearing the token cookie."""
    response.delete_cookie(
        key="access_token",
        httponly=settings.COOKIE_HTTP_ONLY,
        secure=settings.COOKIE_SECURE,
        samesite=settings.COOKIE_SAME_SITE
    )

    return ApiResponse(
        success=True,
        message="Logged out successfully",
        data={}
    )


@router.get("/me", response_model=ApiResponse, status_code=status.HTTP_200_OK)
async def get_me(current_user: dict = Depends(get_current_user)):
    """Get current authenticated user information."""
    return ApiResponse(
        success=True,
        message="User retrieved successfully",
        data=UserData(**current_user)
    )
