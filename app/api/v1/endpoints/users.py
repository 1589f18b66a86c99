from fastapi import APIRouter, Depends, status
from app.api.v1.endpoints.auth import get_auth_service
from app.core.dependencies import get_current_user
from app.schemas.response import ApiResponse
from app.schemas.user import UserData, UserUpdateRequest
from app.services.auth import AuthService

router = APIRouter()


@router.patch("/me", response_model=ApiResponse, status_code=status.HTTP_200_OK)
async def update_me(
    request: UserUpdateRequest,
    current_user: dict = Depends(get_current_user),
    auth_service: AuthService = Depends(get_auth_service)
):
    """Update profile fields such as name, currency or monthly salary."""
    user = await auth_service.update_profile(
        current_user["id"], request.changes()
    )
    return ApiResponse(
        success=True,
        message="Profile updated successfully",
        data=UserData(**user)
    )
