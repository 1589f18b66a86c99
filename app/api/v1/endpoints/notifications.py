from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.database import get_db
from app.core.dependencies import get_current_user
from app.schemas.analytics import WeeklyReportData
from app.schemas.notification import (
    NotificationPreferenceData,
    NotificationPreferenceUpdateRequest,
)
from app.schemas.response import ApiResponse
from app.services.notification_service import NotificationService

preferences_router = APIRouter()
notifications_router = APIRouter()


async def get_notification_service(db: AsyncSession = Depends(get_db)) -> NotificationService:
    return NotificationService(db)


@preferences_router.get("", response_model=ApiResponse)
async def get_preferences(
    current_user: dict = Depends(get_current_user),
    service: NotificationService = Depends(get_notification_service)
):
    """Return the user's email preferences, creating the defaults on first read."""
    preferences = await service.get_preferences(current_user["id"])
    return ApiResponse(
        success=True,
        message="Notification preferences retrieved successfully",
        data=NotificationPreferenceData(**preferences)
    )


@preferences_router.patch("", response_model=ApiResponse)
async def update_preferences(
    request: NotificationPreferenceUpdateRequest,
    current_user: dict = Depends(get_current_user),
    service: NotificationService = Depends(get_notification_service)
):
    preferences = await service.update_preferences(
        current_user["id"], request.changes()
    )
    return ApiResponse(
        success=True,
        message="Notification preferences updated successfully",
        data=NotificationPreferenceData(**preferences)
    )


@notifications_router.post("/weekly-report", response_model=ApiResponse)
async def send_weekly_report(
    current_user: dict = Depends(get_current_user),
    service: NotificationService = Depends(get_notification_service)
):
    """Build the last-seven-days report and email it if the user opted in."""
    report = await service.send_weekly_report(current_user)
    return ApiResponse(
        success=True,
        message="Weekly report sent" if report["sent"] else "Weekly report generated",
        data=WeeklyReportData(**report)
    )
