from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.database import get_db
from app.core.dependencies import get_current_user
from app.schemas.response import ApiResponse
from app.services.user_data_service import UserDataService

router = APIRouter()


async def get_user_data_service(db: AsyncSession = Depends(get_db)) -> UserDataService:
    return UserDataService(db)


@router.delete("/transactions", response_model=ApiResponse)
async def delete_transactions(
    current_user: dict = Depends(get_current_user),
    service: UserDataService = Depends(get_user_data_service)
):
    deleted = await service.delete_transactions(current_user["id"])
    return ApiResponse(success=True, message="Transactions deleted successfully", data=deleted)


@router.delete("/statements", response_model=ApiResponse)
async def delete_statements(
    current_user: dict = Depends(get_current_user),
    service: UserDataService = Depends(get_user_data_service)
):
    deleted = await service.delete_statements(current_user["id"])
    return ApiResponse(success=True, message="Bank statements deleted successfully", data=deleted)


@router.delete("/all", response_model=ApiResponse)
async def delete_all_data(
    current_user: dict = Depends(get_current_user),
    service: UserDataService = Depends(get_user_data_service)
):
    """Delete every financial record of the user; the account itself is kept."""
    deleted = await service.delete_all(current_user["id"])
    return ApiResponse(success=True, message="All financial data deleted successfully", data=deleted)
