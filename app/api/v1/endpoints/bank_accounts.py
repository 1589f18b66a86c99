from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.database import get_db
from app.core.dependencies import get_current_user
from app.schemas.banking import (
    BankAccountCreateRequest,
    BankAccountData,
    BankAccountUpdateRequest,
)
from app.schemas.response import ApiResponse
from app.services.bank_account_service import BankAccountService

router = APIRouter()


async def get_bank_account_service(db: AsyncSession = Depends(get_db)) -> BankAccountService:
    return BankAccountService(db)


@router.get("", response_model=ApiResponse)
async def list_bank_accounts(
    current_user: dict = Depends(get_current_user),
    service: BankAccountService = Depends(get_bank_account_service)
):
    accounts = await service.list_accounts(current_user["id"])
    return ApiResponse(
        success=True,
        message="Bank accounts retrieved successfully",
        data=[BankAccountData(**account) for account in accounts]
    )


@router.post("", response_model=ApiResponse, status_code=status.HTTP_201_CREATED)
async def create_bank_account(
    request: BankAccountCreateRequest,
    current_user: dict = Depends(get_current_user),
    service: BankAccountService = Depends(get_bank_account_service)
):
    account = await service.create_account(current_user["id"], request.model_dump())
    return ApiResponse(
        success=True,
        message="Bank account created successfully",
        data=BankAccountData(**account)
    )


@router.get("/{account_id}", response_model=ApiResponse)
async def get_bank_account(
    account_id: int,
    current_user: dict = Depends(get_current_user),
    service: BankAccountService = Depends(get_bank_account_service)
):
    account = await service.get_account(account_id, current_user["id"])
    return ApiResponse(
        success=True,
        message="Bank account retrieved successfully",
        data=BankAccountData(**account)
    )


@router.patch("/{account_id}", response_model=ApiResponse)
async def update_bank_account(
    account_id: int,
    request: BankAccountUpdateRequest,
    current_user: dict = Depends(get_current_user),
    service: BankAccountService = Depends(get_bank_account_service)
):
    account = await service.update_account(
        account_id, current_user["id"], request.changes()
    )
    return ApiResponse(
        success=True,
        message="Bank account updated successfully",
        data=BankAccountData(**account)
    )


@router.delete("/{account_id}", response_model=ApiResponse)
async def delete_bank_account(
    account_id: int,
    current_user: dict = Depends(get_current_user),
    service: BankAccountService = Depends(get_bank_account_service)
):
    """Delete an account; its transactions are kept but unlinked."""
    await service.delete_account(account_id, current_user["id"])
    return ApiResponse(success=True, message="Bank account deleted successfully", data={})
