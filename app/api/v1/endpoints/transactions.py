from datetime import date
from typing import Literal, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.database import get_db
from app.core.dependencies import get_current_user
from app.schemas.banking import (
    TransactionCreateRequest,
    TransactionData,
    TransactionUpdateRequest,
)
from app.schemas.response import ApiResponse
from app.services.transaction_service import TransactionService

router = APIRouter()


async def get_transaction_service(db: AsyncSession = Depends(get_db)) -> TransactionService:
    return TransactionService(db)


@router.get("", response_model=ApiResponse)
async def list_transactions(
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    category: Optional[str] = None,
    type: Optional[Literal["credit", "debit"]] = None,
    bank_account_id: Optional[int] = None,
    limit: Optional[int] = Query(default=None, ge=1, le=1000),
    current_user: dict = Depends(get_current_user),
    service: TransactionService = Depends(get_transaction_service)
):
    """List transactions, newest first, with optional filters."""
    transactions = await service.list_transactions(
        current_user["id"],
        start_date=start_date,
        end_date=end_date,
        category=category,
        type=type,
        bank_account_id=bank_account_id,
        limit=limit,
    )
    return ApiResponse(
        success=True,
        message="Transactions retrieved successfully",
        data=[TransactionData(**transaction) for transaction in transactions]
    )


@router.post("", response_model=ApiResponse, status_code=status.HTTP_201_CREATED)
async def create_transaction(
    request: TransactionCreateRequest,
    current_user: dict = Depends(get_current_user),
    service: TransactionService = Depends(get_transaction_service)
):
    transaction = await service.create_transaction(current_user["id"], request.model_dump())
    return ApiResponse(
        success=True,
        message="Transaction created successfully",
        data=TransactionData(**transaction)
    )


@router.patch("/{transaction_id}", response_model=ApiResponse)
async def update_transaction(
    transaction_id: int,
    request: TransactionUpdateRequest,
    current_user: dict = Depends(get_current_user),
    service: TransactionService = Depends(get_transaction_service)
):
    transaction = await service.update_transaction(
        transaction_id, current_user["id"], request.changes()
    )
    return ApiResponse(
        success=True,
        message="Transaction updated successfully",
        data=TransactionData(**transaction)
    )


@router.delete("/{transaction_id}", response_model=ApiResponse)
async def delete_transaction(
    transaction_id: int,
    current_user: dict = Depends(get_current_user),
    service: TransactionService = Depends(get_transaction_service)
):
    await service.delete_transaction(transaction_id, current_user["id"])
    return ApiResponse(success=True, message="Transaction deleted successfully", data={})
