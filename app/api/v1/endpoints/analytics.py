from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.database import get_db
from app.core.dependencies import get_current_user
from app.schemas.analytics import (
    ExpensesByCategoryData,
    IncomeVsExpensesData,
    MonthlyTrendPoint,
)
from app.schemas.response import ApiResponse
from app.services.analytics_service import AnalyticsService

router = APIRouter()


async def get_analytics_service(db: AsyncSession = Depends(get_db)) -> AnalyticsService:
    return AnalyticsService(db)


@router.get("/expenses-by-category", response_model=ApiResponse)
async def expenses_by_category(
    year: Optional[int] = None,
    month: Optional[int] = None,
    current_user: dict = Depends(get_current_user),
    service: AnalyticsService = Depends(get_analytics_service)
):
    """Debit totals per category for a month, largest first."""
    result = await service.expenses_by_category(current_user["id"], year=year, month=month)
    return ApiResponse(
        success=True,
        message="Expenses by category retrieved successfully",
        data=ExpensesByCategoryData(**result)
    )


@router.get("/income-vs-expenses", response_model=ApiResponse)
async def income_vs_expenses(
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    current_user: dict = Depends(get_current_user),
    service: AnalyticsService = Depends(get_analytics_service)
):
    result = await service.income_vs_expenses(current_user["id"], start_date=start_date, end_date=end_date)
    return ApiResponse(
        success=True,
        message="Income vs expenses retrieved successfully",
        data=IncomeVsExpensesData(**result)
    )


@router.get("/monthly-trend", response_model=ApiResponse)
async def monthly_trend(
    months: int = Query(default=6),
    current_user: dict = Depends(get_current_user),
    service: AnalyticsService = Depends(get_analytics_service)
):
    points = await service.monthly_trend(current_user["id"], months=months)
    return ApiResponse(
        success=True,
        message="Monthly trend retrieved successfully",
        data=[MonthlyTrendPoint(**point) for point in points]
    )
