"""Spending analytics over a user's transactions."""
from datetime import date
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.constants import FinanceErrorDetails, TransactionType
from app.core.handler import AppException
from app.repositories.transaction_repository import TransactionRepository
from app.services.finance_calculators import (
    bucket_by_month,
    last_n_months,
    month_bounds,
    round_money,
)

MAX_TREND_MONTHS = 24


class AnalyticsService:
    def __init__(self, session: AsyncSession):
        self.transactions = TransactionRepository(session)

    async def expenses_by_category(
        self,
        user_id: int,
        year: int | None = None,
        month: int | None = None,
        today: date | None = None,
    ) -> dict:
        """Debit totals per category for one calendar month (current month by default)."""
        today = today or date.today()
        year = today.year if year is None else year
        month = today.month if month is None else month

        if year > today.year + 1:
            raise AppException(message=FinanceErrorDetails.INVALID_YEAR, status_code=400, data={"year": year})
        if year < 1:
            raise AppException(message="Year must be positive", status_code=400, data={"year": year})
        if not 1 <= month <= 12:
            raise AppException(message="Month must be between 1 and 12", status_code=400, data={"month": month})

        start, end = month_bounds(year, month)
        categories = await self.transactions.sum_by_category(user_id, start, end)
        return {
            "year": year,
            "month": month,
            "total": round_money(sum(c["total"] for c in categories)),
            "categories": categories,
        }

    async def income_vs_expenses(
        self,
        user_id: int,
        start_date: date | None = None,
        end_date: date | None = None,
        today: date | None = None,
    ) -> dict:
        today = today or date.today()
        default_start, default_end = month_bounds(today.year, today.month)
        start_date = start_date or default_start
        end_date = end_date or default_end
        if start_date > end_date:
            raise AppException(message=FinanceErrorDetails.INVALID_DATE_RANGE, status_code=400)

        totals = await self.transactions.totals_by_type(user_id, start_date, end_date)
        income = totals[TransactionType.CREDIT.value]
        expenses = totals[TransactionType.DEBIT.value]
        return {
            "start_date": start_date,
            "end_date": end_date,
            "income": income,
            "expenses": expenses,
            "net_savings": round_money(income - expenses),
        }

    async def monthly_trend(self, user_id: int, months: int = 6, today: date | None = None) -> list[dict]:
        """Income and expenses for each of the last `months` calendar months, oldest first."""
        today = today or date.today()
        if not 1 <= months <= MAX_TREND_MONTHS:
            raise AppException(
                message=f"Months must be between 1 and {MAX_TREND_MONTHS}",
                status_code=400,
                data={"months": months}
            )

        keys = last_n_months(today, months)
        start, _ = month_bounds(*keys[0])
        _, end = month_bounds(*keys[-1])
        transactions = await self.transactions.list_for_user(user_id, start_date=start, end_date=end)

        return [
            {"month": bucket.label, "income": bucket.income, "expenses": bucket.expenses}
            for bucket in bucket_by_month(transactions, keys)
        ]
