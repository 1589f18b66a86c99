"""Schemas for analytics aggregates."""
import datetime as dt
from pydantic import BaseModel


class CategoryTotal(BaseModel):
    category: str
    total: float
    count: int


class ExpensesByCategoryData(BaseModel):
    year: int
    month: int
    total: float
    categories: list[CategoryTotal]


class IncomeVsExpensesData(BaseModel):
    start_date: dt.date
    end_date: dt.date
    income: float
    expenses: float
    net_savings: float


class MonthlyTrendPoint(BaseModel):
    month: str  # YYYY-MM
    income: float
    expenses: float


class WeeklyReportData(BaseModel):
    start_date: dt.date
    end_date: dt.date
    income: float
    expenses: float
    savings: float
    sent: bool
