from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable


@dataclass(frozen=True)
class MonthBucket:
    year: int
    month: int
    income: float = 0.0
    expenses: float = 0.0

    @property
    def label(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"


def round_money(value: float | None) -> float:
    """Round a monetary float to cents; None counts as zero."""
    return round(float(value or 0), 2)


def goal_progress_percentage(current_amount: float | None, target_amount: float | None) -> float:
    """current / target * 100, clamped to [0, 100]. A missing or non-positive target is 0%."""
    if not target_amount or target_amount <= 0:
        return 0.0
    progress = float(current_amount or 0) / float(target_amount) * 100
    return round(min(100.0, max(0.0, progress)), 2)


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """First and last day of a calendar month."""
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    """Move a (year, month) pair by delta months."""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def last_n_months(today: date, months: int) -> list[tuple[int, int]]:
    """The last `months` calendar months ending with today's month, oldest first."""
    return [shift_month(today.year, today.month, -offset) for offset in range(months - 1, -1, -1)]


def bucket_by_month(
    transactions: Iterable[dict],
    months: list[tuple[int, int]],
) -> list[MonthBucket]:
    """
    Sum income (credits) and expenses (debits) per calendar month.

    Every requested month appears in the output, including months with no activity.
    Transactions outside the requested months are ignored.
    """
    totals: dict[tuple[int, int], list[float]] = {key: [0.0, 0.0] for key in months}

    for transaction in transactions:
        tx_date = transaction["date"]
        if isinstance(tx_date, str):
            tx_date = date.fromisoformat(tx_date)
        key = (tx_date.year, tx_date.month)
        if key not in totals:
            continue
        slot = 0 if transaction["type"] == "credit" else 1
        totals[key][slot] += float(transaction["amount"] or 0)

    return [
        MonthBucket(year=year, month=month, income=round_money(income), expenses=round_money(expenses))
        for (year, month), (income, expenses) in totals.items()
    ]


def trailing_week(today: date) -> tuple[date, date]:
    """The seven days ending today, inclusive."""
    return today - timedelta(days=6), today
