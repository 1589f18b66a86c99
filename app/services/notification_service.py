"""Notification preferences and the on-demand weekly report."""
import logging
from datetime import date
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.constants import TransactionType
from app.repositories.insight_repository import InsightRepository
from app.repositories.notification_repository import NotificationPreferenceRepository
from app.repositories.transaction_repository import TransactionRepository
from app.services.email import send_weekly_report_email
from app.services.finance_calculators import round_money, trailing_week

logger = logging.getLogger(__name__)

WEEKLY_REPORT_INSIGHTS = 3


class NotificationService:
    def __init__(self, session: AsyncSession):
        self.preferences = NotificationPreferenceRepository(session)
        self.transactions = TransactionRepository(session)
        self.insights = InsightRepository(session)

    async def get_preferences(self, user_id: int) -> dict:
        return await self.preferences.get_or_create(user_id)

    async def update_preferences(self, user_id: int, values: dict) -> dict:
        return await self.preferences.upsert(user_id, values)

    async def send_weekly_report(self, user: dict, today: date | None = None) -> dict:
        """Summarize the last seven days and email it when the user allows weekly reports."""
        start, end = trailing_week(today or date.today())
        totals = await self.transactions.totals_by_type(user["id"], start, end)
        income = totals[TransactionType.CREDIT.value]
        expenses = totals[TransactionType.DEBIT.value]
        savings = round_money(income - expenses)

        sent = False
        if await self.preferences.is_enabled(user["id"], "weekly_report"):
            insights = (await self.insights.list_for_user(user["id"]))[:WEEKLY_REPORT_INSIGHTS]
            sent = await send_weekly_report_email(user, income, expenses, savings, insights)
        else:
            logger.info(f"Weekly report disabled for user id={user['id']}")

        return {
            "start_date": start,
            "end_date": end,
            "income": income,
            "expenses": expenses,
            "savings": savings,
            "sent": sent,
        }
