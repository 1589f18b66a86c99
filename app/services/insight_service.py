"""Spending insight generation."""
import logging
from datetime import date
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.constants import FinanceErrorDetails
from app.core.handler import AppException
from app.repositories.insight_repository import InsightRepository
from app.repositories.transaction_repository import TransactionRepository
from app.services.llm import LLMService

logger = logging.getLogger(__name__)


class InsightService:
    def __init__(self, session: AsyncSession, llm_service: LLMService):
        self.insights = InsightRepository(session)
        self.transactions = TransactionRepository(session)
        self.llm = llm_service

    async def list_insights(self, user_id: int) -> list[dict]:
        return await self.insights.list_for_user(user_id)

    async def generate_insights(self, user: dict, start_date: date, end_date: date) -> list[dict]:
        """Ask the LLM for new insights over a date range and store them.

        Raises:
            AppException: 400 for an inverted range, 404 when the range has no
                transactions or the model produced nothing new
        """
        if start_date > end_date:
            raise AppException(message=FinanceErrorDetails.INVALID_DATE_RANGE, status_code=400)

        transactions = await self.transactions.list_for_user(
            user["id"], start_date=start_date, end_date=end_date
        )
        if not transactions:
            raise AppException(message=FinanceErrorDetails.NO_TRANSACTIONS, status_code=404)

        existing_titles = await self.insights.list_titles(user["id"])
        generated = await self.llm.generate_spending_insights(user, transactions, existing_titles)
        if not generated:
            raise AppException(message=FinanceErrorDetails.NO_NEW_INSIGHTS, status_code=404)

        stored = await self.insights.create_many(user["id"], generated)
        logger.info(f"Stored {len(stored)} insights for user id={user['id']}")
        return stored

    async def delete_insight(self, insight_id: int, user_id: int) -> None:
        if not await self.insights.delete(insight_id, user_id):
            raise AppException(message=FinanceErrorDetails.INSIGHT_NOT_FOUND, status_code=404)
