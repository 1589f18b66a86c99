"""Operator self-tests for email, LLM and database connectivity."""
import logging
from datetime import date
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.constants import EmailTemplate, FinanceErrorDetails
from app.core.database import db_manager
from app.core.handler import AppException
from app.repositories.category_repository import CategoryRepository
from app.services import email
from app.services.llm import LLMService

logger = logging.getLogger(__name__)

SAMPLE_INSIGHTS = [
    {
        "title": "Dining out is your top expense",
        "description": "Food spending rose this month. Try cooking at home twice a week.",
        "type": "warning",
    },
    {
        "title": "Savings on track",
        "description": "You saved more than last month. Keep it up.",
        "type": "success",
    },
]

SAMPLE_GOAL = {
    "name": "Emergency Fund",
    "target_amount": 100000.0,
    "current_amount": 45000.0,
    "deadline": date(date.today().year + 1, 1, 1).isoformat(),
}


class AdminService:
    def __init__(self, session: AsyncSession, llm_service: LLMService):
        self.categories = CategoryRepository(session)
        self.llm = llm_service

    async def send_test_email(self, user: dict, template: EmailTemplate) -> None:
        """Send one template filled with sample data to the current user."""
        if template == EmailTemplate.TEST:
            sent = await email.send_test_email(user["email"])
        elif template == EmailTemplate.WELCOME:
            sent = await email.send_welcome_email(user)
        elif template == EmailTemplate.WEEKLY_REPORT:
            sent = await email.send_weekly_report_email(user, 52000.0, 31250.5, 20749.5, SAMPLE_INSIGHTS)
        elif template == EmailTemplate.UPLOAD_REMINDER:
            sent = await email.send_upload_reminder_email(user)
        elif template == EmailTemplate.ANALYSIS_COMPLETE:
            sent = await email.send_analysis_complete_email(user, 42, SAMPLE_INSIGHTS)
        else:
            sent = await email.send_goal_progress_email(user, SAMPLE_GOAL)

        if not sent:
            raise AppException(
                message=FinanceErrorDetails.EMAIL_FAILED,
                status_code=500,
                data={"template": template.value, "email_enabled": settings.EMAIL_ENABLED}
            )
        logger.info(f"[Admin] Sent {template.value} test email to user id={user['id']}")

    async def test_llm(self) -> str:
        if not settings.llm_configured:
            raise AppException(message=FinanceErrorDetails.LLM_NOT_CONFIGURED, status_code=400)
        return await self.llm.finance_tip()

    async def test_database(self) -> dict:
        return {
            "connected": await db_manager.check_connection(),
            "dialect": db_manager.dialect_name,
            "category_count": await self.categories.count(),
        }
