"""
Goal Service - single entry point for goal operations.

Every goal leaving this service carries a progress_percentage. Reaching the target
completes an active goal, and progress changes notify the user by email when their
goal_progress preference is on.
"""

import logging
from datetime import date, timedelta
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.constants import FinanceErrorDetails, GoalStatus
from app.core.handler import AppException
from app.repositories.goal_repository import GoalRepository
from app.repositories.notification_repository import NotificationPreferenceRepository
from app.repositories.transaction_repository import TransactionRepository
from app.services.email import send_goal_progress_email
from app.services.finance_calculators import goal_progress_percentage
from app.services.llm import LLMService

logger = logging.getLogger("goal_service")

SUGGESTION_LOOKBACK_DAYS = 90


def with_progress(goal: dict) -> dict:
    return {
        **goal,
        "progress_percentage": goal_progress_percentage(goal["current_amount"], goal["target_amount"]),
    }


class GoalService:
    """Goal CRUD plus LLM-backed suggestions."""

    def __init__(self, session: AsyncSession, llm_service: LLMService | None = None):
        self.goals = GoalRepository(session)
        self.preferences = NotificationPreferenceRepository(session)
        self.transactions = TransactionRepository(session)
        self.llm = llm_service

    @staticmethod
    def _check_target(target_amount) -> None:
        if target_amount is None or target_amount <= 0:
            raise AppException(
                message=FinanceErrorDetails.INVALID_TARGET_AMOUNT,
                status_code=400,
                data={"target_amount": target_amount}
            )

    async def list_goals(self, user_id: int) -> list[dict]:
        return [with_progress(goal) for goal in await self.goals.list_for_user(user_id)]

    async def get_goal(self, goal_id: int, user_id: int) -> dict:
        goal = await self.goals.get_for_user(goal_id, user_id)
        if not goal:
            raise AppException(message=FinanceErrorDetails.GOAL_NOT_FOUND, status_code=404)
        return with_progress(goal)

    async def create_goal(self, user_id: int, data: dict) -> dict:
        self._check_target(data.get("target_amount"))
        if (data.get("current_amount") or 0) >= data["target_amount"]:
            data = {**data, "status": GoalStatus.COMPLETED.value}

        goal = await self.goals.create(user_id, data)
        logger.info(f"Created goal id={goal['id']} for user id={user_id}")
        return with_progress(goal)

    async def update_goal(self, user: dict, goal_id: int, data: dict) -> dict:
        """Apply a partial update, completing the goal once the target is reached."""
        existing = await self.get_goal(goal_id, user["id"])
        if "target_amount" in data:
            self._check_target(data["target_amount"])

        values = dict(data)
        target = values.get("target_amount", existing["target_amount"])
        current = values.get("current_amount", existing["current_amount"])
        status = values.get("status", existing["status"])
        if status == GoalStatus.ACTIVE and current >= target:
            values["status"] = GoalStatus.COMPLETED.value

        goal = with_progress(await self.goals.update(goal_id, user["id"], values))

        progress_changed = (
            "current_amount" in data and data["current_amount"] != existing["current_amount"]
        )
        if progress_changed and await self.preferences.is_enabled(user["id"], "goal_progress"):
            await send_goal_progress_email(user, goal)

        return goal

    async def delete_goal(self, goal_id: int, user_id: int) -> None:
        if not await self.goals.delete(goal_id, user_id):
            raise AppException(message=FinanceErrorDetails.GOAL_NOT_FOUND, status_code=404)

    async def suggest_goals(self, user: dict, save_goals: bool = False, today: date | None = None) -> list[dict]:
        """Ask the LLM for goals based on the last three months of activity."""
        today = today or date.today()
        transactions = await self.transactions.list_for_user(
            user["id"],
            start_date=today - timedelta(days=SUGGESTION_LOOKBACK_DAYS),
            end_date=today,
        )
        if not transactions:
            raise AppException(message=FinanceErrorDetails.NO_TRANSACTIONS, status_code=404)

        existing_names = [goal["name"] for goal in await self.goals.list_for_user(user["id"])]
        suggestions = await self.llm.suggest_financial_goals(user, transactions, existing_names)

        if not save_goals:
            return [
                {**goal, "deadline": goal["deadline"].isoformat() if goal["deadline"] else None,
                 "progress_percentage": 0.0}
                for goal in suggestions
            ]

        saved = [with_progress(await self.goals.create(user["id"], goal)) for goal in suggestions]
        logger.info(f"Saved {len(saved)} suggested goals for user id={user['id']}")
        return saved
