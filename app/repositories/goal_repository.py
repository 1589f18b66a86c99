"""Goal repository."""
from typing import Optional
from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession
from app.models.financial import Goal

UPDATABLE_FIELDS = {"name", "target_amount", "current_amount", "deadline", "description", "status"}


class GoalRepository:
    """SQLAlchemy repository for savings goals."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def _get_model(self, goal_id: int, user_id: int) -> Optional[Goal]:
        stmt = select(Goal).where(Goal.id == goal_id, Goal.user_id == user_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_for_user(self, user_id: int) -> list[dict]:
        stmt = select(Goal).where(Goal.user_id == user_id).order_by(Goal.created_at.desc(), Goal.id.desc())
        result = await self._session.execute(stmt)
        return [goal.to_dict() for goal in result.scalars().all()]

    async def get_for_user(self, goal_id: int, user_id: int) -> Optional[dict]:
        goal = await self._get_model(goal_id, user_id)
        return goal.to_dict() if goal else None

    async def create(self, user_id: int, goal_data: dict) -> dict:
        goal = Goal(
            user_id=user_id,
            name=goal_data["name"],
            target_amount=goal_data["target_amount"],
            current_amount=goal_data.get("current_amount") or 0,
            deadline=goal_data.get("deadline"),
            description=goal_data.get("description"),
            is_ai_generated=goal_data.get("is_ai_generated", False),
            status=goal_data.get("status") or "active",
        )
        self._session.add(goal)
        await self._session.flush()
        await self._session.refresh(goal)
        return goal.to_dict()

    async def update(self, goal_id: int, user_id: int, values: dict) -> Optional[dict]:
        goal = await self._get_model(goal_id, user_id)
        if not goal:
            return None

        for field, value in values.items():
            if field in UPDATABLE_FIELDS:
                setattr(goal, field, value)

        await self._session.flush()
        await self._session.refresh(goal)
        return goal.to_dict()

    async def delete(self, goal_id: int, user_id: int) -> bool:
        result = await self._session.execute(
            delete(Goal).where(Goal.id == goal_id, Goal.user_id == user_id)
        )
        return result.rowcount > 0

    async def delete_all_for_user(self, user_id: int) -> int:
        result = await self._session.execute(delete(Goal).where(Goal.user_id == user_id))
        return result.rowcount
