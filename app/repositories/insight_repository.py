"""Insight repository."""
from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession
from app.models.financial import Insight


class InsightRepository:
    """SQLAlchemy repository for generated insights."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def list_for_user(self, user_id: int) -> list[dict]:
        stmt = (
            select(Insight)
            .where(Insight.user_id == user_id)
            .order_by(Insight.created_at.desc(), Insight.id.desc())
        )
        result = await self._session.execute(stmt)
        return [insight.to_dict() for insight in result.scalars().all()]

    async def list_titles(self, user_id: int) -> list[str]:
        result = await self._session.execute(
            select(Insight.title).where(Insight.user_id == user_id)
        )
        return list(result.scalars().all())

    async def create_many(self, user_id: int, insights: list[dict]) -> list[dict]:
        models = [
            Insight(
                user_id=user_id,
                title=data["title"],
                description=data["description"],
                type=data.get("type") or "info",
                category=data.get("category"),
                relevant_transactions=data.get("relevant_transactions"),
            )
            for data in insights
        ]
        self._session.add_all(models)
        await self._session.flush()
        return [model.to_dict() for model in models]

    async def delete(self, insight_id: int, user_id: int) -> bool:
        result = await self._session.execute(
            delete(Insight).where(Insight.id == insight_id, Insight.user_id == user_id)
        )
        return result.rowcount > 0

    async def delete_all_for_user(self, user_id: int) -> int:
        result = await self._session.execute(delete(Insight).where(Insight.user_id == user_id))
        return result.rowcount
