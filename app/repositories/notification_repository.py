"""Notification preference repository."""
from typing import Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from app.models.user import NotificationPreference

PREFERENCE_FIELDS = ("weekly_report", "bank_statement_reminder", "goal_progress", "insights")


class NotificationPreferenceRepository:
    """Stores one preference row per user."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def _get_model(self, user_id: int) -> Optional[NotificationPreference]:
        stmt = select(NotificationPreference).where(NotificationPreference.user_id == user_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_user(self, user_id: int) -> Optional[dict]:
        """Retrieve a user's preferences if they exist."""
        prefs = await self._get_model(user_id)
        return prefs.to_dict() if prefs else None

    async def get_or_create(self, user_id: int) -> dict:
        """Return the user's preferences, creating the all-enabled defaults if missing."""
        prefs = await self._get_model(user_id)
        if prefs:
            return prefs.to_dict()
        return await self.upsert(user_id, {})

    async def upsert(self, user_id: int, values: dict) -> dict:
        """Create or update the user's preferences."""
        prefs = await self._get_model(user_id)
        if prefs is None:
            prefs = NotificationPreference(
                user_id=user_id,
                weekly_report=True,
                bank_statement_reminder=True,
                goal_progress=True,
                insights=True,
            )
            self._session.add(prefs)

        for field in PREFERENCE_FIELDS:
            if values.get(field) is not None:
                setattr(prefs, field, bool(values[field]))

        await self._session.flush()
        await self._session.refresh(prefs)
        return prefs.to_dict()

    async def is_enabled(self, user_id: int, field: str) -> bool:
        """Whether a given email type is enabled; missing rows count as enabled."""
        prefs = await self._get_model(user_id)
        return True if prefs is None else bool(getattr(prefs, field))
