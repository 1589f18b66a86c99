"""Category lookup repository."""
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from app.models.banking import Category
from app.core.constants import DEFAULT_CATEGORIES


class CategoryRepository:
    """Shared category table; not scoped by user."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def list_all(self) -> list[dict]:
        result = await self._session.execute(select(Category).order_by(Category.name))
        return [category.to_dict() for category in result.scalars().all()]

    async def count(self) -> int:
        result = await self._session.execute(select(func.count(Category.id)))
        return result.scalar_one()

    async def seed_defaults(self) -> int:
        """Insert any missing default categories. Returns the number inserted."""
        result = await self._session.execute(select(Category.name))
        existing = set(result.scalars().all())

        missing = [
            Category(name=name, color=color, icon=icon, is_default=True)
            for name, color, icon in DEFAULT_CATEGORIES
            if name not in existing
        ]
        if missing:
            self._session.add_all(missing)
            await self._session.flush()
        return len(missing)
