"""User repository implementation using PostgreSQL."""
from typing import Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from app.interfaces.user import IUserRepository
from app.models.user import User

UPDATABLE_FIELDS = {"name", "hashed_password", "currency", "monthly_salary"}


class UserRepository(IUserRepository):
    """PostgreSQL implementation of user repository using SQLAlchemy."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_by_id(self, user_id: int) -> Optional[dict]:
        """Retrieve a user by primary key."""
        user = await self._session.get(User, user_id)
        return user.to_dict() if user else None

    async def get_by_email(self, email: str) -> Optional[dict]:
        """Retrieve a user by email."""
        stmt = select(User).where(User.email == email)
        result = await self._session.execute(stmt)
        user = result.scalar_one_or_none()
        return user.to_dict() if user else None

    async def create(self, user_data: dict) -> dict:
        """Insert a new user and return it."""
        user = User(
            name=user_data["name"],
            email=user_data["email"],
            hashed_password=user_data["hashed_password"],
            currency=user_data.get("currency") or "INR",
            monthly_salary=user_data.get("monthly_salary"),
        )

        self._session.add(user)
        await self._session.flush()
        await self._session.refresh(user)
        return user.to_dict()

    async def update(self, user_id: int, values: dict) -> Optional[dict]:
        """Update the given columns and return the refreshed user."""
        user = await self._session.get(User, user_id)
        if not user:
            return None

        for field, value in values.items():
            if field in UPDATABLE_FIELDS:
                setattr(user, field, value)

        await self._session.flush()
        await self._session.refresh(user)
        return user.to_dict()
