"""Bank statement repository."""
from datetime import date
from typing import Optional
from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession
from app.models.banking import BankStatement


class BankStatementRepository:
    """SQLAlchemy repository for uploaded statements."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def list_for_user(self, user_id: int) -> list[dict]:
        stmt = (
            select(BankStatement)
            .where(BankStatement.user_id == user_id)
            .order_by(BankStatement.uploaded_at.desc(), BankStatement.id.desc())
        )
        result = await self._session.execute(stmt)
        return [statement.to_dict() for statement in result.scalars().all()]

    async def get_for_user(self, statement_id: int, user_id: int) -> Optional[dict]:
        stmt = select(BankStatement).where(
            BankStatement.id == statement_id, BankStatement.user_id == user_id
        )
        result = await self._session.execute(stmt)
        statement = result.scalar_one_or_none()
        return statement.to_dict() if statement else None

    async def create(
        self,
        user_id: int,
        file_name: str,
        start_date: date,
        end_date: date,
        bank_account_id: Optional[int] = None,
    ) -> dict:
        statement = BankStatement(
            user_id=user_id,
            bank_account_id=bank_account_id,
            file_name=file_name,
            start_date=start_date,
            end_date=end_date,
            processed=False,
        )
        self._session.add(statement)
        await self._session.flush()
        await self._session.refresh(statement)
        return statement.to_dict()

    async def mark_processed(self, statement_id: int) -> Optional[dict]:
        statement = await self._session.get(BankStatement, statement_id)
        if not statement:
            return None
        statement.processed = True
        await self._session.flush()
        await self._session.refresh(statement)
        return statement.to_dict()

    async def delete(self, statement_id: int, user_id: int) -> bool:
        result = await self._session.execute(
            delete(BankStatement).where(
                BankStatement.id == statement_id, BankStatement.user_id == user_id
            )
        )
        return result.rowcount > 0

    async def delete_all_for_user(self, user_id: int) -> int:
        result = await self._session.execute(
            delete(BankStatement).where(BankStatement.user_id == user_id)
        )
        return result.rowcount
