"""Bank account repository."""
from typing import Optional
from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession
from app.models.banking import BankAccount

UPDATABLE_FIELDS = {"name", "type", "account_number", "balance", "color", "short_code"}


class BankAccountRepository:
    """SQLAlchemy repository for bank accounts, always scoped by owner."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def _get_model(self, account_id: int, user_id: int) -> Optional[BankAccount]:
        stmt = select(BankAccount).where(
            BankAccount.id == account_id, BankAccount.user_id == user_id
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_for_user(self, user_id: int) -> list[dict]:
        stmt = select(BankAccount).where(BankAccount.user_id == user_id).order_by(BankAccount.id)
        result = await self._session.execute(stmt)
        return [account.to_dict() for account in result.scalars().all()]

    async def get_for_user(self, account_id: int, user_id: int) -> Optional[dict]:
        """Retrieve an account only if it belongs to the user."""
        account = await self._get_model(account_id, user_id)
        return account.to_dict() if account else None

    async def get_by_account_number(self, account_number: str) -> Optional[dict]:
        """Retrieve any user's account by its number (used for statement matching)."""
        stmt = select(BankAccount).where(BankAccount.account_number == account_number).limit(1)
        result = await self._session.execute(stmt)
        account = result.scalar_one_or_none()
        return account.to_dict() if account else None

    async def create(self, user_id: int, account_data: dict) -> dict:
        account = BankAccount(
            user_id=user_id,
            name=account_data["name"],
            type=account_data["type"],
            account_number=account_data.get("account_number"),
            balance=account_data.get("balance") or 0,
            color=account_data.get("color"),
            short_code=account_data.get("short_code"),
        )
        self._session.add(account)
        await self._session.flush()
        await self._session.refresh(account)
        return account.to_dict()

    async def update(self, account_id: int, user_id: int, values: dict) -> Optional[dict]:
        account = await self._get_model(account_id, user_id)
        if not account:
            return None

        for field, value in values.items():
            if field in UPDATABLE_FIELDS:
                setattr(account, field, value)

        await self._session.flush()
        await self._session.refresh(account)
        return account.to_dict()

    async def adjust_balance(self, account_id: int, user_id: int, delta: float) -> Optional[float]:
        """Apply a signed delta to the running balance and return the new balance."""
        account = await self._get_model(account_id, user_id)
        if not account:
            return None

        account.balance = round((account.balance or 0) + delta, 2)
        await self._session.flush()
        return account.balance

    async def revert_totals(self, user_id: int, totals: dict[int, float]) -> None:
        """Take per-account net transaction effects back out of the balances."""
        for account_id, net in totals.items():
            if net:
                await self.adjust_balance(account_id, user_id, -net)

    async def delete(self, account_id: int, user_id: int) -> bool:
        stmt = delete(BankAccount).where(
            BankAccount.id == account_id, BankAccount.user_id == user_id
        )
        result = await self._session.execute(stmt)
        return result.rowcount > 0

    async def delete_all_for_user(self, user_id: int) -> int:
        result = await self._session.execute(
            delete(BankAccount).where(BankAccount.user_id == user_id)
        )
        return result.rowcount
