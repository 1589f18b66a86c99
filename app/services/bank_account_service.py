"""Bank account management."""
import logging
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.constants import FinanceErrorDetails
from app.core.handler import AppException
from app.repositories.bank_account_repository import BankAccountRepository
from app.repositories.transaction_repository import TransactionRepository

logger = logging.getLogger(__name__)


class BankAccountService:
    """CRUD over a user's bank accounts; other users' accounts look missing."""

    def __init__(self, session: AsyncSession):
        self.accounts = BankAccountRepository(session)
        self.transactions = TransactionRepository(session)

    async def list_accounts(self, user_id: int) -> list[dict]:
        return await self.accounts.list_for_user(user_id)

    async def get_account(self, account_id: int, user_id: int) -> dict:
        account = await self.accounts.get_for_user(account_id, user_id)
        if not account:
            raise AppException(message=FinanceErrorDetails.BANK_ACCOUNT_NOT_FOUND, status_code=404)
        return account

    async def create_account(self, user_id: int, data: dict) -> dict:
        account = await self.accounts.create(user_id, data)
        logger.info(f"Created bank account id={account['id']} for user id={user_id}")
        return account

    async def update_account(self, account_id: int, user_id: int, data: dict) -> dict:
        account = await self.accounts.update(account_id, user_id, data)
        if not account:
            raise AppException(message=FinanceErrorDetails.BANK_ACCOUNT_NOT_FOUND, status_code=404)
        return account

    async def delete_account(self, account_id: int, user_id: int) -> None:
        await self.get_account(account_id, user_id)
        await self.transactions.detach_account(account_id, user_id)
        await self.accounts.delete(account_id, user_id)
        logger.info(f"Deleted bank account id={account_id} for user id={user_id}")
