"""Bulk deletion of a user's financial data."""
import logging
from sqlalchemy.ext.asyncio import AsyncSession

from app.repositories.bank_account_repository import BankAccountRepository
from app.repositories.bank_statement_repository import BankStatementRepository
from app.repositories.goal_repository import GoalRepository
from app.repositories.insight_repository import InsightRepository
from app.repositories.transaction_repository import TransactionRepository
from app.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)


class UserDataService:
    def __init__(self, session: AsyncSession):
        self.users = UserRepository(session)
        self.accounts = BankAccountRepository(session)
        self.statements = BankStatementRepository(session)
        self.transactions = TransactionRepository(session)
        self.goals = GoalRepository(session)
        self.insights = InsightRepository(session)

    async def delete_transactions(self, user_id: int) -> dict:
        """Delete every transaction and take their effects back out of the account balances."""
        await self.accounts.revert_totals(user_id, await self.transactions.signed_totals_by_account(user_id))
        deleted = await self.transactions.delete_all_for_user(user_id)
        logger.info(f"Deleted {deleted} transactions for user id={user_id}")
        return {"transactions": deleted}

    async def delete_statements(self, user_id: int) -> dict:
        """Delete uploaded statements together with the transactions they produced."""
        await self.accounts.revert_totals(
            user_id, await self.transactions.signed_totals_by_account(user_id, statements_only=True)
        )
        transactions = await self.transactions.delete_for_statements(user_id)
        statements = await self.statements.delete_all_for_user(user_id)
        logger.info(f"Deleted {statements} statements for user id={user_id}")
        return {"statements": statements, "transactions": transactions}

    async def delete_all(self, user_id: int) -> dict:
        """Wipe every financial record of the user and clear the stored salary."""
        counts = {
            "transactions": await self.transactions.delete_all_for_user(user_id),
            "statements": await self.statements.delete_all_for_user(user_id),
            "insights": await self.insights.delete_all_for_user(user_id),
            "goals": await self.goals.delete_all_for_user(user_id),
            "bank_accounts": await self.accounts.delete_all_for_user(user_id),
        }
        await self.users.update(user_id, {"monthly_salary": None})
        logger.info(f"Deleted all financial data for user id={user_id}: {counts}")
        return counts
