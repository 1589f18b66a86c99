"""Transaction management with running balance bookkeeping."""
import logging
from datetime import date
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.constants import FinanceErrorDetails, TransactionType
from app.core.handler import AppException
from app.repositories.bank_account_repository import BankAccountRepository
from app.repositories.transaction_repository import TransactionRepository

logger = logging.getLogger(__name__)


def signed(amount: float, tx_type: str) -> float:
    """Signed effect of a transaction on an account balance."""
    return -float(amount) if tx_type == TransactionType.DEBIT else float(amount)


class TransactionService:
    """
    Creates, edits and deletes transactions.

    When a transaction is linked to a bank account, the account balance moves by the
    transaction's signed amount, and edits apply only the difference.
    """

    def __init__(self, session: AsyncSession):
        self.transactions = TransactionRepository(session)
        self.accounts = BankAccountRepository(session)

    async def list_transactions(
        self,
        user_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        category: Optional[str] = None,
        type: Optional[str] = None,
        bank_account_id: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> list[dict]:
        if start_date and end_date and start_date > end_date:
            raise AppException(message=FinanceErrorDetails.INVALID_DATE_RANGE, status_code=400)
        return await self.transactions.list_for_user(
            user_id,
            start_date=start_date,
            end_date=end_date,
            category=category,
            type=type,
            bank_account_id=bank_account_id,
            limit=limit,
        )

    async def create_transaction(self, user_id: int, data: dict) -> dict:
        """Insert a transaction for an existing user and, if given, one of their accounts."""
        account_id = data.get("bank_account_id")
        balance = data.get("balance")

        if account_id is not None:
            account = await self.accounts.get_for_user(account_id, user_id)
            if not account:
                raise AppException(message=FinanceErrorDetails.BANK_ACCOUNT_NOT_FOUND, status_code=404)
            new_balance = await self.accounts.adjust_balance(
                account_id, user_id, signed(data["amount"], data["type"])
            )
            if balance is None:
                balance = new_balance

        transaction = await self.transactions.create({**data, "user_id": user_id, "balance": balance})
        logger.info(f"Created transaction id={transaction['id']} for user id={user_id}")
        return transaction

    async def update_transaction(self, transaction_id: int, user_id: int, data: dict) -> dict:
        existing = await self.transactions.get_for_user(transaction_id, user_id)
        if not existing:
            raise AppException(message=FinanceErrorDetails.TRANSACTION_NOT_FOUND, status_code=404)

        if existing["bank_account_id"] and ("amount" in data or "type" in data):
            before = signed(existing["amount"], existing["type"])
            after = signed(data.get("amount", existing["amount"]), data.get("type", existing["type"]))
            delta = round(after - before, 2)
            if delta:
                await self.accounts.adjust_balance(existing["bank_account_id"], user_id, delta)
                if existing["balance"] is not None:
                    data = {**data, "balance": round(existing["balance"] + delta, 2)}

        return await self.transactions.update(transaction_id, user_id, data)

    async def delete_transaction(self, transaction_id: int, user_id: int) -> None:
        existing = await self.transactions.get_for_user(transaction_id, user_id)
        if not existing:
            raise AppException(message=FinanceErrorDetails.TRANSACTION_NOT_FOUND, status_code=404)

        if existing["bank_account_id"]:
            await self.accounts.adjust_balance(
                existing["bank_account_id"], user_id, -signed(existing["amount"], existing["type"])
            )
        await self.transactions.delete(transaction_id, user_id)
