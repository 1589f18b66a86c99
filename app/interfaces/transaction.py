from abc import ABC, abstractmethod
from datetime import date
from typing import Optional


class ITransactionRepository(ABC):
    @abstractmethod
    async def list_for_user(
        self,
        user_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        category: Optional[str] = None,
        type: Optional[str] = None,
        bank_account_id: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> list[dict]:
        """List a user's transactions, newest first."""
        pass

    @abstractmethod
    async def get_for_user(self, transaction_id: int, user_id: int) -> Optional[dict]:
        """Retrieve a transaction only if it belongs to the user."""
        pass

    @abstractmethod
    async def create(self, transaction_data: dict) -> dict:
        """Insert a transaction and return it."""
        pass

    @abstractmethod
    async def create_many(self, transactions: list[dict]) -> list[dict]:
        """Insert a batch of transactions, preserving order."""
        pass

    @abstractmethod
    async def sum_by_category(self, user_id: int, start_date: date, end_date: date) -> list[dict]:
        """Total debit amount per non-null category, largest first."""
        pass

    @abstractmethod
    async def totals_by_type(self, user_id: int, start_date: date, end_date: date) -> dict[str, float]:
        """Total credit and debit amounts over an inclusive date range."""
        pass

    @abstractmethod
    async def signed_totals_by_account(
        self,
        user_id: int,
        statement_id: Optional[int] = None,
        statements_only: bool = False,
    ) -> dict[int, float]:
        """Net balance effect per linked bank account for a user's (statement) rows."""
        pass
