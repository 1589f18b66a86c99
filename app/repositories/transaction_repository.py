"""Transaction repository, including the aggregation queries behind analytics."""
from datetime import date
from typing import Optional
from sqlalchemy import select, delete, update, func, case
from sqlalchemy.ext.asyncio import AsyncSession
from app.interfaces.transaction import ITransactionRepository
from app.models.banking import Transaction
from app.core.constants import TransactionType

UPDATABLE_FIELDS = {"date", "description", "category", "amount", "type", "reference", "balance"}


class TransactionRepository(ITransactionRepository):
    """PostgreSQL implementation of transaction repository using SQLAlchemy."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def _get_model(self, transaction_id: int, user_id: int) -> Optional[Transaction]:
        stmt = select(Transaction).where(
            Transaction.id == transaction_id, Transaction.user_id == user_id
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

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
        stmt = select(Transaction).where(Transaction.user_id == user_id)
        if start_date:
            stmt = stmt.where(Transaction.date >= start_date)
        if end_date:
            stmt = stmt.where(Transaction.date <= end_date)
        if category:
            stmt = stmt.where(Transaction.category == category)
        if type:
            stmt = stmt.where(Transaction.type == type)
        if bank_account_id:
            stmt = stmt.where(Transaction.bank_account_id == bank_account_id)

        stmt = stmt.order_by(Transaction.date.desc(), Transaction.id.desc())
        if limit:
            stmt = stmt.limit(limit)

        result = await self._session.execute(stmt)
        return [transaction.to_dict() for transaction in result.scalars().all()]

    async def get_for_user(self, transaction_id: int, user_id: int) -> Optional[dict]:
        """Retrieve a transaction only if it belongs to the user."""
        transaction = await self._get_model(transaction_id, user_id)
        return transaction.to_dict() if transaction else None

    def _build(self, data: dict) -> Transaction:
        return Transaction(
            user_id=data["user_id"],
            bank_account_id=data.get("bank_account_id"),
            bank_statement_id=data.get("bank_statement_id"),
            date=data["date"],
            description=data["description"],
            category=data.get("category"),
            amount=data["amount"],
            type=data["type"],
            reference=data.get("reference"),
            balance=data.get("balance"),
        )

    async def create(self, transaction_data: dict) -> dict:
        """Insert a transaction and return it."""
        transaction = self._build(transaction_data)
        self._session.add(transaction)
        await self._session.flush()
        await self._session.refresh(transaction)
        return transaction.to_dict()

    async def create_many(self, transactions: list[dict]) -> list[dict]:
        """Insert a batch of transactions, preserving order."""
        models = [self._build(data) for data in transactions]
        self._session.add_all(models)
        await self._session.flush()
        return [model.to_dict() for model in models]

    async def update(self, transaction_id: int, user_id: int, values: dict) -> Optional[dict]:
        transaction = await self._get_model(transaction_id, user_id)
        if not transaction:
            return None

        for field, value in values.items():
            if field in UPDATABLE_FIELDS:
                setattr(transaction, field, value)

        await self._session.flush()
        await self._session.refresh(transaction)
        return transaction.to_dict()

    async def set_categories(self, categories: dict[int, str]) -> None:
        """Bulk-assign categories keyed by transaction id."""
        for transaction_id, category in categories.items():
            await self._session.execute(
                update(Transaction)
                .where(Transaction.id == transaction_id)
                .values(category=category)
            )
        await self._session.flush()

    async def delete(self, transaction_id: int, user_id: int) -> bool:
        result = await self._session.execute(
            delete(Transaction).where(
                Transaction.id == transaction_id, Transaction.user_id == user_id
            )
        )
        return result.rowcount > 0

    @staticmethod
    def _scope(user_id: int, statement_id: Optional[int] = None, statements_only: bool = False) -> list:
        """Filter for one user's rows, optionally one statement or all statement-imported rows."""
        conditions = [Transaction.user_id == user_id]
        if statement_id is not None:
            conditions.append(Transaction.bank_statement_id == statement_id)
        elif statements_only:
            conditions.append(Transaction.bank_statement_id.is_not(None))
        return conditions

    async def signed_totals_by_account(
        self,
        user_id: int,
        statement_id: Optional[int] = None,
        statements_only: bool = False,
    ) -> dict[int, float]:
        """Net balance effect (credits minus debits) per linked account for the scoped rows."""
        net = func.sum(
            case((Transaction.type == TransactionType.DEBIT.value, -Transaction.amount), else_=Transaction.amount)
        ).label("net")
        stmt = (
            select(Transaction.bank_account_id, net)
            .where(
                Transaction.bank_account_id.is_not(None),
                *self._scope(user_id, statement_id, statements_only),
            )
            .group_by(Transaction.bank_account_id)
        )
        result = await self._session.execute(stmt)
        return {row.bank_account_id: round(float(row.net or 0), 2) for row in result.all()}

    async def delete_all_for_user(self, user_id: int) -> int:
        result = await self._session.execute(delete(Transaction).where(*self._scope(user_id)))
        return result.rowcount

    async def delete_for_statement(self, statement_id: int, user_id: int) -> int:
        result = await self._session.execute(
            delete(Transaction).where(*self._scope(user_id, statement_id=statement_id))
        )
        return result.rowcount

    async def delete_for_statements(self, user_id: int) -> int:
        """Delete every transaction that came from an uploaded statement."""
        result = await self._session.execute(
            delete(Transaction).where(*self._scope(user_id, statements_only=True))
        )
        return result.rowcount

    async def detach_account(self, bank_account_id: int, user_id: int) -> None:
        """Unlink transactions from a bank account that is about to be deleted."""
        await self._session.execute(
            update(Transaction)
            .where(
                Transaction.bank_account_id == bank_account_id,
                Transaction.user_id == user_id,
            )
            .values(bank_account_id=None)
        )

    async def sum_by_category(self, user_id: int, start_date: date, end_date: date) -> list[dict]:
        """Total debit amount per non-null category, largest first."""
        total = func.sum(Transaction.amount).label("total")
        stmt = (
            select(Transaction.category, total, func.count(Transaction.id).label("count"))
            .where(
                Transaction.user_id == user_id,
                Transaction.type == TransactionType.DEBIT.value,
                Transaction.category.is_not(None),
                Transaction.date >= start_date,
                Transaction.date <= end_date,
            )
            .group_by(Transaction.category)
            .order_by(total.desc())
        )
        result = await self._session.execute(stmt)
        return [
            {"category": row.category, "total": round(float(row.total or 0), 2), "count": row.count}
            for row in result.all()
        ]

    async def totals_by_type(self, user_id: int, start_date: date, end_date: date) -> dict[str, float]:
        """Total credit and debit amounts over an inclusive date range."""
        stmt = (
            select(Transaction.type, func.coalesce(func.sum(Transaction.amount), 0).label("total"))
            .where(
                Transaction.user_id == user_id,
                Transaction.date >= start_date,
                Transaction.date <= end_date,
            )
            .group_by(Transaction.type)
        )
        result = await self._session.execute(stmt)
        totals = {TransactionType.CREDIT.value: 0.0, TransactionType.DEBIT.value: 0.0}
        for row in result.all():
            totals[row.type] = round(float(row.total or 0), 2)
        return totals
