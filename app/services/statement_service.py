"""
Statement upload pipeline.

A PDF is parsed into transactions, matched to (or creates) a bank account by
account number, stored, categorized by the LLM and summarized into insights.
"""
import asyncio
import logging
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.constants import FinanceErrorDetails
from app.core.handler import AppException
from app.repositories.bank_account_repository import BankAccountRepository
from app.repositories.bank_statement_repository import BankStatementRepository
from app.repositories.insight_repository import InsightRepository
from app.repositories.notification_repository import NotificationPreferenceRepository
from app.repositories.transaction_repository import TransactionRepository
from app.services.email import send_analysis_complete_email
from app.services.llm import LLMService, LLMServiceError
from app.services.statement_parser import ParsedStatement, parse_statement_pdf

logger = logging.getLogger(__name__)


class StatementService:
    def __init__(self, session: AsyncSession, llm_service: LLMService):
        self.statements = BankStatementRepository(session)
        self.accounts = BankAccountRepository(session)
        self.transactions = TransactionRepository(session)
        self.insights = InsightRepository(session)
        self.preferences = NotificationPreferenceRepository(session)
        self.llm = llm_service

    async def list_statements(self, user_id: int) -> list[dict]:
        return await self.statements.list_for_user(user_id)

    async def _resolve_account(self, user_id: int, parsed: ParsedStatement) -> dict:
        """Find the user's account for the statement, creating one on first upload."""
        if parsed.account_number:
            account = await self.accounts.get_by_account_number(parsed.account_number)
            if account:
                if account["user_id"] != user_id:
                    raise AppException(
                        message=FinanceErrorDetails.BANK_ACCOUNT_FORBIDDEN,
                        status_code=403
                    )
                return account

        suffix = parsed.account_number[-4:] if parsed.account_number else ""
        account = await self.accounts.create(user_id, {
            "name": f"{parsed.bank_type.value} Account {suffix}".strip(),
            "type": "savings",
            "account_number": parsed.account_number or None,
            "short_code": parsed.bank_type.value,
        })
        logger.info(f"[Statements] Created account id={account['id']} from statement upload")
        return account

    async def upload_statement(self, user: dict, file_name: str, content: bytes) -> dict:
        """
        Run the full upload pipeline for one PDF.

        Categorization and insight generation degrade to a logged warning; parsing
        and ownership errors fail the request.

        Returns:
            Dictionary with the statement, transaction count and new insights
        """
        user_id = user["id"]
        parsed = await asyncio.to_thread(parse_statement_pdf, content)
        account = await self._resolve_account(user_id, parsed)

        statement = await self.statements.create(
            user_id=user_id,
            file_name=file_name,
            start_date=parsed.start_date,
            end_date=parsed.end_date,
            bank_account_id=account["id"],
        )

        stored = await self.transactions.create_many([
            {
                **transaction.to_dict(),
                "user_id": user_id,
                "bank_account_id": account["id"],
                "bank_statement_id": statement["id"],
            }
            for transaction in parsed.transactions
        ])

        categorized = await self.llm.categorize_transactions(stored)
        await self.transactions.set_categories({
            t["id"]: t["category"] for t in categorized if t.get("category")
        })

        insights: list[dict] = []
        try:
            existing_titles = await self.insights.list_titles(user_id)
            generated = await self.llm.generate_spending_insights(user, categorized, existing_titles)
            insights = await self.insights.create_many(user_id, generated)
        except LLMServiceError as e:
            logger.warning(f"[Statements] Insight generation skipped for statement {statement['id']}: {e.message}")

        closing_balance = parsed.closing_balance
        if closing_balance is not None:
            await self.accounts.update(account["id"], user_id, {"balance": closing_balance})

        statement = await self.statements.mark_processed(statement["id"])

        if await self.preferences.is_enabled(user_id, "insights"):
            await send_analysis_complete_email(user, len(stored), insights)

        logger.info(
            f"[Statements] Processed statement id={statement['id']} with {len(stored)} transactions"
        )
        return {
            "statement": statement,
            "transaction_count": len(stored),
            "insights": insights,
        }

    async def delete_statement(self, statement_id: int, user_id: int) -> None:
        statement = await self.statements.get_for_user(statement_id, user_id)
        if not statement:
            raise AppException(message=FinanceErrorDetails.STATEMENT_NOT_FOUND, status_code=404)

        totals = await self.transactions.signed_totals_by_account(user_id, statement_id=statement_id)
        await self.accounts.revert_totals(user_id, totals)
        removed = await self.transactions.delete_for_statement(statement_id, user_id)
        await self.statements.delete(statement_id, user_id)
        logger.info(f"[Statements] Deleted statement id={statement_id} and {removed} transactions")
