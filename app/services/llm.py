"""
LLM Service - transaction categorization, spending insights and goal suggestions.

Talks to any OpenAI-compatible chat completion API (Groq by default) through the
openai SDK. Every call is a single request with no retry; failures surface as
LLMServiceError so callers decide whether to degrade or fail the request.
"""

import json
import logging
import re
from collections import defaultdict
from datetime import date
from typing import Optional

from openai import AsyncOpenAI, OpenAIError

from app.core.config import settings
from app.core.constants import (
    DEFAULT_CATEGORY_NAMES,
    FALLBACK_CATEGORY,
    FinanceErrorDetails,
    InsightType,
)
from app.core.handler import AppException

logger = logging.getLogger(__name__)

CATEGORIZE_BATCH_SIZE = 20
MAX_INSIGHTS = 5
MAX_RELEVANT_TRANSACTIONS = 5

CATEGORY_HINTS = {
    "Housing": "rent, mortgage, utilities, repairs",
    "Transportation": "fuel, public transport, vehicle maintenance",
    "Food": "groceries, restaurants, takeout",
    "Shopping": "clothing, electronics, household items",
    "Entertainment": "movies, games, subscriptions",
    "Health": "medical expenses, pharmacy, fitness",
    "Education": "tuition, books, courses",
    "Personal Care": "haircuts, cosmetics, spa",
    "Travel": "flights, hotels, vacations",
    "Insurance": "health, auto, home insurance",
    "Savings": "deposits to savings accounts",
    "Investments": "stocks, bonds, retirement",
    "Income": "salary, freelance work, refunds",
    "Gifts": "presents for others, donations",
    "Taxes": "income tax, property tax",
    "Miscellaneous": "anything that doesn't fit above",
}


class LLMServiceError(AppException):
    """Raised when the chat completion API is unavailable or returns unusable output."""

    def __init__(self, message: str = FinanceErrorDetails.LLM_REQUEST_FAILED, data: dict | None = None):
        super().__init__(message=message, status_code=500, data=data)


# =============================================================================
# Response parsing
# =============================================================================

def strip_code_fences(content: str) -> str:
    """Remove a surrounding ``` / ```json fence if the model added one."""
    content = content.strip()
    if content.startswith("```"):
        content = content.split("```")[1]
        if content.startswith("json"):
            content = content[4:]
    return content.strip()


def extract_json_array(content: str) -> list:
    """Parse the first JSON array found in a model reply."""
    match = re.search(r"\[[\s\S]*\]", strip_code_fences(content))
    if not match:
        raise LLMServiceError("LLM response did not contain a JSON array")
    try:
        parsed = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        raise LLMServiceError("LLM response contained invalid JSON") from e
    if not isinstance(parsed, list):
        raise LLMServiceError("LLM response did not contain a JSON array")
    return parsed


def normalize_category(raw: str) -> str:
    """Map a model-produced label onto a known category name."""
    label = re.sub(r"^\s*(?:\d+[.)]|[-*•])\s*", "", raw).strip().strip('"').strip()
    label = re.sub(r"^category\s*:\s*", "", label, flags=re.IGNORECASE)
    lowered = label.lower()

    for name in DEFAULT_CATEGORY_NAMES:
        if lowered == name.lower():
            return name
    for name in DEFAULT_CATEGORY_NAMES:
        if lowered.startswith(name.lower()):
            return name
    return FALLBACK_CATEGORY


def parse_category_lines(content: str) -> list[str]:
    """One category per non-empty line, in input order."""
    lines = [line.strip() for line in strip_code_fences(content).splitlines()]
    return [normalize_category(line) for line in lines if line]


def _relevant_transactions(transactions: list[dict], category: Optional[str]) -> list[dict]:
    matches = [t for t in transactions if category and t.get("category") == category]
    return [
        {
            "id": t.get("id"),
            "date": str(t.get("date")),
            "description": t.get("description"),
            "amount": t.get("amount"),
        }
        for t in matches[:MAX_RELEVANT_TRANSACTIONS]
    ]


def normalize_insights(
    raw_insights: list,
    transactions: list[dict],
    existing_titles: list[str],
) -> list[dict]:
    """Turn parsed model output into insight rows, dropping duplicates and malformed entries."""
    seen = {title.strip().lower() for title in existing_titles}
    insights = []

    for raw in raw_insights:
        if not isinstance(raw, dict):
            continue
        title = str(raw.get("title") or "").strip()[:255]
        description = str(raw.get("description") or "").strip()
        if not title or not description or title.lower() in seen:
            continue

        suggestion = str(raw.get("suggestion") or "").strip()
        if suggestion:
            description = f"{description} {suggestion}"

        insight_type = str(raw.get("type") or "").strip().lower()
        if insight_type not in {t.value for t in InsightType}:
            insight_type = InsightType.INFO.value

        category = raw.get("category")
        category = normalize_category(str(category)) if category else None

        seen.add(title.lower())
        insights.append({
            "title": title,
            "description": description,
            "type": insight_type,
            "category": category,
            "relevant_transactions": _relevant_transactions(transactions, category),
        })

        if len(insights) >= MAX_INSIGHTS:
            break

    return insights


def normalize_goals(raw_goals: list, existing_names: list[str]) -> list[dict]:
    """Turn parsed model output into goal rows; entries without a positive target are skipped."""
    seen = {name.strip().lower() for name in existing_names}
    goals = []

    for raw in raw_goals:
        if not isinstance(raw, dict):
            continue
        name = str(raw.get("name") or "").strip()[:255]
        try:
            target = float(raw.get("targetAmount", raw.get("target_amount")))
        except (TypeError, ValueError):
            continue
        if not name or target <= 0 or name.lower() in seen:
            continue

        deadline = None
        if raw.get("deadline"):
            try:
                deadline = date.fromisoformat(str(raw["deadline"])[:10])
            except ValueError:
                deadline = None

        seen.add(name.lower())
        goals.append({
            "name": name,
            "target_amount": round(target, 2),
            "current_amount": 0.0,
            "description": str(raw.get("description") or "").strip() or None,
            "deadline": deadline,
            "is_ai_generated": True,
            "status": "active",
        })

    return goals


def summarize_by_category(transactions: list[dict]) -> dict[str, dict[str, float]]:
    """Count and total per category (debits only), uncategorized rows grouped together."""
    summary: dict[str, dict[str, float]] = defaultdict(lambda: {"count": 0, "total": 0.0})
    for t in transactions:
        if t.get("type") != "debit":
            continue
        bucket = summary[t.get("category") or "Uncategorized"]
        bucket["count"] += 1
        bucket["total"] += float(t.get("amount") or 0)
    return dict(summary)


# =============================================================================
# Service
# =============================================================================

class LLMService:
    """Thin wrapper over the chat completion API."""

    def __init__(self):
        self.model = settings.LLM_MODEL
        self._client: Optional[AsyncOpenAI] = None

    @property
    def client(self) -> AsyncOpenAI:
        if self._client is None:
            if not settings.llm_configured:
                raise LLMServiceError(FinanceErrorDetails.LLM_NOT_CONFIGURED)
            self._client = AsyncOpenAI(
                api_key=settings.LLM_API_KEY,
                base_url=settings.LLM_BASE_URL,
                timeout=settings.LLM_TIMEOUT_SECONDS,
            )
        return self._client

    async def chat(self, system_prompt: str, user_prompt: str, temperature: float = 0.7) -> str:
        """Single chat completion; returns the reply text."""
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt}
                ],
                temperature=temperature
            )
        except OpenAIError as e:
            logger.error(f"[LLM] Chat completion failed: {e}")
            raise LLMServiceError() from e

        content = response.choices[0].message.content if response.choices else None
        if not content:
            raise LLMServiceError("LLM returned an empty response")
        return content.strip()

    async def categorize_transactions(self, transactions: list[dict]) -> list[dict]:
        """
        Assign a category to each transaction, in batches of 20.

        A batch whose reply does not hold exactly one category per transaction, or
        whose request fails, is returned unchanged.
        """
        categorized: list[dict] = []
        category_list = "\n".join(f"- {name} ({hint})" for name, hint in CATEGORY_HINTS.items())

        for start in range(0, len(transactions), CATEGORIZE_BATCH_SIZE):
            batch = transactions[start:start + CATEGORIZE_BATCH_SIZE]
            lines = "\n".join(
                f"Date: {t['date']}, Description: {t['description']}, Amount: {t['amount']}, Type: {t['type']}"
                for t in batch
            )
            prompt = f"""I have a list of bank transactions that need to be categorized. Assign each transaction
the most appropriate category from this list:

{category_list}

For each transaction, respond with ONLY the category name on its own line, nothing else.
Keep the same order as the input.

Transactions to categorize:
{lines}"""

            try:
                reply = await self.chat(
                    "You are a financial analysis expert who categorizes banking transactions accurately.",
                    prompt,
                    temperature=0.1,
                )
            except LLMServiceError as e:
                logger.warning(f"[LLM] Categorization batch at offset {start} skipped: {e.message}")
                categorized.extend(batch)
                continue

            categories = parse_category_lines(reply)
            if len(categories) != len(batch):
                logger.warning(
                    f"[LLM] Category count mismatch: expected {len(batch)}, got {len(categories)}"
                )
                categorized.extend(batch)
                continue

            categorized.extend({**t, "category": c} for t, c in zip(batch, categories))

        return categorized

    async def generate_spending_insights(
        self,
        user: dict,
        transactions: list[dict],
        existing_titles: Optional[list[str]] = None,
    ) -> list[dict]:
        """Generate 3-5 new insights from per-category spending totals."""
        if not transactions:
            return []
        existing_titles = existing_titles or []
        currency = user.get("currency") or "INR"

        summary = summarize_by_category(transactions)
        summary_lines = "\n".join(
            f"- {category}: {data['count']} transactions, total {currency} {data['total']:.2f}"
            for category, data in sorted(summary.items(), key=lambda item: -item[1]["total"])
        ) or "- No expenses recorded"
        salary = f"{currency} {user['monthly_salary']:.2f}" if user.get("monthly_salary") else "Unknown"

        prompt = f"""Generate actionable financial insights for a user based on their transaction data.

User Information:
- Monthly Salary: {salary}

Spending Summary by Category:
{summary_lines}

Existing Insights (do not repeat these):
{chr(10).join(existing_titles) if existing_titles else "None"}

Generate 3-5 unique, specific and actionable insights. Respond ONLY with a JSON array:
[
  {{
    "title": "Concise title (max 10 words)",
    "description": "2-3 sentence explanation",
    "category": "One category name from the summary",
    "suggestion": "Specific suggestion for improvement",
    "type": "info | warning | success"
  }}
]"""

        reply = await self.chat(
            "You are a financial advisor who provides personalized spending insights and suggestions.",
            prompt,
        )
        insights = normalize_insights(extract_json_array(reply), transactions, existing_titles)
        logger.info(f"[LLM] Generated {len(insights)} insights")
        return insights

    async def suggest_financial_goals(
        self,
        user: dict,
        transactions: list[dict],
        existing_names: Optional[list[str]] = None,
    ) -> list[dict]:
        """Suggest 3-4 savings or spending-reduction goals from recent activity."""
        if not transactions:
            return []
        existing_names = existing_names or []
        currency = user.get("currency") or "INR"

        income = sum(float(t["amount"]) for t in transactions if t["type"] == "credit")
        expenses = sum(float(t["amount"]) for t in transactions if t["type"] == "debit")
        breakdown = "\n".join(
            f"- {category}: {currency} {data['total']:.2f}"
            for category, data in summarize_by_category(transactions).items()
        ) or "- None"
        salary = f"{currency} {user['monthly_salary']:.2f}" if user.get("monthly_salary") else "Unknown"

        prompt = f"""Suggest personalized financial goals for a user based on their last three months of transactions.

User Information:
- Monthly Salary: {salary}
- Total Income: {currency} {income:.2f}
- Total Expenses: {currency} {expenses:.2f}

Expense Breakdown by Category:
{breakdown}

Existing Goals (do not repeat these):
{chr(10).join(existing_names) if existing_names else "None"}

Suggest 3-4 realistic goals mixing savings and spending reduction. Today is {date.today().isoformat()}.
Respond ONLY with a JSON array:
[
  {{
    "name": "Goal name",
    "targetAmount": 1000,
    "description": "What the goal achieves",
    "deadline": "YYYY-MM-DD"
  }}
]"""

        reply = await self.chat(
            "You are a financial planner who creates personalized financial goals.",
            prompt,
        )
        goals = normalize_goals(extract_json_array(reply), existing_names)
        logger.info(f"[LLM] Suggested {len(goals)} goals")
        return goals

    async def finance_tip(self) -> str:
        return await self.chat(
            "You are a helpful personal finance assistant.",
            "Generate a short finance tip for saving money.",
        )


_llm_service: Optional[LLMService] = None


def get_llm_service() -> LLMService:
    """FastAPI dependency returning the shared LLM service."""
    global _llm_service
    if _llm_service is None:
        _llm_service = LLMService()
    return _llm_service
