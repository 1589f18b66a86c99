import asyncio
import unittest
from unittest.mock import AsyncMock, patch

from app.services.llm import (
    LLMService,
    LLMServiceError,
    extract_json_array,
    normalize_category,
    normalize_goals,
    normalize_insights,
    parse_category_lines,
)

TRANSACTIONS = [
    {"id": 1, "date": "2026-03-02", "description": "Swiggy", "amount": 450.0, "type": "debit", "category": "Food"},
    {"id": 2, "date": "2026-03-05", "description": "Uber", "amount": 300.0, "type": "debit", "category": "Transportation"},
    {"id": 3, "date": "2026-03-07", "description": "Zomato", "amount": 650.0, "type": "debit", "category": "Food"},
]


class TestResponseParsing(unittest.TestCase):
    def test_normalize_category(self):
        self.assertEqual(normalize_category("1. Food"), "Food")
        self.assertEqual(normalize_category("- category: personal care"), "Personal Care")
        self.assertEqual(normalize_category("Travel (flights)"), "Travel")
        self.assertEqual(normalize_category("Crypto"), "Miscellaneous")

    def test_parse_category_lines_skips_blanks(self):
        self.assertEqual(parse_category_lines("Food\n\nTravel\n"), ["Food", "Travel"])

    def test_extract_json_array_from_fenced_reply(self):
        reply = 'Here you go:\n```json\n[{"title": "A"}]\n```'

        self.assertEqual(extract_json_array(reply), [{"title": "A"}])

    def test_extract_json_array_without_array(self):
        with self.assertRaises(LLMServiceError):
            extract_json_array("No insights today")

    def test_normalize_insights(self):
        raw = [
            {"title": "Food adds up", "description": "You ate out a lot.", "suggestion": "Cook more.",
             "category": "Food", "type": "warning"},
            {"title": "Old insight", "description": "Seen before."},
            {"title": "", "description": "Missing title"},
            {"title": "Odd type", "description": "Text", "type": "critical"},
        ]
        insights = normalize_insights(raw, TRANSACTIONS, existing_titles=["old insight"])

        self.assertEqual([i["title"] for i in insights], ["Food adds up", "Odd type"])
        self.assertEqual(insights[0]["description"], "You ate out a lot. Cook more.")
        self.assertEqual([t["id"] for t in insights[0]["relevant_transactions"]], [1, 3])
        self.assertEqual(insights[1]["type"], "info")

    def test_normalize_goals(self):
        raw = [
            {"name": "Emergency fund", "targetAmount": 50000, "deadline": "2027-01-01"},
            {"name": "Zero", "targetAmount": 0},
            {"name": "Bad amount", "targetAmount": "lots"},
            {"name": "Vacation", "target_amount": "20000", "deadline": "soon"},
        ]
        goals = normalize_goals(raw, existing_names=[])

        self.assertEqual([g["name"] for g in goals], ["Emergency fund", "Vacation"])
        self.assertTrue(all(g["is_ai_generated"] for g in goals))
        self.assertIsNone(goals[1]["deadline"])


class TestCategorization(unittest.TestCase):
    def setUp(self):
        self.uncategorized = [{**t, "category": None} for t in TRANSACTIONS]

    def test_assigns_categories_in_order(self):
        service = LLMService()
        with patch.object(service, "chat", AsyncMock(return_value="Food\nTransportation\nFood")):
            result = asyncio.run(service.categorize_transactions(self.uncategorized))

        self.assertEqual([t["category"] for t in result], ["Food", "Transportation", "Food"])

    def test_count_mismatch_leaves_batch_unchanged(self):
        service = LLMService()
        with patch.object(service, "chat", AsyncMock(return_value="Food")):
            result = asyncio.run(service.categorize_transactions(self.uncategorized))

        self.assertEqual([t["category"] for t in result], [None, None, None])

    def test_failure_leaves_batch_unchanged(self):
        service = LLMService()
        with patch.object(service, "chat", AsyncMock(side_effect=LLMServiceError())):
            result = asyncio.run(service.categorize_transactions(self.uncategorized))

        self.assertEqual(len(result), 3)
        self.assertTrue(all(t["category"] is None for t in result))

    def test_insights_use_existing_titles(self):
        service = LLMService()
        reply = '[{"title": "Food adds up", "description": "Lots of takeout.", "category": "Food"}]'
        with patch.object(service, "chat", AsyncMock(return_value=reply)) as chat:
            insights = asyncio.run(service.generate_spending_insights(
                {"currency": "INR", "monthly_salary": None}, TRANSACTIONS, ["Earlier insight"]
            ))

        self.assertEqual(len(insights), 1)
        self.assertIn("Earlier insight", chat.call_args.args[1])


if __name__ == "__main__":
    unittest.main()
