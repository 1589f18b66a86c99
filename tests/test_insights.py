import unittest
from unittest.mock import AsyncMock, patch

from app.services.llm import LLMService
from tests.helpers import ApiTestCase

GENERATED = [
    {
        "title": "Groceries dominate spending",
        "description": "Food is your largest category. Plan weekly meals.",
        "type": "warning",
        "category": "Food",
        "relevant_transactions": [],
    }
]

MARCH = {"start_date": "2026-03-01", "end_date": "2026-03-31"}


class TestInsights(ApiTestCase):
    def test_generate_and_delete(self):
        account = self.register()
        headers = account["headers"]
        self.create_transaction(headers)

        with patch.object(LLMService, "generate_spending_insights", AsyncMock(return_value=GENERATED)):
            res = self.client.post("/api/v1/insights/generate", json=MARCH, headers=headers)

        self.assertEqual(res.status_code, 201, res.text)
        insight = res.json()["data"][0]
        self.assertEqual(insight["title"], "Groceries dominate spending")
        self.assertEqual(len(self.client.get("/api/v1/insights", headers=headers).json()["data"]), 1)

        res = self.client.delete(f"/api/v1/insights/{insight['id']}", headers=headers)
        self.assertEqual(res.status_code, 200)
        self.assertEqual(self.client.get("/api/v1/insights", headers=headers).json()["data"], [])

    def test_nothing_new_is_not_found(self):
        account = self.register()
        self.create_transaction(account["headers"])

        with patch.object(LLMService, "generate_spending_insights", AsyncMock(return_value=[])):
            res = self.client.post("/api/v1/insights/generate", json=MARCH, headers=account["headers"])

        self.assertEqual(res.status_code, 404)

    def test_no_transactions_in_range(self):
        account = self.register()
        res = self.client.post("/api/v1/insights/generate", json=MARCH, headers=account["headers"])

        self.assertEqual(res.status_code, 404)
        self.assertEqual(res.json()["message"], "No transactions found for the selected period")

    def test_inverted_range(self):
        account = self.register()
        res = self.client.post(
            "/api/v1/insights/generate",
            json={"start_date": "2026-03-31", "end_date": "2026-03-01"},
            headers=account["headers"],
        )

        self.assertEqual(res.status_code, 400)

    def test_delete_missing_insight(self):
        account = self.register()
        res = self.client.delete("/api/v1/insights/424242", headers=account["headers"])

        self.assertEqual(res.status_code, 404)


if __name__ == "__main__":
    unittest.main()
