import unittest
from datetime import date

from app.services.finance_calculators import (
    bucket_by_month,
    last_n_months,
    month_bounds,
    trailing_week,
)
from tests.helpers import ApiTestCase


class TestMonthBucketing(unittest.TestCase):
    def test_last_n_months_crosses_year(self):
        self.assertEqual(
            last_n_months(date(2026, 1, 15), 3),
            [(2025, 11), (2025, 12), (2026, 1)],
        )

    def test_empty_months_are_present(self):
        transactions = [
            {"date": "2026-01-03", "amount": 100.0, "type": "credit"},
            {"date": date(2026, 3, 9), "amount": 40.25, "type": "debit"},
            {"date": "2025-12-31", "amount": 999.0, "type": "debit"},
        ]
        buckets = bucket_by_month(transactions, [(2026, 1), (2026, 2), (2026, 3)])

        self.assertEqual([b.label for b in buckets], ["2026-01", "2026-02", "2026-03"])
        self.assertEqual(buckets[0].income, 100.0)
        self.assertEqual((buckets[1].income, buckets[1].expenses), (0.0, 0.0))
        self.assertEqual(buckets[2].expenses, 40.25)

    def test_month_bounds_leap_year(self):
        self.assertEqual(month_bounds(2028, 2), (date(2028, 2, 1), date(2028, 2, 29)))

    def test_trailing_week_is_seven_days(self):
        self.assertEqual(trailing_week(date(2026, 3, 10)), (date(2026, 3, 4), date(2026, 3, 10)))


class TestAnalyticsApi(ApiTestCase):
    def setUp(self):
        self.account = self.register()
        headers = self.account["headers"]
        self.create_transaction(headers, date="2026-03-02", amount=250.0, category="Food")
        self.create_transaction(headers, date="2026-03-12", amount=100.5, category="Food")
        self.create_transaction(headers, date="2026-03-20", amount=1000.0, category="Travel")
        self.create_transaction(headers, date="2026-03-25", amount=75.0, category=None)
        self.create_transaction(headers, date="2026-03-01", amount=5000.0, type="credit", category="Income")
        self.create_transaction(headers, date="2026-04-01", amount=60.0, category="Food")

    def test_expenses_by_category(self):
        res = self.client.get(
            "/api/v1/analytics/expenses-by-category?year=2026&month=3",
            headers=self.account["headers"],
        )

        self.assertEqual(res.status_code, 200)
        data = res.json()["data"]
        self.assertEqual(
            [(c["category"], c["total"], c["count"]) for c in data["categories"]],
            [("Travel", 1000.0, 1), ("Food", 350.5, 2)],
        )
        self.assertEqual(data["total"], 1350.5)

    def test_invalid_year_and_month(self):
        res = self.client.get(
            "/api/v1/analytics/expenses-by-category?year=9999&month=3",
            headers=self.account["headers"],
        )
        self.assertEqual(res.status_code, 400)

        res = self.client.get(
            "/api/v1/analytics/expenses-by-category?year=2026&month=13",
            headers=self.account["headers"],
        )
        self.assertEqual(res.status_code, 400)

    def test_income_vs_expenses(self):
        res = self.client.get(
            "/api/v1/analytics/income-vs-expenses?start_date=2026-03-01&end_date=2026-03-31",
            headers=self.account["headers"],
        )

        data = res.json()["data"]
        self.assertEqual(data["income"], 5000.0)
        self.assertEqual(data["expenses"], 1425.5)
        self.assertEqual(data["net_savings"], 3574.5)

    def test_income_vs_expenses_inverted_range(self):
        res = self.client.get(
            "/api/v1/analytics/income-vs-expenses?start_date=2026-03-31&end_date=2026-03-01",
            headers=self.account["headers"],
        )

        self.assertEqual(res.status_code, 400)

    def test_monthly_trend_has_every_month(self):
        other = self.register()
        res = self.client.get("/api/v1/analytics/monthly-trend?months=4", headers=other["headers"])

        points = res.json()["data"]
        self.assertEqual(len(points), 4)
        self.assertTrue(all(p["income"] == 0 and p["expenses"] == 0 for p in points))
        self.assertEqual(points, sorted(points, key=lambda p: p["month"]))

    def test_monthly_trend_rejects_zero_months(self):
        res = self.client.get("/api/v1/analytics/monthly-trend?months=0", headers=self.account["headers"])

        self.assertEqual(res.status_code, 400)


if __name__ == "__main__":
    unittest.main()
