import unittest

from app.core.constants import DEFAULT_CATEGORY_NAMES
from tests.helpers import ApiTestCase


class TestCategories(ApiTestCase):
    def test_categories_are_public_and_seeded(self):
        res = self.client.get("/api/v1/categories")

        self.assertEqual(res.status_code, 200)
        names = {c["name"] for c in res.json()["data"]}
        self.assertEqual(names, set(DEFAULT_CATEGORY_NAMES))


class TestAdmin(ApiTestCase):
    def test_requires_authentication(self):
        res = self.client.get("/api/v1/admin/test-database")

        self.assertEqual(res.status_code, 401)

    def test_database_check(self):
        account = self.register()
        res = self.client.get("/api/v1/admin/test-database", headers=account["headers"])

        self.assertEqual(res.status_code, 200)
        data = res.json()["data"]
        self.assertTrue(data["connected"])
        self.assertEqual(data["category_count"], len(DEFAULT_CATEGORY_NAMES))

    def test_llm_without_key(self):
        account = self.register()
        res = self.client.post("/api/v1/admin/test-llm", headers=account["headers"])

        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.json()["message"], "LLM API key is not configured")

    def test_email_failure_is_server_error(self):
        account = self.register()
        res = self.client.post("/api/v1/admin/test-email?template=welcome", headers=account["headers"])

        # Email is disabled in tests, so sending reports failure
        self.assertEqual(res.status_code, 500)
        self.assertEqual(res.json()["message"], "Failed to send email")

    def test_unknown_email_template(self):
        account = self.register()
        res = self.client.post("/api/v1/admin/test-email?template=newsletter", headers=account["headers"])

        self.assertEqual(res.status_code, 400)


class TestNotifications(ApiTestCase):
    def test_preferences_default_to_enabled(self):
        account = self.register()
        res = self.client.get("/api/v1/notification-preferences", headers=account["headers"])

        self.assertEqual(res.status_code, 200)
        self.assertEqual(
            res.json()["data"],
            {"weekly_report": True, "bank_statement_reminder": True, "goal_progress": True, "insights": True},
        )

    def test_partial_update(self):
        account = self.register()
        res = self.client.patch(
            "/api/v1/notification-preferences",
            json={"weekly_report": False},
            headers=account["headers"],
        )

        data = res.json()["data"]
        self.assertFalse(data["weekly_report"])
        self.assertTrue(data["insights"])

    def test_null_preference_rejected(self):
        account = self.register()
        res = self.client.patch(
            "/api/v1/notification-preferences",
            json={"insights": None},
            headers=account["headers"],
        )

        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.json()["message"], "insights cannot be null")

    def test_weekly_report_not_sent_when_disabled(self):
        account = self.register()
        self.client.patch(
            "/api/v1/notification-preferences",
            json={"weekly_report": False},
            headers=account["headers"],
        )

        res = self.client.post("/api/v1/notifications/weekly-report", headers=account["headers"])

        self.assertEqual(res.status_code, 200)
        data = res.json()["data"]
        self.assertFalse(data["sent"])
        self.assertEqual((data["income"], data["expenses"], data["savings"]), (0.0, 0.0, 0.0))


class TestUserData(ApiTestCase):
    def test_delete_all_clears_financial_data(self):
        account = self.register()
        headers = account["headers"]
        self.client.patch("/api/v1/users/me", json={"monthly_salary": 50000}, headers=headers)
        self.client.post("/api/v1/bank-accounts", json={"name": "Main", "type": "savings"}, headers=headers)
        self.client.post("/api/v1/goals", json={"name": "Car", "target_amount": 500000}, headers=headers)
        self.create_transaction(headers)

        res = self.client.delete("/api/v1/user-data/all", headers=headers)

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.json()["data"]["transactions"], 1)
        for path in ("/api/v1/transactions", "/api/v1/goals", "/api/v1/bank-accounts", "/api/v1/insights"):
            self.assertEqual(self.client.get(path, headers=headers).json()["data"], [], path)
        self.assertIsNone(self.client.get("/api/v1/auth/me", headers=headers).json()["data"]["monthly_salary"])

    def test_delete_transactions_only(self):
        account = self.register()
        headers = account["headers"]
        self.create_transaction(headers)
        self.client.post("/api/v1/goals", json={"name": "Trip", "target_amount": 1000}, headers=headers)

        res = self.client.delete("/api/v1/user-data/transactions", headers=headers)

        self.assertEqual(res.json()["data"], {"transactions": 1})
        self.assertEqual(len(self.client.get("/api/v1/goals", headers=headers).json()["data"]), 1)


class TestHealth(ApiTestCase):
    def test_liveness(self):
        res = self.client.get("/api/v1/health/live")

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.json()["status"], "alive")

    def test_readiness(self):
        res = self.client.get("/api/v1/health/ready")

        self.assertEqual(res.status_code, 200)
        self.assertTrue(res.json()["checks"]["database_connected"])

    def test_comprehensive_reports_components(self):
        res = self.client.get("/api/v1/health")

        self.assertEqual(
            set(res.json()["components"]),
            {"database", "system_resources", "configuration"},
        )

    def test_configuration_details_are_typed(self):
        config = self.client.get("/api/v1/health").json()["components"]["configuration"]

        # No LLM key in tests
        self.assertEqual(config["status"], "degraded")
        self.assertFalse(config["details"]["llm_configured"])
        self.assertIn("email_provider", config["details"])
        self.assertEqual(len(config["details"]["issues"]), 1)


if __name__ == "__main__":
    unittest.main()
