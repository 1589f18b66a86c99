import unittest
from datetime import date, timedelta
from unittest.mock import AsyncMock, patch

from app.services.finance_calculators import goal_progress_percentage
from app.services.llm import LLMService
from tests.helpers import ApiTestCase

DEADLINE = (date.today() + timedelta(days=180)).isoformat()
SUGGESTIONS = (
    f'[{{"name": "Emergency cushion", "targetAmount": 30000, "description": "Three months of rent", '
    f'"deadline": "{DEADLINE}"}}, {{"name": "Dining cutback", "targetAmount": 2000}}]'
)


class TestGoalProgressPercentage(unittest.TestCase):
    def test_partial_progress(self):
        self.assertEqual(goal_progress_percentage(250, 1000), 25.0)

    def test_clamped_to_hundred(self):
        self.assertEqual(goal_progress_percentage(1500, 1000), 100.0)

    def test_zero_or_missing_target(self):
        self.assertEqual(goal_progress_percentage(100, 0), 0.0)
        self.assertEqual(goal_progress_percentage(100, None), 0.0)

    def test_rounded_to_two_places(self):
        self.assertEqual(goal_progress_percentage(1, 3), 33.33)


class TestGoalsApi(ApiTestCase):
    def _create_goal(self, headers: dict, **overrides) -> dict:
        payload = {"name": "Emergency Fund", "target_amount": 1000, "current_amount": 100}
        payload.update(overrides)
        res = self.client.post("/api/v1/goals", json=payload, headers=headers)
        self.assertEqual(res.status_code, 201, res.text)
        return res.json()["data"]

    def test_create_reports_progress(self):
        account = self.register()
        goal = self._create_goal(account["headers"])

        self.assertEqual(goal["progress_percentage"], 10.0)
        self.assertEqual(goal["status"], "active")
        self.assertFalse(goal["is_ai_generated"])

    def test_non_positive_target_rejected(self):
        account = self.register()
        for target in (0, -50):
            res = self.client.post(
                "/api/v1/goals",
                json={"name": "Bad", "target_amount": target},
                headers=account["headers"],
            )
            self.assertEqual(res.status_code, 400)
            self.assertEqual(res.json()["message"], "Target amount must be greater than zero")

    def test_reaching_target_completes_goal(self):
        account = self.register()
        goal = self._create_goal(account["headers"])

        res = self.client.patch(
            f"/api/v1/goals/{goal['id']}",
            json={"current_amount": 1200},
            headers=account["headers"],
        )

        self.assertEqual(res.status_code, 200)
        data = res.json()["data"]
        self.assertEqual(data["progress_percentage"], 100.0)
        self.assertEqual(data["status"], "completed")

    def test_other_users_goal_not_found(self):
        owner = self.register()
        other = self.register()
        goal = self._create_goal(owner["headers"])

        res = self.client.patch(f"/api/v1/goals/{goal['id']}", json={"name": "Mine"}, headers=other["headers"])
        self.assertEqual(res.status_code, 404)

        res = self.client.delete(f"/api/v1/goals/{goal['id']}", headers=other["headers"])
        self.assertEqual(res.status_code, 404)

    def test_list_and_delete(self):
        account = self.register()
        goal = self._create_goal(account["headers"])

        res = self.client.get("/api/v1/goals", headers=account["headers"])
        self.assertEqual([g["id"] for g in res.json()["data"]], [goal["id"]])

        res = self.client.delete(f"/api/v1/goals/{goal['id']}", headers=account["headers"])
        self.assertEqual(res.status_code, 200)
        self.assertEqual(self.client.get("/api/v1/goals", headers=account["headers"]).json()["data"], [])

    def test_suggest_without_transactions(self):
        account = self.register()
        res = self.client.post("/api/v1/goals/suggest", json={"save_goals": False}, headers=account["headers"])

        self.assertEqual(res.status_code, 404)

    def test_null_current_amount_rejected(self):
        account = self.register()
        goal = self._create_goal(account["headers"])

        res = self.client.patch(
            f"/api/v1/goals/{goal['id']}",
            json={"current_amount": None},
            headers=account["headers"],
        )

        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.json()["message"], "current_amount cannot be null")
        goals = self.client.get("/api/v1/goals", headers=account["headers"]).json()["data"]
        self.assertEqual(goals[0]["current_amount"], 100.0)

    def test_progress_email_follows_preference(self):
        account = self.register()
        goal = self._create_goal(account["headers"])

        with patch("app.services.goal_service.send_goal_progress_email", AsyncMock(return_value=True)) as send:
            self.client.patch(
                f"/api/v1/goals/{goal['id']}", json={"current_amount": 300}, headers=account["headers"]
            )
            self.assertEqual(send.await_count, 1)
            self.assertEqual(send.await_args.args[1]["current_amount"], 300.0)

            self.client.patch(
                "/api/v1/notification-preferences", json={"goal_progress": False}, headers=account["headers"]
            )
            self.client.patch(
                f"/api/v1/goals/{goal['id']}", json={"current_amount": 400}, headers=account["headers"]
            )
            self.assertEqual(send.await_count, 1)

    def test_progress_email_only_when_amount_changes(self):
        account = self.register()
        goal = self._create_goal(account["headers"])

        with patch("app.services.goal_service.send_goal_progress_email", AsyncMock(return_value=True)) as send:
            self.client.patch(f"/api/v1/goals/{goal['id']}", json={"name": "Rainy day"}, headers=account["headers"])

        send.assert_not_awaited()

    def test_suggestions_returned_without_saving(self):
        account = self.register()
        self.create_transaction(account["headers"], date=date.today().isoformat())

        with patch.object(LLMService, "chat", AsyncMock(return_value=SUGGESTIONS)):
            res = self.client.post("/api/v1/goals/suggest", json={"save_goals": False}, headers=account["headers"])

        self.assertEqual(res.status_code, 200, res.text)
        goals = res.json()["data"]
        self.assertEqual([g["name"] for g in goals], ["Emergency cushion", "Dining cutback"])
        self.assertEqual(goals[0]["deadline"], DEADLINE)
        self.assertIsNone(goals[1]["deadline"])
        self.assertTrue(all(g["progress_percentage"] == 0.0 for g in goals))
        self.assertEqual(self.client.get("/api/v1/goals", headers=account["headers"]).json()["data"], [])

    def test_saved_suggestions_are_ai_generated(self):
        account = self.register()
        self.create_transaction(account["headers"], date=date.today().isoformat())

        with patch.object(LLMService, "chat", AsyncMock(return_value=SUGGESTIONS)):
            res = self.client.post("/api/v1/goals/suggest", json={"save_goals": True}, headers=account["headers"])

        self.assertEqual(res.status_code, 200, res.text)
        saved = self.client.get("/api/v1/goals", headers=account["headers"]).json()["data"]
        self.assertEqual(len(saved), 2)
        self.assertTrue(all(g["is_ai_generated"] for g in saved))
        self.assertEqual({g["id"] for g in saved}, {g["id"] for g in res.json()["data"]})


if __name__ == "__main__":
    unittest.main()
