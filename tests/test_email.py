import asyncio
import unittest

from app.services.email import (
    build_analysis_complete_email,
    build_goal_progress_email,
    build_weekly_report_email,
    build_welcome_email,
    send_email,
)


class TestEmailTemplates(unittest.TestCase):
    def test_user_values_are_escaped(self):
        _, html_body, text_body = build_welcome_email("<script>alert(1)</script>")

        self.assertNotIn("<script>", html_body)
        self.assertIn("&lt;script&gt;", html_body)
        # Plain text keeps the raw value
        self.assertIn("<script>", text_body)

    def test_weekly_report_amounts(self):
        subject, html_body, text_body = build_weekly_report_email(
            "Asha", income=52000, expenses=31250.5, savings=20749.5, currency="INR",
            insights=[{"title": "Dining & drinks", "description": "Up 20%"}],
        )

        self.assertEqual(subject, "Your Weekly Financial Report")
        self.assertIn("INR 52,000.00", html_body)
        self.assertIn("Dining &amp; drinks", html_body)
        self.assertIn("Savings: INR 20,749.50", text_body)

    def test_goal_progress_is_clamped(self):
        _, html_body, text_body = build_goal_progress_email(
            "Asha", {"name": "Bike", "target_amount": 100, "current_amount": 250}
        )

        self.assertIn("width: 100%", html_body)
        self.assertIn("100.0% complete", text_body)

    def test_analysis_complete_counts(self):
        _, _, text_body = build_analysis_complete_email("Asha", 42, [{"title": "A", "description": "B"}])

        self.assertIn("42 transactions, 1 insights", text_body)


class TestSendEmail(unittest.TestCase):
    def test_disabled_email_is_skipped(self):
        self.assertFalse(asyncio.run(send_email("someone@example.com", "Hi", "<p>Hi</p>")))


if __name__ == "__main__":
    unittest.main()
