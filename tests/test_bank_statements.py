import unittest
from unittest.mock import patch

from app.services.statement_parser import parse_statement_text
from tests.helpers import ApiTestCase
from tests.test_statement_parser import HDFC_STATEMENT

PDF_FILE = ("march.pdf", b"%PDF-1.4 placeholder", "application/pdf")


class TestStatementUpload(ApiTestCase):
    def _upload(self, headers: dict):
        with patch(
            "app.services.statement_service.parse_statement_pdf",
            return_value=parse_statement_text(HDFC_STATEMENT),
        ):
            return self.client.post(
                "/api/v1/bank-statements/upload",
                files={"file": PDF_FILE},
                headers=headers,
            )

    def test_upload_creates_account_and_transactions(self):
        account = self.register()
        res = self._upload(account["headers"])

        self.assertEqual(res.status_code, 201, res.text)
        data = res.json()["data"]
        self.assertEqual(data["transaction_count"], 3)
        self.assertTrue(data["statement"]["processed"])
        # No LLM key in tests: insights degrade to an empty list
        self.assertEqual(data["insights"], [])

        banks = self.client.get("/api/v1/bank-accounts", headers=account["headers"]).json()["data"]
        self.assertEqual(len(banks), 1)
        self.assertEqual(banks[0]["account_number"], "50100123456789")
        self.assertEqual(banks[0]["balance"], 56750.0)

        transactions = self.client.get("/api/v1/transactions", headers=account["headers"]).json()["data"]
        self.assertEqual(len(transactions), 3)
        self.assertTrue(all(t["bank_statement_id"] == data["statement"]["id"] for t in transactions))

    def test_second_upload_reuses_account(self):
        account = self.register()
        self._upload(account["headers"])
        self._upload(account["headers"])

        banks = self.client.get("/api/v1/bank-accounts", headers=account["headers"]).json()["data"]
        self.assertEqual(len(banks), 1)

    def test_account_number_of_another_user_is_forbidden(self):
        owner = self.register()
        other = self.register()
        self._upload(owner["headers"])

        res = self._upload(other["headers"])

        self.assertEqual(res.status_code, 403)

    def test_non_pdf_rejected(self):
        account = self.register()
        res = self.client.post(
            "/api/v1/bank-statements/upload",
            files={"file": ("notes.txt", b"hello", "text/plain")},
            headers=account["headers"],
        )

        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.json()["message"], "Only PDF files are allowed")

    def test_unreadable_pdf_is_bad_request(self):
        account = self.register()
        res = self.client.post(
            "/api/v1/bank-statements/upload",
            files={"file": PDF_FILE},
            headers=account["headers"],
        )

        self.assertEqual(res.status_code, 400)

    def test_delete_removes_statement_transactions(self):
        account = self.register()
        statement = self._upload(account["headers"]).json()["data"]["statement"]
        self.create_transaction(account["headers"], description="Manual entry")

        res = self.client.delete(f"/api/v1/bank-statements/{statement['id']}", headers=account["headers"])
        self.assertEqual(res.status_code, 200)

        transactions = self.client.get("/api/v1/transactions", headers=account["headers"]).json()["data"]
        self.assertEqual([t["description"] for t in transactions], ["Manual entry"])
        self.assertEqual(self.client.get("/api/v1/bank-statements", headers=account["headers"]).json()["data"], [])

    def test_delete_returns_account_to_opening_balance(self):
        account = self.register()
        statement = self._upload(account["headers"]).json()["data"]["statement"]

        self.client.delete(f"/api/v1/bank-statements/{statement['id']}", headers=account["headers"])

        # Closing 56,750 less the statement's net +46,750
        banks = self.client.get("/api/v1/bank-accounts", headers=account["headers"]).json()["data"]
        self.assertEqual(banks[0]["balance"], 10000.0)

    def test_bulk_statement_delete_keeps_manual_entries_in_balance(self):
        account = self.register()
        self._upload(account["headers"])
        bank = self.client.get("/api/v1/bank-accounts", headers=account["headers"]).json()["data"][0]
        self.create_transaction(account["headers"], bank_account_id=bank["id"], amount=750.0)

        res = self.client.delete("/api/v1/user-data/statements", headers=account["headers"])

        self.assertEqual(res.json()["data"], {"statements": 1, "transactions": 3})
        res = self.client.get(f"/api/v1/bank-accounts/{bank['id']}", headers=account["headers"])
        self.assertEqual(res.json()["data"]["balance"], 9250.0)

    def test_delete_missing_statement(self):
        account = self.register()
        res = self.client.delete("/api/v1/bank-statements/987654", headers=account["headers"])

        self.assertEqual(res.status_code, 404)


if __name__ == "__main__":
    unittest.main()
