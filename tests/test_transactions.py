import unittest

from tests.helpers import ApiTestCase


class TestTransactions(ApiTestCase):
    def _create_account(self, headers: dict, balance: float = 1000.0) -> dict:
        res = self.client.post(
            "/api/v1/bank-accounts",
            json={"name": "Everyday", "type": "savings", "balance": balance},
            headers=headers,
        )
        self.assertEqual(res.status_code, 201, res.text)
        return res.json()["data"]

    def _balance(self, headers: dict, account_id: int) -> float:
        res = self.client.get(f"/api/v1/bank-accounts/{account_id}", headers=headers)
        self.assertEqual(res.status_code, 200)
        return res.json()["data"]["balance"]

    def test_create_without_account(self):
        account = self.register()
        transaction = self.create_transaction(account["headers"])

        self.assertEqual(transaction["amount"], 250.0)
        self.assertEqual(transaction["signed_amount"], -250.0)
        self.assertIsNone(transaction["bank_account_id"])

    def test_create_moves_account_balance(self):
        account = self.register()
        bank = self._create_account(account["headers"])

        transaction = self.create_transaction(account["headers"], bank_account_id=bank["id"])

        self.assertEqual(transaction["balance"], 750.0)
        self.assertEqual(self._balance(account["headers"], bank["id"]), 750.0)

    def test_update_applies_difference_and_delete_reverses(self):
        account = self.register()
        bank = self._create_account(account["headers"])
        transaction = self.create_transaction(account["headers"], bank_account_id=bank["id"])

        res = self.client.patch(
            f"/api/v1/transactions/{transaction['id']}",
            json={"amount": 300.0},
            headers=account["headers"],
        )
        self.assertEqual(res.status_code, 200)
        self.assertEqual(self._balance(account["headers"], bank["id"]), 700.0)

        res = self.client.patch(
            f"/api/v1/transactions/{transaction['id']}",
            json={"type": "credit"},
            headers=account["headers"],
        )
        self.assertEqual(res.status_code, 200)
        self.assertEqual(self._balance(account["headers"], bank["id"]), 1300.0)

        res = self.client.delete(f"/api/v1/transactions/{transaction['id']}", headers=account["headers"])
        self.assertEqual(res.status_code, 200)
        self.assertEqual(self._balance(account["headers"], bank["id"]), 1000.0)

    def test_foreign_account_is_not_found(self):
        owner = self.register()
        intruder = self.register()
        bank = self._create_account(owner["headers"])

        res = self.client.post(
            "/api/v1/transactions",
            json={
                "date": "2026-03-01",
                "description": "Sneaky",
                "amount": 10,
                "type": "debit",
                "bank_account_id": bank["id"],
            },
            headers=intruder["headers"],
        )

        self.assertEqual(res.status_code, 404)
        self.assertEqual(res.json()["message"], "Bank account not found")
        self.assertEqual(self._balance(owner["headers"], bank["id"]), 1000.0)

    def test_missing_account_is_not_found(self):
        account = self.register()
        res = self.client.post(
            "/api/v1/transactions",
            json={
                "date": "2026-03-01",
                "description": "Nowhere",
                "amount": 10,
                "type": "debit",
                "bank_account_id": 987654,
            },
            headers=account["headers"],
        )

        self.assertEqual(res.status_code, 404)

    def test_non_positive_amount_rejected(self):
        account = self.register()
        res = self.client.post(
            "/api/v1/transactions",
            json={"date": "2026-03-01", "description": "Zero", "amount": 0, "type": "debit"},
            headers=account["headers"],
        )

        self.assertEqual(res.status_code, 400)

    def test_list_is_newest_first_and_filters(self):
        account = self.register()
        self.create_transaction(account["headers"], date="2026-01-05")
        self.create_transaction(account["headers"], date="2026-03-05", type="credit", category="Income")
        self.create_transaction(account["headers"], date="2026-02-05")

        res = self.client.get("/api/v1/transactions", headers=account["headers"])
        dates = [t["date"] for t in res.json()["data"]]
        self.assertEqual(dates, ["2026-03-05", "2026-02-05", "2026-01-05"])

        res = self.client.get("/api/v1/transactions?type=credit", headers=account["headers"])
        self.assertEqual(len(res.json()["data"]), 1)

        res = self.client.get(
            "/api/v1/transactions?start_date=2026-02-01&end_date=2026-02-28",
            headers=account["headers"],
        )
        self.assertEqual([t["date"] for t in res.json()["data"]], ["2026-02-05"])

    def test_other_users_transactions_are_invisible(self):
        owner = self.register()
        other = self.register()
        transaction = self.create_transaction(owner["headers"])

        self.assertEqual(self.client.get("/api/v1/transactions", headers=other["headers"]).json()["data"], [])
        res = self.client.delete(f"/api/v1/transactions/{transaction['id']}", headers=other["headers"])
        self.assertEqual(res.status_code, 404)

    def test_deleting_account_keeps_transactions(self):
        account = self.register()
        bank = self._create_account(account["headers"])
        self.create_transaction(account["headers"], bank_account_id=bank["id"])

        res = self.client.delete(f"/api/v1/bank-accounts/{bank['id']}", headers=account["headers"])
        self.assertEqual(res.status_code, 200)

        transactions = self.client.get("/api/v1/transactions", headers=account["headers"]).json()["data"]
        self.assertEqual(len(transactions), 1)
        self.assertIsNone(transactions[0]["bank_account_id"])

    def test_type_flip_moves_balance_twice_and_refreshes_snapshot(self):
        account = self.register()
        bank = self._create_account(account["headers"])
        transaction = self.create_transaction(account["headers"], bank_account_id=bank["id"])

        res = self.client.patch(
            f"/api/v1/transactions/{transaction['id']}",
            json={"type": "credit"},
            headers=account["headers"],
        )

        self.assertEqual(res.status_code, 200)
        self.assertEqual(self._balance(account["headers"], bank["id"]), 1250.0)
        self.assertEqual(res.json()["data"]["balance"], 1250.0)
        self.assertEqual(res.json()["data"]["signed_amount"], 250.0)

    def test_null_fields_rejected_without_touching_balance(self):
        account = self.register()
        bank = self._create_account(account["headers"])
        transaction = self.create_transaction(account["headers"], bank_account_id=bank["id"])

        for field in ("amount", "type", "date", "description"):
            res = self.client.patch(
                f"/api/v1/transactions/{transaction['id']}",
                json={field: None},
                headers=account["headers"],
            )
            self.assertEqual(res.status_code, 400, field)
            self.assertEqual(res.json()["message"], f"{field} cannot be null")

        self.assertEqual(self._balance(account["headers"], bank["id"]), 750.0)

    def test_nullable_fields_can_be_cleared(self):
        account = self.register()
        transaction = self.create_transaction(account["headers"], reference="INV-7")

        res = self.client.patch(
            f"/api/v1/transactions/{transaction['id']}",
            json={"category": None, "reference": None},
            headers=account["headers"],
        )

        self.assertEqual(res.status_code, 200)
        self.assertIsNone(res.json()["data"]["category"])
        self.assertIsNone(res.json()["data"]["reference"])

    def test_null_account_name_rejected(self):
        account = self.register()
        bank = self._create_account(account["headers"])

        res = self.client.patch(
            f"/api/v1/bank-accounts/{bank['id']}",
            json={"name": None},
            headers=account["headers"],
        )

        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.json()["message"], "name cannot be null")

    def test_bulk_delete_reverts_account_balance(self):
        account = self.register()
        bank = self._create_account(account["headers"])
        self.create_transaction(account["headers"], bank_account_id=bank["id"])
        self.create_transaction(account["headers"], bank_account_id=bank["id"], type="credit", amount=100.0)
        self.assertEqual(self._balance(account["headers"], bank["id"]), 850.0)

        res = self.client.delete("/api/v1/user-data/transactions", headers=account["headers"])

        self.assertEqual(res.json()["data"], {"transactions": 2})
        self.assertEqual(self._balance(account["headers"], bank["id"]), 1000.0)


if __name__ == "__main__":
    unittest.main()
