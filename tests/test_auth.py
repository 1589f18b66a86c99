import unittest
from datetime import timedelta

from app.core.security import create_access_token
from tests.helpers import ApiTestCase, PASSWORD


class TestRegistrationAndLogin(ApiTestCase):
    def test_register_returns_user_and_token(self):
        account = self.register(name="Asha Rao", currency="usd")

        self.assertEqual(account["user"]["name"], "Asha Rao")
        self.assertEqual(account["user"]["currency"], "USD")
        self.assertNotIn("hashed_password", account["user"])
        self.assertTrue(account["token"])

    def test_duplicate_email_rejected(self):
        account = self.register()
        res = self.client.post("/api/v1/auth/register", json={
            "name": "Someone Else",
            "email": account["email"],
            "password": PASSWORD,
            "confirm_password": PASSWORD,
        })

        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.json()["message"], "Email already in use")
        self.assertFalse(res.json()["success"])

    def test_password_mismatch_is_single_validation_message(self):
        res = self.client.post("/api/v1/auth/register", json={
            "name": "Mismatch",
            "email": "mismatch@example.com",
            "password": PASSWORD,
            "confirm_password": PASSWORD + "x",
        })

        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.json()["message"], "Passwords don't match")

    def test_login_with_wrong_password(self):
        account = self.register()
        res = self.client.post("/api/v1/auth/login", json={
            "email": account["email"],
            "password": "Wrong!Pass1",
        })

        self.assertEqual(res.status_code, 401)
        self.assertEqual(res.json()["message"], "Invalid email or password")

    def test_login_is_case_insensitive_on_email(self):
        account = self.register()
        res = self.client.post("/api/v1/auth/login", json={
            "email": account["email"].upper(),
            "password": PASSWORD,
        })
        self.client.cookies.clear()

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.json()["data"]["user"]["id"], account["user"]["id"])


class TestAuthGate(ApiTestCase):
    def test_me_with_bearer_token(self):
        account = self.register()
        res = self.client.get("/api/v1/auth/me", headers=account["headers"])

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.json()["data"]["email"], account["email"])

    def test_me_with_cookie(self):
        account = self.register()
        # Login sets the access_token cookie on the client
        self.client.post("/api/v1/auth/login", json={"email": account["email"], "password": PASSWORD})
        try:
            res = self.client.get("/api/v1/auth/me")
        finally:
            self.client.cookies.clear()

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.json()["data"]["id"], account["user"]["id"])

    def test_missing_token(self):
        res = self.client.get("/api/v1/transactions")

        self.assertEqual(res.status_code, 401)
        self.assertEqual(res.json()["message"], "Authentication required")

    def test_garbage_token(self):
        res = self.client.get("/api/v1/goals", headers={"Authorization": "Bearer not-a-jwt"})

        self.assertEqual(res.status_code, 401)
        self.assertEqual(res.json()["message"], "Invalid or expired token")

    def test_expired_token(self):
        account = self.register()
        token = create_access_token({"sub": str(account["user"]["id"])}, expires_delta=timedelta(minutes=-5))
        res = self.client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})

        self.assertEqual(res.status_code, 401)
        self.assertEqual(res.json()["message"], "Invalid or expired token")

    def test_token_for_unknown_user(self):
        token = create_access_token({"sub": "987654321"})
        res = self.client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})

        self.assertEqual(res.status_code, 401)
        self.assertEqual(res.json()["message"], "User not found")

    def test_token_with_non_numeric_subject(self):
        token = create_access_token({"sub": "someone@example.com"})
        res = self.client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})

        self.assertEqual(res.status_code, 401)

    def test_profile_update_sets_salary(self):
        account = self.register()
        res = self.client.patch(
            "/api/v1/users/me",
            json={"monthly_salary": 85000, "currency": "eur"},
            headers=account["headers"],
        )

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.json()["data"]["monthly_salary"], 85000)
        self.assertEqual(res.json()["data"]["currency"], "EUR")

    def test_profile_null_name_rejected_but_salary_clearable(self):
        account = self.register()
        headers = account["headers"]
        self.client.patch("/api/v1/users/me", json={"monthly_salary": 40000}, headers=headers)

        res = self.client.patch("/api/v1/users/me", json={"name": None}, headers=headers)
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.json()["message"], "name cannot be null")

        res = self.client.patch("/api/v1/users/me", json={"monthly_salary": None}, headers=headers)
        self.assertEqual(res.status_code, 200)
        self.assertIsNone(res.json()["data"]["monthly_salary"])

    def test_logout_clears_cookie(self):
        res = self.client.post("/api/v1/auth/logout")

        self.assertEqual(res.status_code, 200)
        self.assertTrue(res.json()["success"])


if __name__ == "__main__":
    unittest.main()
